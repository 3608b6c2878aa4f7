"""JSON Pointer helpers for in-memory documents.

A pointer (RFC 6901) is either empty, denoting the whole document, or a
sequence of ``/token`` segments where ``~1`` stands for ``/`` and ``~0`` for
``~``. On top of plain lookup this module computes the *complement* of a
pointer: the trailing part that does not resolve inside a document, together
with the deepest node that does (the *anchor*). ``incorporate_into`` uses the
complement to graft a new subtree exactly where resolution stopped.

Example::

    >>> doc = {"a": {"b": 1}}
    >>> pointer_complement(doc, "/a/c/d")
    Complement(complement='/c/d', anchor={'b': 1})
    >>> incorporate_into(doc, "/a/c/d", 42)
    >>> doc
    {'a': {'b': 1, 'c': {'d': 42}}}
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple

from jsondb.errors import InvalidArgumentError, JsonStructureError

logger = logging.getLogger(__name__)

_MISSING = object()


class Complement(NamedTuple):
    """Unresolved pointer suffix and the deepest node that was resolved."""

    complement: str
    anchor: Any


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def _parse_index(token: str) -> int | None:
    """Array index per RFC 6901: decimal digits, no sign, no leading zero."""
    if not token.isascii() or not token.isdigit():
        return None
    if token.startswith("0") and len(token) != 1:
        return None
    return int(token)


def _lookup(node: Any, pointer: str) -> Any:
    """Plain pointer lookup; returns ``_MISSING`` instead of raising."""
    if not pointer:
        return node
    if not pointer.startswith("/"):
        return _MISSING
    for raw in pointer.split("/")[1:]:
        token = _unescape(raw)
        if isinstance(node, dict):
            if token not in node:
                return _MISSING
            node = node[token]
        elif isinstance(node, list):
            index = _parse_index(token)
            if index is None or index >= len(node):
                return _MISSING
            node = node[index]
        else:
            return _MISSING
    return node


def _check_syntax(pointer: str) -> None:
    if pointer and not pointer.startswith("/"):
        raise InvalidArgumentError(f"Pointer '{pointer}' does not have valid syntax")


def resolve_pointer(document: Any, pointer: str) -> Any:
    """Return the node ``pointer`` denotes inside ``document``.

    Raises ``JsonStructureError`` when the pointer does not resolve.
    """
    _check_syntax(pointer)
    node = _lookup(document, pointer)
    if node is _MISSING:
        raise JsonStructureError(f"Pointer '{pointer}' does not exist")
    return node


def pointer_complement(document: Any, pointer: str) -> Complement:
    """Find the part of ``pointer`` that does not resolve inside ``document``.

    Tokens are matched one at a time against the current anchor; the walk
    stops at the first token that does not resolve. A pointer that resolves
    completely yields an empty complement, one whose first token already
    fails yields the pointer itself anchored at the document root.

    >>> john = {"name": "John", "cars": [{"inspection": {"date": "2020-01-05"}}]}
    >>> complement, anchor = pointer_complement(john, "/cars/0/inspection/mandatory")
    >>> complement
    '/mandatory'
    >>> anchor
    {'date': '2020-01-05'}
    """
    _check_syntax(pointer)
    complement, anchor = pointer, document
    if not pointer:
        return Complement(complement, anchor)

    for token in pointer.split("/")[1:]:
        step = "/" + token
        child = _lookup(anchor, step)
        if child is _MISSING:
            break
        complement = complement[len(step):]
        anchor = child
    return Complement(complement, anchor)


def pointer_complement_mut(document: Any, pointer: str) -> Complement:
    """Like ``pointer_complement``, but the anchor is fetched for mutation.

    The complement is measured first; the anchor is then looked up afresh by
    resolving the consumed prefix ``pointer[:len(pointer) - len(complement)]``
    from the document root. Two traversals instead of one.
    """
    complement, _ = pointer_complement(document, pointer)
    prefix = pointer[: len(pointer) - len(complement)]
    anchor = _lookup(document, prefix)
    if anchor is _MISSING:
        raise RuntimeError(f"Resolved prefix '{prefix}' of '{pointer}' vanished on re-traversal")
    return Complement(complement, anchor)


def wrap_value(tokens: list[str], value: Any) -> Any:
    """Nest ``value`` in single-key objects, the last token innermost.

    >>> wrap_value(["a", "b"], 1)
    {'a': {'b': 1}}
    """
    for token in reversed(tokens):
        value = {token: value}
    return value


def incorporate_into(document: Any, pointer: str, value: Any) -> None:
    """Graft ``value`` into ``document`` at ``pointer``.

    Missing intermediate objects are synthesized from the complement. Existing
    keys and array items are never replaced: a pointer that already resolves
    is an error. When the anchor is an array the wrapped value is appended,
    regardless of any index the complement names.
    """
    complement, anchor = pointer_complement_mut(document, pointer)
    if not complement:
        raise JsonStructureError(f"Pointer '{pointer}' already exists")

    tokens = [_unescape(token) for token in complement.split("/")[1:]]

    if isinstance(anchor, dict):
        anchor[tokens[0]] = wrap_value(tokens[1:], value)
    elif isinstance(anchor, list):
        anchor.append(wrap_value(tokens, value))
    else:
        prefix = pointer[: len(pointer) - len(complement)]
        raise JsonStructureError(
            f"Cannot incorporate since the value pointed by '{prefix}' is neither an array nor object"
        )
    logger.debug("Incorporated value at %s (complement %s)", pointer, complement)
