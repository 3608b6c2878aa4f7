"""Error kinds raised by jsondb.

Domain problems are raised as ``JsonDbError`` subclasses. Filesystem and JSON
codec failures are never wrapped: they surface as the original ``OSError`` or
``json.JSONDecodeError`` so callers can tell bad input from a broken
environment.
"""

from __future__ import annotations

import json
from enum import Enum


class ErrorKind(Enum):
    """Custom error kinds produced by the library."""

    INVALID_ARGUMENT = "invalid_argument"
    DB_IO = "db_io"
    JSON = "json"


class JsonDbError(Exception):
    """Base class for library errors."""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, cause: str) -> None:
        super().__init__(cause)
        self.cause = cause

    def __str__(self) -> str:
        return f"Library error: {self.cause}"


class InvalidArgumentError(JsonDbError):
    """Illegal name, malformed pointer or unusable persistence path."""

    kind = ErrorKind.INVALID_ARGUMENT


class StoreIoError(JsonDbError):
    """Store directory missing, already present or structurally corrupted."""

    kind = ErrorKind.DB_IO


class JsonStructureError(JsonDbError):
    """A document cannot host the requested structural change."""

    kind = ErrorKind.JSON


def describe_error(exc: BaseException) -> str:
    """One-line description used by the CLI."""
    if isinstance(exc, JsonDbError):
        return str(exc)
    if isinstance(exc, OSError):
        return f"I/O error: {exc}"
    if isinstance(exc, (json.JSONDecodeError, KeyError)):
        return f"Serde error: {exc}"
    return f"Error: {exc}"
