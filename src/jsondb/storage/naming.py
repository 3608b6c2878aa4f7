"""Identifier rules for store and collection names."""

from __future__ import annotations


def is_name_valid(name: str) -> bool:
    """Only alphanumeric characters and underscore are allowed, and at least one of them."""
    return bool(name) and all(ch.isalnum() or ch == "_" for ch in name)
