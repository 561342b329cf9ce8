"""String guards used by merge and codec logic."""

from __future__ import annotations


def is_empty(value: str | None) -> bool:
    return value is None or len(value) == 0


def is_not_empty(value: str | None) -> bool:
    return not is_empty(value)


def is_blank(value: str | None) -> bool:
    """True for ``None``, ``""`` and whitespace-only strings."""
    return value is None or value.strip() == ""


def is_not_blank(value: str | None) -> bool:
    return not is_blank(value)
