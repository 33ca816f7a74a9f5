"""Argument checks applied before any storage round-trip."""

from __future__ import annotations

from resource_registry.errors import InvalidArgumentError


def require_text(value: str, field: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f"{field} must be a non-empty string")
    return value


def require_non_negative(value: int, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgumentError(f"{field} must be a non-negative integer")
    return value
