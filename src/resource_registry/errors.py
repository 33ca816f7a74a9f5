"""Exceptions raised by the registry core.

A missing sequence or resource is not an error: lookups return ``None`` and
deletes return ``False``.
"""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for all registry failures."""


class StorageUnavailableError(RegistryError):
    """Raised when the backing store cannot be reached or a transaction aborts.

    The underlying driver error is kept as ``__cause__``. The core never
    retries; retry policy belongs to the caller.
    """

    def __init__(self, message: str = "Storage unavailable") -> None:
        super().__init__(message)


class InvalidArgumentError(RegistryError, ValueError):
    """Raised for malformed input, before any storage round-trip."""


class InvalidSequenceNameError(InvalidArgumentError):
    """Raised when a sequence name is empty or exceeds the configured length."""


class DuplicateIDError(RegistryError):
    """Raised when a resource id is already present."""

    def __init__(self, resource_id: str) -> None:
        super().__init__(f"Resource {resource_id!r} already exists")
        self.resource_id = resource_id
