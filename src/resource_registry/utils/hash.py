# src/resource_registry/utils/hash.py
"""Content hashing helpers."""

from __future__ import annotations

import hashlib
from collections.abc import Callable

from blake3 import blake3

from resource_registry.core.settings import settings
from resource_registry.errors import InvalidArgumentError

SUPPORTED_ALGORITHMS: tuple[str, ...] = ("sha256", "blake3")


def sha256_hexdigest(data: bytes) -> str:
    """Return the SHA-256 hex digest of ``data``."""
    return hashlib.sha256(data).hexdigest()


def blake3_hexdigest(data: bytes) -> str:
    """Return the 32-byte BLAKE3 hex digest of ``data``."""
    return blake3(data).hexdigest()


_HASHERS: dict[str, Callable[[bytes], str]] = {
    "sha256": sha256_hexdigest,
    "blake3": blake3_hexdigest,
}


def content_hash(data: bytes, algorithm: str | None = None) -> str:
    """Return the hex digest stored in ``resources.hash`` for ``data``.

    Raises:
        InvalidArgumentError: If ``algorithm`` is not one of ``SUPPORTED_ALGORITHMS``.
    """
    algorithm = (algorithm or settings.content_hash_algorithm).lower()
    try:
        hasher = _HASHERS[algorithm]
    except KeyError:
        raise InvalidArgumentError(f"Unsupported hash algorithm: {algorithm}") from None
    return hasher(bytes(data))
