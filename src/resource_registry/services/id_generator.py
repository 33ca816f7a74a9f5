"""Mint resource identifiers from blocks of sequence values."""

from __future__ import annotations

import hashlib
import threading
from collections import deque
from collections.abc import Callable

from resource_registry.core.settings import settings
from resource_registry.services.sequence import SequenceAllocator

IdFormatter = Callable[[int], str]


def prefixed_id(prefix: str) -> IdFormatter:
    """Format values as ``"<prefix>_<value>"`` (e.g. ``img_4``)."""

    def _format(value: int) -> str:
        return f"{prefix}_{value}"

    return _format


def digest_id(length: int = 10) -> IdFormatter:
    """Format values as the first ``length`` hex chars of MD5(value as 8 bytes, big-endian).

    Identifiers look random while staying unique for every value below the
    collision bound of the truncated digest.
    """
    if not 1 <= length <= 32:
        raise ValueError("digest length must be between 1 and 32")

    def _format(value: int) -> str:
        digest = hashlib.md5(value.to_bytes(8, "big", signed=True), usedforsecurity=False)
        return digest.hexdigest()[:length]

    return _format


def formatter_from_settings() -> IdFormatter:
    if settings.resource_id_format == "prefixed":
        return prefixed_id(settings.resource_id_prefix)
    return digest_id(settings.resource_id_digest_length)


class ResourceIdGenerator:
    """Thread-safe source of resource ids.

    Values are reserved ``step`` at a time with a single durable allocation,
    then handed out from memory. A process that exits with unused values in
    its block leaves a gap; a value is never issued twice.
    """

    def __init__(
        self,
        allocator: SequenceAllocator,
        sequence_name: str | None = None,
        *,
        step: int | None = None,
        formatter: IdFormatter | None = None,
    ) -> None:
        self._allocator = allocator
        self.sequence_name = sequence_name or settings.resource_id_sequence
        self.step = step or settings.resource_id_step
        self._format = formatter or formatter_from_settings()
        self._pending: deque[int] = deque()
        self._lock = threading.Lock()

    def next_value(self) -> int:
        """Return the next reserved sequence value."""
        with self._lock:
            if not self._pending:
                self._pending.extend(self._allocator.allocate_block(self.sequence_name, self.step))
            return self._pending.popleft()

    def next_id(self) -> str:
        """Return the next formatted resource id."""
        return self._format(self.next_value())
