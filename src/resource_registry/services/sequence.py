"""Sequence allocation backed by the ``id_generate`` table."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session, sessionmaker

from resource_registry.core.settings import settings
from resource_registry.db.errors import storage_guard
from resource_registry.errors import InvalidArgumentError, InvalidSequenceNameError
from resource_registry.repositories.sequence_repo import SequenceRepository

logger = logging.getLogger(__name__)

# Values seeded at initial deployment.
DEFAULT_SEQUENCES: dict[str, int] = {"image_bed": 3, "test_id": 21}


class SequenceAllocator:
    """Hands out unique, strictly increasing integers per sequence name.

    Every call runs in its own short transaction. The increment is a single
    ``INSERT .. ON CONFLICT DO UPDATE .. RETURNING`` statement, so concurrent
    callers on the same name are serialized by the row lock while different
    names never contend. Nothing is cached in process.

    A never-used name starts at 0: the first allocated value is 1 and
    :meth:`peek_current` reports 0.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        *,
        max_name_length: int | None = None,
    ) -> None:
        if session_factory is None:
            from resource_registry.db.session import SessionLocal

            session_factory = SessionLocal
        self._session_factory = session_factory
        self._max_name_length = max_name_length or settings.sequence_name_max_length

    def _check_name(self, name: str) -> str:
        if not isinstance(name, str) or not name:
            raise InvalidSequenceNameError("Sequence name must be a non-empty string")
        if len(name) > self._max_name_length:
            raise InvalidSequenceNameError(
                f"Sequence name exceeds {self._max_name_length} characters"
            )
        return name

    def allocate_next(self, name: str) -> int:
        """Atomically advance ``name`` by one and return the new value."""
        return self.allocate_block(name, 1)[-1]

    def allocate_block(self, name: str, count: int) -> range:
        """Atomically reserve ``count`` consecutive values for ``name``.

        Returns:
            The reserved values in ascending order.
        """
        self._check_name(name)
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise InvalidArgumentError("Block size must be a positive integer")

        with storage_guard("allocate sequence", name):
            with self._session_factory.begin() as session:
                last = SequenceRepository(session).advance(name, count)

        logger.debug("allocated %s..%s for sequence %s", last - count + 1, last, name)
        return range(last - count + 1, last + 1)

    def peek_current(self, name: str) -> int:
        """Return the last issued value for ``name`` without changing it (0 if unused)."""
        self._check_name(name)
        with storage_guard("peek sequence", name):
            with self._session_factory() as session:
                current = SequenceRepository(session).current(name)
        return int(current) if current is not None else 0

    def seed(self, name: str, value: int) -> int:
        """Create ``name`` at ``value`` if it does not exist yet.

        Existing counters are never moved backwards or forwards.

        Returns:
            The counter's current value after the call.
        """
        self._check_name(name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidArgumentError("Seed value must be a non-negative integer")

        with storage_guard("seed sequence", name):
            with self._session_factory.begin() as session:
                current = SequenceRepository(session).insert_if_absent(name, value)

        if current != value:
            logger.info("sequence %s already at %s; seed %s ignored", name, current, value)
        return current

    def seed_defaults(self) -> dict[str, int]:
        """Seed the sequences every deployment starts with."""
        return {name: self.seed(name, value) for name, value in DEFAULT_SEQUENCES.items()}
