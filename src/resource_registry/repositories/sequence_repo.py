"""Data access helpers for the ``id_generate`` counter table."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from resource_registry.models.sequence import IdSequence

__all__ = ["SequenceRepository"]

_UPSERT_DIALECTS = frozenset({"postgresql", "sqlite"})


def _dialect_insert(dialect_name: str):
    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    else:
        from sqlalchemy.dialects.sqlite import insert
    return insert


class SequenceRepository:
    """Thin wrapper around the counter rows.

    All writes are single statements so that the row lock is held only for
    the duration of the surrounding transaction.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @property
    def _dialect_name(self) -> str:
        return self.session.get_bind().dialect.name

    def current(self, id_type: str) -> int | None:
        """Return the last issued value, or None if the row does not exist."""
        return self.session.scalar(
            select(IdSequence.id_value).where(IdSequence.id_type == id_type)
        )

    def advance(self, id_type: str, count: int) -> int:
        """Add ``count`` to the counter (creating it at 0) and return the new value."""
        if self._dialect_name not in _UPSERT_DIALECTS:
            return self._advance_locked(id_type, count)

        table = IdSequence.__table__
        insert = _dialect_insert(self._dialect_name)
        stmt = (
            insert(table)
            .values(id_type=id_type, id_value=count)
            .on_conflict_do_update(
                index_elements=[table.c.id_type],
                set_={"id_value": table.c.id_value + count},
            )
            .returning(table.c.id_value)
        )
        return int(self.session.execute(stmt).scalar_one())

    def _advance_locked(self, id_type: str, count: int) -> int:
        # Fallback for dialects without INSERT .. ON CONFLICT.
        row = self.session.scalars(
            select(IdSequence).where(IdSequence.id_type == id_type).with_for_update()
        ).first()
        if row is None:
            row = IdSequence(id_type=id_type, id_value=count)
            self.session.add(row)
        else:
            row.id_value = int(row.id_value) + count
        self.session.flush()
        return int(row.id_value)

    def insert_if_absent(self, id_type: str, value: int) -> int:
        """Create the counter at ``value`` unless it exists; return the stored value."""
        if self._dialect_name in _UPSERT_DIALECTS:
            insert = _dialect_insert(self._dialect_name)
            self.session.execute(
                insert(IdSequence.__table__)
                .values(id_type=id_type, id_value=value)
                .on_conflict_do_nothing(index_elements=[IdSequence.__table__.c.id_type])
            )
        elif self.current(id_type) is None:
            self.session.add(IdSequence(id_type=id_type, id_value=value))
            self.session.flush()
        current = self.current(id_type)
        return int(current) if current is not None else value
