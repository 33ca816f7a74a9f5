"""Data access helpers for working with resource records."""
from __future__ import annotations

from sqlalchemy import ColumnElement, and_, delete, or_, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from resource_registry.models.resource import Resource

__all__ = ["ResourceRepository", "Position"]

# (create_time, id) of the last row seen; keyset pagination resumes after it.
Position = tuple[int, str]


class ResourceRepository:
    """Thin wrapper around database access for resource rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, resource_id: str) -> Resource | None:
        """Return a resource by identifier."""
        return self.session.get(Resource, resource_id)

    def first_by_hash(self, content_hash: str) -> Resource | None:
        """Return the oldest resource carrying ``content_hash``."""
        return self.session.scalars(
            select(Resource)
            .where(Resource.hash == content_hash)
            .order_by(Resource.create_time.asc(), Resource.id.asc())
            .limit(1)
        ).first()

    def page_by_hash(
        self, content_hash: str, after: Position | None, limit: int
    ) -> list[Resource]:
        """Return up to ``limit`` resources with ``content_hash`` following ``after``."""
        return self._page(Resource.hash == content_hash, after, limit)

    def page_by_bucket(self, bucket: str, after: Position | None, limit: int) -> list[Resource]:
        """Return up to ``limit`` resources in ``bucket`` following ``after``."""
        return self._page(Resource.bucket == bucket, after, limit)

    def _page(
        self, criterion: ColumnElement[bool], after: Position | None, limit: int
    ) -> list[Resource]:
        stmt = select(Resource).where(criterion)
        if after is not None:
            create_time, resource_id = after
            stmt = stmt.where(
                or_(
                    Resource.create_time > create_time,
                    and_(Resource.create_time == create_time, Resource.id > resource_id),
                )
            )
        stmt = stmt.order_by(Resource.create_time.asc(), Resource.id.asc()).limit(limit)
        return list(self.session.scalars(stmt))

    def create(
        self,
        *,
        resource_id: str,
        bucket: str,
        create_time: int,
        content_hash: str,
        resource_size: int,
    ) -> Resource:
        """Insert a new resource and return the persisted ORM instance.

        A duplicate ``resource_id`` surfaces as ``IntegrityError`` on flush.
        """
        resource = Resource(
            id=resource_id,
            bucket=bucket,
            create_time=create_time,
            hash=content_hash,
            resource_size=resource_size,
        )
        self.session.add(resource)
        self.session.flush()
        return resource

    def delete_by_id(self, resource_id: str) -> bool:
        """Delete a resource; return True if a row was removed."""
        result = self.session.execute(
            delete(Resource).where(Resource.id == resource_id),
            execution_options={"synchronize_session": False},
        )
        return bool(result.rowcount)

    def delete_created_before(self, timestamp: int) -> list[Row]:
        """Delete every resource created at or before ``timestamp`` and return the rows."""
        table = Resource.__table__
        result = self.session.execute(
            delete(table).where(table.c.create_time <= timestamp).returning(*table.c)
        )
        rows = list(result)
        rows.sort(key=lambda row: (row.create_time, row.id))
        return rows
