"""Resource registry: create, look up and delete immutable resource records."""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Callable, Iterable, Iterator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from resource_registry.core.settings import settings
from resource_registry.db.errors import storage_guard
from resource_registry.db.time import epoch_seconds
from resource_registry.errors import DuplicateIDError, InvalidArgumentError
from resource_registry.models.resource import Resource
from resource_registry.repositories.resource_repo import Position, ResourceRepository
from resource_registry.schemas.resource import ResourcePage, ResourceRecord
from resource_registry.validation import require_non_negative, require_text

logger = logging.getLogger(__name__)

PageFetcher = Callable[[ResourceRepository, Position | None, int], list[Resource]]


def encode_cursor(position: Position) -> str:
    """Return an opaque cursor for ``(create_time, id)``."""
    create_time, resource_id = position
    raw = f"{create_time}:{resource_id}".encode()
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_cursor(cursor: str) -> Position:
    """Inverse of :func:`encode_cursor`; raises ``InvalidArgumentError`` on garbage."""
    padding = "=" * (-len(cursor) % 4)
    try:
        raw = base64.urlsafe_b64decode(cursor + padding).decode()
        create_time, resource_id = raw.split(":", 1)
        position = (int(create_time), resource_id)
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise InvalidArgumentError("Malformed pagination cursor") from exc
    if position[0] < 0 or not position[1]:
        raise InvalidArgumentError("Malformed pagination cursor")
    return position


class ResourceStream(Iterable[ResourceRecord]):
    """Lazy, finite and restartable sequence of resources.

    Rows are fetched in keyset batches, each in its own short transaction, so
    iterating never pins a connection between batches. Every new iteration
    starts again from the beginning.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        fetch_page: PageFetcher,
        *,
        description: str,
        batch_size: int = 100,
    ) -> None:
        self._session_factory = session_factory
        self._fetch_page = fetch_page
        self._description = description
        self._batch_size = batch_size

    def __iter__(self) -> Iterator[ResourceRecord]:
        after: Position | None = None
        while True:
            with storage_guard("scan resources", self._description):
                with self._session_factory() as session:
                    rows = self._fetch_page(ResourceRepository(session), after, self._batch_size)
                    batch = [ResourceRecord.from_model(row) for row in rows]
            yield from batch
            if len(batch) < self._batch_size:
                return
            last = batch[-1]
            after = (last.create_time, last.id)

    def __repr__(self) -> str:
        return f"ResourceStream({self._description!r})"


class ResourceRegistry:
    """Operations over the ``resources`` table.

    Records are immutable: there is no update path, a correction is a delete
    followed by a create. Missing records are reported as ``None`` (lookups)
    or ``False`` (deletes) rather than raised.
    """

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        if session_factory is None:
            from resource_registry.db.session import SessionLocal

            session_factory = SessionLocal
        self._session_factory = session_factory

    def create_resource(
        self,
        resource_id: str,
        bucket: str,
        create_time: int | None,
        content_hash: str,
        resource_size: int,
    ) -> ResourceRecord:
        """Insert a new record.

        Args:
            resource_id: Globally unique identifier, usually minted from a sequence.
            bucket: Free-form grouping label.
            create_time: Unix epoch seconds; ``None`` stamps the current time.
            content_hash: Hex digest of the object bytes.
            resource_size: Object length in bytes.

        Raises:
            InvalidArgumentError: On empty strings or negative numbers.
            DuplicateIDError: If ``resource_id`` is already present; the stored
                record is left untouched.
            StorageUnavailableError: If the store cannot be reached.
        """
        require_text(resource_id, "resource id")
        require_text(bucket, "bucket")
        require_text(content_hash, "hash")
        require_non_negative(resource_size, "resource size")
        if create_time is None:
            create_time = epoch_seconds()
        require_non_negative(create_time, "create time")

        with storage_guard("insert resource", resource_id):
            try:
                with self._session_factory.begin() as session:
                    resource = ResourceRepository(session).create(
                        resource_id=resource_id,
                        bucket=bucket,
                        create_time=create_time,
                        content_hash=content_hash,
                        resource_size=resource_size,
                    )
                    record = ResourceRecord.from_model(resource)
            except IntegrityError as exc:
                logger.info("resource %s already exists", resource_id)
                raise DuplicateIDError(resource_id) from exc

        logger.debug("created resource %s in bucket %s", resource_id, bucket)
        return record

    def get_by_id(self, resource_id: str) -> ResourceRecord | None:
        """Return the record for ``resource_id`` or None."""
        require_text(resource_id, "resource id")
        with storage_guard("get resource by id", resource_id):
            with self._session_factory() as session:
                resource = ResourceRepository(session).get_by_id(resource_id)
                return ResourceRecord.from_model(resource) if resource is not None else None

    def first_by_hash(self, content_hash: str) -> ResourceRecord | None:
        """Return the oldest record carrying ``content_hash`` or None."""
        require_text(content_hash, "hash")
        with storage_guard("get resource by hash", content_hash):
            with self._session_factory() as session:
                resource = ResourceRepository(session).first_by_hash(content_hash)
                return ResourceRecord.from_model(resource) if resource is not None else None

    def find_by_hash(self, content_hash: str, *, batch_size: int = 100) -> ResourceStream:
        """Return every record with ``content_hash``, oldest first (ties by id)."""
        require_text(content_hash, "hash")
        if batch_size < 1:
            raise InvalidArgumentError("batch size must be positive")

        def fetch(repo: ResourceRepository, after: Position | None, limit: int) -> list[Resource]:
            return repo.page_by_hash(content_hash, after, limit)

        return ResourceStream(
            self._session_factory,
            fetch,
            description=f"hash={content_hash}",
            batch_size=batch_size,
        )

    def list_by_bucket(
        self,
        bucket: str,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> ResourcePage:
        """Return one page of ``bucket`` ordered by ``(create_time, id)``.

        Pass the returned ``next_cursor`` back to fetch the following page.
        """
        require_text(bucket, "bucket")
        limit = settings.default_page_size if limit is None else limit
        if (
            isinstance(limit, bool)
            or not isinstance(limit, int)
            or not 1 <= limit <= settings.max_page_size
        ):
            raise InvalidArgumentError(f"limit must be between 1 and {settings.max_page_size}")
        after = decode_cursor(cursor) if cursor else None

        with storage_guard("list resources in bucket", bucket):
            with self._session_factory() as session:
                rows = ResourceRepository(session).page_by_bucket(bucket, after, limit + 1)
                items = [ResourceRecord.from_model(row) for row in rows]

        next_cursor = None
        if len(items) > limit:
            items = items[:limit]
            next_cursor = encode_cursor((items[-1].create_time, items[-1].id))
        return ResourcePage(items=items, next_cursor=next_cursor)

    def delete_by_id(self, resource_id: str) -> bool:
        """Delete ``resource_id``; return False if it was not present."""
        require_text(resource_id, "resource id")
        with storage_guard("delete resource", resource_id):
            with self._session_factory.begin() as session:
                deleted = ResourceRepository(session).delete_by_id(resource_id)
        if deleted:
            logger.info("deleted resource %s", resource_id)
        return deleted

    def purge_created_before(self, timestamp: int) -> list[ResourceRecord]:
        """Delete every record with ``create_time <= timestamp``.

        Returns:
            The removed records, oldest first, so the caller can drop the
            corresponding blobs.
        """
        require_non_negative(timestamp, "timestamp")
        with storage_guard("purge resources before", timestamp):
            with self._session_factory.begin() as session:
                rows = ResourceRepository(session).delete_created_before(timestamp)
        records = [ResourceRecord.model_validate(dict(row._mapping)) for row in rows]
        if records:
            logger.info("purged %d resources created at or before %d", len(records), timestamp)
        return records
