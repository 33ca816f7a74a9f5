"""Deduplicating registration of resources by content hash."""
from __future__ import annotations

import logging
from datetime import datetime

from resource_registry.core.settings import settings
from resource_registry.errors import DuplicateIDError, InvalidArgumentError
from resource_registry.schemas.resource import ResourceRecord
from resource_registry.services.id_generator import ResourceIdGenerator
from resource_registry.services.registry import ResourceRegistry
from resource_registry.utils.hash import content_hash as hash_content
from resource_registry.validation import require_non_negative, require_text

logger = logging.getLogger(__name__)


def default_bucket(now: datetime | None = None) -> str:
    """Return the month bucket (``YYYY-MM``, local time) new uploads land in."""
    return (now or datetime.now()).strftime("%Y-%m")


class ResourceService:
    """Write path used by upload handlers.

    Bytes are stored elsewhere; this only decides whether content is new and
    records it under a freshly minted id.
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        id_generator: ResourceIdGenerator,
        *,
        max_attempts: int | None = None,
    ) -> None:
        self.registry = registry
        self.id_generator = id_generator
        self.max_attempts = max_attempts or settings.register_max_attempts
        if self.max_attempts < 1:
            raise InvalidArgumentError("max_attempts must be positive")

    def register(
        self,
        content_hash: str,
        resource_size: int,
        *,
        bucket: str | None = None,
        create_time: int | None = None,
    ) -> tuple[ResourceRecord, bool]:
        """Return the existing record for ``content_hash`` or create a new one.

        Args:
            content_hash: Hex digest of the uploaded bytes.
            resource_size: Length of the uploaded bytes.
            bucket: Target bucket; defaults to the current month.
            create_time: Epoch seconds; defaults to now.

        Returns:
            ``(record, created)`` where ``created`` is False on a dedup hit.

        Raises:
            InvalidArgumentError: On an empty hash or bucket, or a negative
                size or create time. Checked before the dedup lookup.
            DuplicateIDError: If every minted id collided with an existing row.

        Notes:
            Two concurrent uploads of identical content can both miss the
            lookup and create two records; the hash column is not unique.
        """
        require_text(content_hash, "hash")
        require_non_negative(resource_size, "resource size")
        if create_time is not None:
            require_non_negative(create_time, "create time")
        if bucket is not None:
            require_text(bucket, "bucket")

        existing = self.registry.first_by_hash(content_hash)
        if existing is not None:
            logger.debug("content %s already stored as %s", content_hash, existing.id)
            return existing, False

        if bucket is None:
            bucket = default_bucket()
        attempt = 0
        while True:
            attempt += 1
            resource_id = self.id_generator.next_id()
            try:
                record = self.registry.create_resource(
                    resource_id, bucket, create_time, content_hash, resource_size
                )
            except DuplicateIDError:
                if attempt >= self.max_attempts:
                    raise
                logger.warning("minted id %s already taken; retrying", resource_id)
                continue
            return record, True

    def register_bytes(
        self,
        data: bytes,
        *,
        bucket: str | None = None,
        create_time: int | None = None,
        algorithm: str | None = None,
    ) -> tuple[ResourceRecord, bool]:
        """Hash ``data`` and :meth:`register` it."""
        if data is None:
            raise InvalidArgumentError("data is required")
        return self.register(
            hash_content(data, algorithm),
            len(data),
            bucket=bucket,
            create_time=create_time,
        )
