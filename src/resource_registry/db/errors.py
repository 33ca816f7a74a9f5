"""Translation of driver failures into registry errors."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from resource_registry.errors import StorageUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def storage_guard(operation: str, key: object) -> Iterator[None]:
    """Re-raise database and pool failures as ``StorageUnavailableError``.

    Callers that need to react to a specific driver error (e.g. a primary key
    violation) must catch it inside the guarded block.
    """
    try:
        yield
    except (DBAPIError, PoolTimeoutError) as exc:
        logger.error("%s %r failed: %s", operation, key, exc)
        raise StorageUnavailableError(f"{operation} {key!r} failed") from exc
