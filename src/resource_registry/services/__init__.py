# src/resource_registry/services/__init__.py
"""Business logic services for the resource registry."""

from .id_generator import ResourceIdGenerator, digest_id, prefixed_id
from .registry import ResourceRegistry, ResourceStream
from .resource_service import ResourceService, default_bucket
from .sequence import SequenceAllocator

__all__ = [
    "ResourceIdGenerator", "digest_id", "prefixed_id",
    "ResourceRegistry", "ResourceStream",
    "ResourceService", "default_bucket",
    "SequenceAllocator",
]
