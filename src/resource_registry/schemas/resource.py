"""Immutable resource records returned by the registry."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from resource_registry.models.resource import Resource


class ResourceRecord(BaseModel):
    """Detached, read-only view of a ``resources`` row."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str = Field(..., min_length=1)
    bucket: str
    create_time: int = Field(..., ge=0, description="Unix epoch seconds")
    hash: str
    resource_size: int = Field(..., ge=0)

    @property
    def created_at(self) -> datetime:
        """Creation time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.create_time, UTC)

    @classmethod
    def from_model(cls, resource: Resource) -> ResourceRecord:
        return cls.model_validate(resource)


class ResourcePage(BaseModel):
    """One page of a cursor-paginated listing."""

    model_config = ConfigDict(frozen=True)

    items: list[ResourceRecord] = Field(default_factory=list)
    next_cursor: str | None = Field(
        default=None,
        description="Opaque cursor for the following page; None on the last page",
    )

    @property
    def has_more(self) -> bool:
        """Whether another page follows this one."""
        return self.next_cursor is not None
