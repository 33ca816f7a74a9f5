"""SQLAlchemy model for stored resource metadata."""

from sqlalchemy import BigInteger, Index, PrimaryKeyConstraint, Text
from sqlalchemy.orm import Mapped, mapped_column

from resource_registry.db.session import Base


class Resource(Base):
    """Metadata for an object whose bytes live in an external blob store.

    Rows are immutable once inserted; the only transitions are insert and
    delete.
    """

    __tablename__ = "resources"

    id: Mapped[str] = mapped_column(Text, nullable=False, comment="resource id")
    bucket: Mapped[str] = mapped_column(Text, nullable=False, comment="resource bucket")
    # Unix epoch seconds.
    create_time: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="resource create time",
    )
    # Hex digest of the object bytes; intentionally not unique.
    hash: Mapped[str] = mapped_column(Text, nullable=False, comment="resource hash")
    resource_size: Mapped[int] = mapped_column(BigInteger, nullable=False)

    __table_args__ = (
        PrimaryKeyConstraint("id", name="resources_pk"),
        Index("ix_resources_hash_create_time", "hash", "create_time"),
        Index("ix_resources_bucket_create_time", "bucket", "create_time", "id"),
    )
