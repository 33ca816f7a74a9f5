"""Named counters used to mint resource identifiers."""

from sqlalchemy import BigInteger, PrimaryKeyConstraint, Text
from sqlalchemy.orm import Mapped, mapped_column

from resource_registry.db.session import Base


class IdSequence(Base):
    """Last value issued for one counter namespace (``id_type``).

    Rows are created on first allocation (base 0) or by an explicit seed and
    are only ever advanced by the allocator.
    """

    __tablename__ = "id_generate"

    id_type: Mapped[str] = mapped_column(Text, nullable=False)
    id_value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    __table_args__ = (PrimaryKeyConstraint("id_type", name="id_generate_pk"),)
