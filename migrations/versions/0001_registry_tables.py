"""registry tables

Revision ID: 0001_registry_tables
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_registry_tables"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SEED_SEQUENCES = [
    {"id_type": "image_bed", "id_value": 3},
    {"id_type": "test_id", "id_value": 21},
]


def upgrade() -> None:
    """Create the counter and resource tables and seed the counters."""
    id_generate = op.create_table(
        "id_generate",
        sa.Column("id_type", sa.Text(), nullable=False),
        sa.Column("id_value", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id_type", name="id_generate_pk"),
    )
    op.create_table(
        "resources",
        sa.Column("id", sa.Text(), nullable=False, comment="resource id"),
        sa.Column("bucket", sa.Text(), nullable=False, comment="resource bucket"),
        sa.Column("create_time", sa.BigInteger(), nullable=False, comment="resource create time"),
        sa.Column("hash", sa.Text(), nullable=False, comment="resource hash"),
        sa.Column("resource_size", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="resources_pk"),
    )
    op.create_index("ix_resources_hash_create_time", "resources", ["hash", "create_time"])
    op.create_index(
        "ix_resources_bucket_create_time", "resources", ["bucket", "create_time", "id"]
    )

    op.bulk_insert(id_generate, SEED_SEQUENCES)


def downgrade() -> None:
    """Drop the registry tables."""
    op.drop_index("ix_resources_bucket_create_time", table_name="resources")
    op.drop_index("ix_resources_hash_create_time", table_name="resources")
    op.drop_table("resources")
    op.drop_table("id_generate")
