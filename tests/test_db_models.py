"""Unit tests for the ORM table layout.

The column names, types and primary key constraint names must match the
deployed Postgres schema exactly.
"""

from sqlalchemy import BigInteger, Text, inspect

from resource_registry.models import IdSequence, Resource


def test_table_names():
    assert IdSequence.__tablename__ == "id_generate"
    assert Resource.__tablename__ == "resources"


def test_id_generate_columns():
    table = IdSequence.__table__
    assert [c.name for c in table.columns] == ["id_type", "id_value"]
    assert isinstance(table.c.id_type.type, Text)
    assert isinstance(table.c.id_value.type, BigInteger)
    assert all(not c.nullable for c in table.columns)
    assert table.primary_key.name == "id_generate_pk"
    assert {c.name for c in table.primary_key} == {"id_type"}


def test_resources_columns():
    table = Resource.__table__
    assert [c.name for c in table.columns] == [
        "id",
        "bucket",
        "create_time",
        "hash",
        "resource_size",
    ]
    for name in ("id", "bucket", "hash"):
        assert isinstance(table.c[name].type, Text)
    for name in ("create_time", "resource_size"):
        assert isinstance(table.c[name].type, BigInteger)
    assert all(not c.nullable for c in table.columns)
    assert table.primary_key.name == "resources_pk"
    assert {c.name for c in table.primary_key} == {"id"}


def test_hash_is_not_unique(engine):
    """Duplicate hashes are structurally allowed."""
    inspector = inspect(engine)
    unique_columns = {
        tuple(constraint["column_names"])
        for constraint in inspector.get_unique_constraints("resources")
    }
    unique_indexes = {
        tuple(index["column_names"])
        for index in inspector.get_indexes("resources")
        if index["unique"]
    }
    assert ("hash",) not in unique_columns | unique_indexes
