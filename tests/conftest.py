# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from resource_registry.db.session import create_tables, make_engine, make_session_factory
from resource_registry.services.id_generator import ResourceIdGenerator, prefixed_id
from resource_registry.services.registry import ResourceRegistry
from resource_registry.services.resource_service import ResourceService
from resource_registry.services.sequence import SequenceAllocator


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    """File-backed SQLite so several connections (threads) share one database."""
    return f"sqlite:///{tmp_path / 'registry.db'}"


@pytest.fixture()
def engine(db_url: str) -> Iterator[Engine]:
    engine = make_engine(db_url, echo=False)
    create_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return make_session_factory(engine)


@pytest.fixture()
def allocator(session_factory: sessionmaker[Session]) -> SequenceAllocator:
    return SequenceAllocator(session_factory)


@pytest.fixture()
def seeded_allocator(allocator: SequenceAllocator) -> SequenceAllocator:
    """Allocator over a database holding the initial deployment rows."""
    allocator.seed_defaults()
    return allocator


@pytest.fixture()
def registry(session_factory: sessionmaker[Session]) -> ResourceRegistry:
    return ResourceRegistry(session_factory)


@pytest.fixture()
def id_generator(seeded_allocator: SequenceAllocator) -> ResourceIdGenerator:
    return ResourceIdGenerator(seeded_allocator, "image_bed", step=10, formatter=prefixed_id("img"))


@pytest.fixture()
def resource_service(
    registry: ResourceRegistry, id_generator: ResourceIdGenerator
) -> ResourceService:
    return ResourceService(registry, id_generator, max_attempts=3)


@pytest.fixture()
def unmigrated_session_factory(tmp_path: Path) -> Iterator[sessionmaker[Session]]:
    """Session factory for a database whose tables were never created."""
    engine = make_engine(f"sqlite:///{tmp_path / 'empty.db'}", echo=False)
    try:
        yield make_session_factory(engine)
    finally:
        engine.dispose()
