"""Database engine and session configuration."""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from resource_registry.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import resource_registry.models  # noqa: E402,F401


def make_engine(url: str | None = None, *, echo: bool | None = None) -> Engine:
    """Create an engine for ``url`` (defaults to the configured database)."""
    url = url or settings.effective_database_url
    kwargs: dict[str, Any] = {
        "pool_pre_ping": True,
        "echo": settings.sql_debug if echo is None else echo,
    }
    if url.startswith("sqlite"):
        # Connections are shared across worker threads; writers wait on the file lock.
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
    else:
        kwargs["pool_size"] = settings.db_pool_size
        kwargs["max_overflow"] = settings.db_max_overflow
    return create_engine(url, **kwargs)


def make_session_factory(bind: Engine) -> sessionmaker[Session]:
    """Return a session factory whose objects stay readable after commit."""
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


engine = make_engine()

SessionLocal = make_session_factory(engine)


def create_tables(bind: Engine | None = None) -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=bind or engine)

