"""Database configuration and utilities."""

from .session import Base, SessionLocal, create_tables, engine, make_engine, make_session_factory

__all__ = ["Base", "SessionLocal", "create_tables", "engine", "make_engine", "make_session_factory"]
