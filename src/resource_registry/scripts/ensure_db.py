"""Utility script to manage the configured Postgres database."""
from __future__ import annotations

import argparse
import logging
import sys
from urllib.parse import urlsplit, urlunsplit

import psycopg
from psycopg import sql

from resource_registry.core.logging import configure_logging
from resource_registry.core.settings import settings

logger = logging.getLogger(__name__)

REGISTRY_TABLES = ("resources", "id_generate")


def normalize_to_psycopg(uri: str) -> str:
    """Return a Postgres URI suitable for psycopg.connect().

    Strips quotes and whitespace and converts SQLAlchemy schemes
    (``postgresql+psycopg`` etc.) to plain ``postgresql``.
    """
    uri = (uri or "").strip()
    if len(uri) >= 2 and uri[0] == uri[-1] and uri[0] in "'\"":
        uri = uri[1:-1]
    if not uri:
        raise ValueError("DATABASE_URL is empty")

    parts = urlsplit(uri)
    scheme = parts.scheme
    if scheme.startswith("postgresql+"):
        scheme = "postgresql"
    if scheme not in ("postgresql", "postgres"):
        raise ValueError(f"Not a Postgres URL: {uri!r}")

    return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))


def split_db_url(db_url: str) -> tuple[str, str]:
    """Return ``(admin_url, target_db)`` using the maintenance database."""
    parts = urlsplit(normalize_to_psycopg(db_url))
    target_db = parts.path.lstrip("/") or "postgres"
    if parts.netloc:
        admin_url = urlunsplit((parts.scheme, parts.netloc, "/postgres", parts.query, ""))
    else:
        admin_url = "postgresql:///postgres"
    return admin_url, target_db


def ensure_database_exists(db_url: str) -> bool:
    """Create the configured database if it is missing; return True if created."""
    admin_url, target_db = split_db_url(db_url)

    with psycopg.connect(admin_url, autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target_db,))
        if cur.fetchone() is not None:
            logger.info("database %s already exists", target_db)
            return False
        cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db)))
    logger.info("created database %s", target_db)
    return True


def drop_registry_tables(db_url: str) -> None:
    """Drop the registry tables and Alembic's bookkeeping so migrations start over."""
    with psycopg.connect(normalize_to_psycopg(db_url), autocommit=True) as conn, conn.cursor() as cur:
        for table in (*REGISTRY_TABLES, "alembic_version"):
            cur.execute(sql.SQL("DROP TABLE IF EXISTS {}").format(sql.Identifier(table)))
    logger.info("dropped registry tables")


def main() -> None:
    parser = argparse.ArgumentParser(description="Ensure or reset the configured database")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop the registry tables after ensuring the database exists.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    args = parser.parse_args()

    configure_logging()
    raw_url = args.url or settings.effective_database_url
    try:
        ensure_database_exists(raw_url)
        if args.drop_tables:
            drop_registry_tables(raw_url)
    except (ValueError, psycopg.Error) as exc:
        logger.error("ensure_db failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
