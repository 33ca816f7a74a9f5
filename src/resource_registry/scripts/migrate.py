# src/resource_registry/scripts/migrate.py
from __future__ import annotations

import argparse
import os

from alembic import command
from alembic.config import Config

from resource_registry.core.logging import configure_logging
from resource_registry.core.settings import settings

MIGRATIONS_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")
)


def build_config(url: str | None = None) -> Config:
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    cfg.set_main_option("sqlalchemy.url", url or settings.database_url_sync)
    return cfg


def run_upgrade(revision: str = "head", url: str | None = None) -> None:
    command.upgrade(build_config(url), revision)


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply registry schema migrations")
    parser.add_argument("revision", nargs="?", default="head", help="Target revision")
    parser.add_argument("--url", default=None, help="Override database URL")
    args = parser.parse_args()

    configure_logging()
    run_upgrade(args.revision, args.url)


if __name__ == "__main__":
    main()
