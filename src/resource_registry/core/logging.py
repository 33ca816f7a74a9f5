"""Logging setup shared by the command line entry points."""

from __future__ import annotations

import logging

from resource_registry.core.settings import settings


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts.

    Library code only ever uses module-level loggers; handlers are attached
    here so embedding applications keep control of their own output.
    """
    log_level = (level or settings.log_level).upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not settings.sql_debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
