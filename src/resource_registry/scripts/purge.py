"""
Cron job removing expired resource records.

Prints the id and bucket of every removed record, one per line, so the blob
store entries can be deleted by the caller's pipeline.
"""
from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence

from resource_registry.core.logging import configure_logging
from resource_registry.errors import RegistryError
from resource_registry.services.registry import ResourceRegistry

SECONDS_PER_DAY = 86_400


def run(
    argv: Sequence[str] | None = None,
    registry: ResourceRegistry | None = None,
    now: int | None = None,
) -> int:
    parser = argparse.ArgumentParser(description="Delete resources older than a cutoff")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--days", type=int, help="Delete records older than this many days")
    group.add_argument("--before", type=int, help="Delete records created at or before this epoch second")
    args = parser.parse_args(argv)
    if args.days is not None and args.days < 0:
        parser.error("--days must not be negative")

    if args.before is not None:
        cutoff = args.before
    else:
        cutoff = (int(time.time()) if now is None else now) - args.days * SECONDS_PER_DAY

    registry = registry or ResourceRegistry()
    try:
        removed = registry.purge_created_before(cutoff)
    except RegistryError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    for record in removed:
        print(f"{record.bucket}\t{record.id}")
    return 0


def main() -> None:
    configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
