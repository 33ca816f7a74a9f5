"""Operator commands for inspecting and seeding id sequences."""
from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from resource_registry.core.logging import configure_logging
from resource_registry.errors import RegistryError
from resource_registry.services.sequence import SequenceAllocator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and seed id sequences")
    sub = parser.add_subparsers(dest="command", required=True)

    peek = sub.add_parser("peek", help="Print the last issued value")
    peek.add_argument("name")

    nxt = sub.add_parser("next", help="Allocate and print the next value(s)")
    nxt.add_argument("name")
    nxt.add_argument("--count", type=int, default=1)

    seed = sub.add_parser("seed", help="Create a sequence at a value if it is missing")
    seed.add_argument("name")
    seed.add_argument("value", type=int)

    sub.add_parser("seed-defaults", help="Seed the sequences every deployment starts with")
    return parser


def run(argv: Sequence[str] | None = None, allocator: SequenceAllocator | None = None) -> int:
    args = build_parser().parse_args(argv)
    allocator = allocator or SequenceAllocator()

    try:
        if args.command == "peek":
            print(allocator.peek_current(args.name))
        elif args.command == "next":
            for value in allocator.allocate_block(args.name, args.count):
                print(value)
        elif args.command == "seed":
            print(allocator.seed(args.name, args.value))
        else:
            for name, value in allocator.seed_defaults().items():
                print(f"{name}\t{value}")
    except RegistryError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


def main() -> None:
    configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
