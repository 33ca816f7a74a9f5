# mypy: ignore-errors
"""Tests for resource id minting."""

from __future__ import annotations

import hashlib
from concurrent.futures import ThreadPoolExecutor

import pytest

from resource_registry.services.id_generator import (
    ResourceIdGenerator,
    digest_id,
    prefixed_id,
)

DIGEST_LENGTH = 10


def test_prefixed_ids_follow_sequence(id_generator, seeded_allocator) -> None:
    assert [id_generator.next_id() for _ in range(3)] == ["img_4", "img_5", "img_6"]
    # One allocation reserved the whole block.
    assert seeded_allocator.peek_current("image_bed") == 13


def test_block_is_refilled(seeded_allocator) -> None:
    generator = ResourceIdGenerator(seeded_allocator, "image_bed", step=2, formatter=str)
    assert [generator.next_value() for _ in range(5)] == [4, 5, 6, 7, 8]
    assert seeded_allocator.peek_current("image_bed") == 9


def test_restart_leaves_gap_but_never_repeats(seeded_allocator) -> None:
    first = ResourceIdGenerator(seeded_allocator, "image_bed", step=10, formatter=str)
    issued = {first.next_value() for _ in range(3)}

    second = ResourceIdGenerator(seeded_allocator, "image_bed", step=10, formatter=str)
    assert second.next_value() == 14
    assert issued.isdisjoint({14})


def test_concurrent_next_id_unique(seeded_allocator) -> None:
    generator = ResourceIdGenerator(seeded_allocator, "image_bed", step=7, formatter=prefixed_id("img"))
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda _: generator.next_id(), range(60)))
    assert len(set(ids)) == 60


def test_digest_id_matches_md5_of_big_endian_value() -> None:
    fmt = digest_id(DIGEST_LENGTH)
    expected = hashlib.md5((4).to_bytes(8, "big")).hexdigest()[:DIGEST_LENGTH]
    assert fmt(4) == expected
    assert len(fmt(123456)) == DIGEST_LENGTH
    assert fmt(4) != fmt(5)


@pytest.mark.parametrize("length", [0, 33])
def test_digest_id_rejects_bad_length(length) -> None:
    with pytest.raises(ValueError):
        digest_id(length)


def test_default_formatter_uses_settings(seeded_allocator, monkeypatch) -> None:
    from resource_registry.core.settings import settings

    monkeypatch.setattr(settings, "resource_id_format", "prefixed")
    monkeypatch.setattr(settings, "resource_id_prefix", "file")
    generator = ResourceIdGenerator(seeded_allocator, "test_id", step=1)
    assert generator.next_id() == "file_22"
