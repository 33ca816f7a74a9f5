# mypy: ignore-errors
"""Tests for deduplicating registration."""

from __future__ import annotations

from datetime import datetime

import pytest

from resource_registry.errors import DuplicateIDError, InvalidArgumentError, RegistryError
from resource_registry.services.resource_service import ResourceService, default_bucket
from resource_registry.utils.hash import sha256_hexdigest

CREATE_TIME = 1_700_000_000


def test_register_creates_then_deduplicates(resource_service, registry) -> None:
    record, created = resource_service.register("abc123", 2048, bucket="photos", create_time=CREATE_TIME)
    assert created is True
    assert record.id == "img_4"
    assert registry.get_by_id("img_4") == record

    again, created = resource_service.register("abc123", 2048, bucket="elsewhere")
    assert created is False
    assert again == record
    assert [r.id for r in registry.find_by_hash("abc123")] == ["img_4"]


def test_register_bytes_hashes_content(resource_service) -> None:
    data = b"\x89PNG fake image"
    record, created = resource_service.register_bytes(data, bucket="photos", create_time=CREATE_TIME)
    assert created
    assert record.hash == sha256_hexdigest(data)
    assert record.resource_size == len(data)


def test_register_defaults_bucket_to_month(resource_service) -> None:
    record, _ = resource_service.register("h", 1)
    assert record.bucket == default_bucket()


def test_register_skips_taken_ids(resource_service, registry) -> None:
    registry.create_resource("img_4", "manual", CREATE_TIME, "unrelated", 1)

    record, created = resource_service.register("fresh", 5, bucket="b", create_time=CREATE_TIME)

    assert created
    assert record.id == "img_5"


def test_register_gives_up_after_max_attempts(registry, id_generator) -> None:
    for value in range(4, 7):
        registry.create_resource(f"img_{value}", "manual", CREATE_TIME, f"u{value}", 1)
    service = ResourceService(registry, id_generator, max_attempts=3)

    with pytest.raises(DuplicateIDError):
        service.register("fresh", 5, bucket="b", create_time=CREATE_TIME)


def test_default_bucket_format() -> None:
    assert default_bucket(datetime(2024, 3, 9, 12, 0)) == "2024-03"


@pytest.mark.parametrize(
    ("size", "kwargs"),
    [
        (-5, {"create_time": -3}),
        (10, {"create_time": -3}),
        (-5, {}),
        (10, {"bucket": ""}),
    ],
)
def test_register_validates_before_dedup_lookup(resource_service, registry, size, kwargs) -> None:
    stored, _ = resource_service.register("abc", 10, bucket="photos", create_time=CREATE_TIME)

    with pytest.raises(InvalidArgumentError):
        resource_service.register("abc", size, **kwargs)

    assert [r.id for r in registry.find_by_hash("abc")] == [stored.id]


def test_register_rejects_empty_hash(resource_service) -> None:
    with pytest.raises(InvalidArgumentError):
        resource_service.register("", 1)


def test_register_bytes_rejects_unknown_algorithm(resource_service) -> None:
    with pytest.raises(RegistryError, match="Unsupported hash algorithm"):
        resource_service.register_bytes(b"data", algorithm="md4")
