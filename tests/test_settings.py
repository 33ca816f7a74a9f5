# mypy: ignore-errors
"""Tests for settings validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from resource_registry.core.settings import Settings


def test_page_size_defaults_are_consistent() -> None:
    config = Settings()
    assert config.default_page_size <= config.max_page_size


def test_default_page_size_may_not_exceed_max() -> None:
    with pytest.raises(ValidationError, match="DEFAULT_PAGE_SIZE must not exceed MAX_PAGE_SIZE"):
        Settings(DEFAULT_PAGE_SIZE=2000, MAX_PAGE_SIZE=1000)


def test_page_sizes_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("DEFAULT_PAGE_SIZE", "20")
    monkeypatch.setenv("MAX_PAGE_SIZE", "40")

    config = Settings()

    assert (config.default_page_size, config.max_page_size) == (20, 40)
