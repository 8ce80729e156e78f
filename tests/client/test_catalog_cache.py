"""Tests for the last-known catalog cache."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from dp_cars.client.cache import CacheEntry, FileCacheStorage, InMemoryCacheStorage

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "catalog.json"


# ==============================================================================
# Freshness
# ==============================================================================


@pytest.mark.parametrize(
    ("age", "fresh"),
    [
        (timedelta(minutes=0), True),
        (timedelta(minutes=30), True),
        (timedelta(minutes=59, seconds=59), True),
        (timedelta(hours=1), False),
        (timedelta(minutes=90), False),
    ],
)
def test_entry_is_fresh_for_under_an_hour(age: timedelta, fresh: bool) -> None:
    entry = CacheEntry(data=[{"id": 1}], saved_at=NOW - age)

    assert entry.is_fresh(NOW) is fresh


def test_entry_without_timestamp_is_never_fresh() -> None:
    assert CacheEntry(data=[{"id": 1}]).is_fresh(NOW) is False


# ==============================================================================
# FileCacheStorage
# ==============================================================================


def test_missing_file_loads_nothing(cache_path: Path) -> None:
    assert FileCacheStorage(cache_path).load() is None


def test_save_then_load(cache_path: Path) -> None:
    storage = FileCacheStorage(cache_path)
    entry = CacheEntry(data=[{"id": 1, "title": "Fiat Panda", "price": "8500"}], saved_at=NOW)

    storage.save(entry)

    assert storage.load() == entry


def test_file_layout_is_data_and_saved_at(cache_path: Path) -> None:
    FileCacheStorage(cache_path).save(CacheEntry(data=[{"id": 1}], saved_at=NOW))

    stored = json.loads(cache_path.read_text())

    assert stored["data"] == [{"id": 1}]
    assert "savedAt" in stored


def test_save_overwrites_previous_entry(cache_path: Path) -> None:
    storage = FileCacheStorage(cache_path)
    storage.save(CacheEntry(data=[{"id": 1}], saved_at=NOW))
    storage.save(CacheEntry(data=[{"id": 2}], saved_at=NOW + timedelta(minutes=1)))

    loaded = storage.load()

    assert loaded is not None
    assert loaded.data == [{"id": 2}]


def test_malformed_file_is_treated_as_absent(cache_path: Path) -> None:
    cache_path.parent.mkdir(parents=True)
    cache_path.write_text("not json at all")

    assert FileCacheStorage(cache_path).load() is None


def test_saved_at_without_offset_loads_as_utc(cache_path: Path) -> None:
    cache_path.parent.mkdir(parents=True)
    cache_path.write_text('{"data": [{"id": 1}], "savedAt": "2024-05-01T11:30:00"}')

    entry = FileCacheStorage(cache_path).load()

    assert entry is not None
    assert entry.saved_at == datetime(2024, 5, 1, 11, 30, tzinfo=timezone.utc)
    assert entry.is_fresh(NOW)


def test_in_memory_storage_keeps_last_entry() -> None:
    storage = InMemoryCacheStorage()
    entry = CacheEntry(data=[{"id": 3}], saved_at=NOW)

    storage.save(entry)

    assert storage.load() is entry
