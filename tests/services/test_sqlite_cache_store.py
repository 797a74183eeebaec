"""Tests for SQLiteCacheStore.

Tests follow the Failure-First pattern:
1. Test failure cases first
2. Test edge cases
3. Test happy path
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from fastfind.services.cache_store import SQLiteCacheStore
from fastfind.shared.errors import CacheUnavailableError, ErrorCode


class FakeClock:
    def __init__(self, start: float = 1_000_000.0) -> None:
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(tmp_path: Path, clock: FakeClock):
    cache = SQLiteCacheStore(tmp_path / "cache" / "proximity.db", clock=clock)
    yield cache
    cache.close()


class TestSQLiteCacheStoreFailures:
    def test_closed_store_raises_cache_error(self, store: SQLiteCacheStore) -> None:
        store.close()

        with pytest.raises(CacheUnavailableError):
            store.get("events:location:mumbai:10km")

    def test_sqlite_error_is_wrapped(self, store: SQLiteCacheStore, mocker) -> None:
        # Given
        broken = mocker.Mock()
        broken.execute.side_effect = sqlite3.OperationalError("database is locked")
        store.conn = broken

        # When
        with pytest.raises(CacheUnavailableError) as exc_info:
            store.set_with_ttl("k", b"v", 60)

        # Then
        assert exc_info.value.code == ErrorCode.CACHE_UNAVAILABLE
        assert isinstance(exc_info.value.original_error, sqlite3.OperationalError)
        store.conn = None

    def test_unopenable_path_raises_cache_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(CacheUnavailableError):
            SQLiteCacheStore(blocker / "cache.db")


class TestSQLiteCacheStoreExpiry:
    def test_entry_expires_after_ttl(self, store: SQLiteCacheStore, clock: FakeClock) -> None:
        # Given
        store.set_with_ttl("events:location:mumbai:10km", b"payload", 300)

        # When
        clock.advance(299)
        before = store.get("events:location:mumbai:10km")
        clock.advance(1)
        after = store.get("events:location:mumbai:10km")

        # Then
        assert before == b"payload"
        assert after is None

    def test_expired_keys_not_listed_or_counted(self, store: SQLiteCacheStore, clock: FakeClock) -> None:
        store.set_with_ttl("events:location:pune:5km", b"a", 10)
        store.set_with_ttl("events:location:pune:10km", b"b", 100)
        clock.advance(50)

        assert store.list_keys_by_prefix("events:location:pune:") == ["events:location:pune:10km"]
        assert store.delete_keys(["events:location:pune:5km", "events:location:pune:10km"]) == 1

    def test_purge_on_startup(self, tmp_path: Path, clock: FakeClock) -> None:
        # Given
        db_path = tmp_path / "cache.db"
        first = SQLiteCacheStore(db_path, clock=clock)
        first.set_with_ttl("short", b"a", 10)
        first.set_with_ttl("long", b"b", 1000)
        first.close()
        clock.advance(100)

        # When
        second = SQLiteCacheStore(db_path, clock=clock)

        # Then
        assert second.purge_expired() == 0
        assert second.get("long") == b"b"
        second.close()


class TestSQLiteCacheStoreOperations:
    def test_missing_key(self, store: SQLiteCacheStore) -> None:
        assert store.get("events:location:nowhere:1km") is None

    def test_set_replaces_value(self, store: SQLiteCacheStore) -> None:
        store.set_with_ttl("k", b"first", 60)
        store.set_with_ttl("k", b"second", 60)

        assert store.get("k") == b"second"

    def test_prefix_listing_is_literal_and_sorted(self, store: SQLiteCacheStore) -> None:
        for key in (
            "events:location:pune:5km",
            "events:location:pune:10km:search:x%25",
            "events:location:pune-cantonment:5km",
            "other:events:location:pune:5km",
        ):
            store.set_with_ttl(key, b"v", 60)

        assert store.list_keys_by_prefix("events:location:pune:") == [
            "events:location:pune:10km:search:x%25",
            "events:location:pune:5km",
        ]

    def test_delete_returns_count(self, store: SQLiteCacheStore) -> None:
        store.set_with_ttl("a", b"1", 60)
        store.set_with_ttl("b", b"2", 60)

        assert store.delete_keys(["a", "b", "c"]) == 2
        assert store.delete_keys([]) == 0
        assert store.get("a") is None

    def test_ping(self, store: SQLiteCacheStore) -> None:
        assert store.ping() is True

    def test_in_memory_database(self) -> None:
        store = SQLiteCacheStore(":memory:")

        store.set_with_ttl("k", b"v", 60)

        assert store.get("k") == b"v"
        store.close()
