"""SQLite-backed cache store.

A single key-value table with an absolute expiry timestamp per row. Expired
rows are invisible to reads and listings and are purged on start-up.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
import time
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, TypeVar

from fastfind.shared.errors import ErrorContext, create_cache_error
from fastfind.shared.logging import log_operation_success

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS location_cache (
    cache_key TEXT PRIMARY KEY,
    payload BLOB NOT NULL,
    created_at REAL NOT NULL,
    expires_at REAL NOT NULL
)
"""
_CREATE_EXPIRY_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_location_cache_expires ON location_cache(expires_at)"
)


class SQLiteCacheStore:
    """Cache store persisted in a local SQLite database.

    One connection is shared between worker threads, guarded by a lock.

    Attributes:
        db_path: Path to the SQLite database file

    Example:
        >>> store = SQLiteCacheStore(Path("cache/proximity_cache.db"))
        >>> store.set_with_ttl("events:location:mumbai:10km", b"...", 300)
        >>> store.get("events:location:mumbai:10km")
        b'...'
    """

    def __init__(
        self,
        db_path: Path | str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Open (or create) the database.

        Args:
            db_path: Path to the SQLite file, or ":memory:"
            clock: Source of the current time in epoch seconds

        Raises:
            CacheUnavailableError: If the database cannot be opened
        """
        self.db_path = db_path if str(db_path) == ":memory:" else Path(db_path)
        self._clock = clock
        self._lock = threading.Lock()
        self.conn: sqlite3.Connection | None = None
        self._initialize_db()

    def _initialize_db(self) -> None:
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.conn = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                isolation_level=None,
            )
            self.conn.execute("PRAGMA journal_mode=WAL")
            self.conn.execute("PRAGMA synchronous=NORMAL")
            self.conn.execute(_CREATE_TABLE)
            self.conn.execute(_CREATE_EXPIRY_INDEX)
        except (sqlite3.Error, OSError) as e:
            raise create_cache_error(
                f"Failed to open cache database {self.db_path}: {e}",
                operation="initialize_db",
                original_error=e,
            ) from e

        purged = self.purge_expired()
        if purged > 0:
            logger.info("Purged %d expired cache entries on startup", purged)

        log_operation_success(
            logger=logger,
            operation="initialize_db",
            duration_ms=0,
            context=ErrorContext(
                operation="initialize_db",
                additional_data={"db_path": str(self.db_path)},
            ),
        )

    def _run(
        self,
        operation: str,
        func: Callable[[sqlite3.Connection], T],
        key: str | None = None,
    ) -> T:
        if self.conn is None:
            raise create_cache_error(
                "Cache database is closed",
                operation=operation,
                key=key,
            )
        try:
            with self._lock:
                return func(self.conn)
        except sqlite3.Error as e:
            raise create_cache_error(
                f"SQLite cache {operation} failed: {e}",
                operation=operation,
                key=key,
                original_error=e,
            ) from e

    def get(self, key: str) -> bytes | None:
        """Return the payload for key, or None if absent or expired."""

        def query(conn: sqlite3.Connection) -> Any:
            return conn.execute(
                "SELECT payload FROM location_cache WHERE cache_key = ? AND expires_at > ?",
                (key, self._clock()),
            ).fetchone()

        row = self._run("get", query, key)
        return bytes(row[0]) if row else None

    def set_with_ttl(self, key: str, value: bytes, ttl_seconds: int) -> None:
        """Insert or replace key with an expiry ttl_seconds from now."""
        now = self._clock()

        def upsert(conn: sqlite3.Connection) -> None:
            conn.execute(
                "INSERT OR REPLACE INTO location_cache "
                "(cache_key, payload, created_at, expires_at) VALUES (?, ?, ?, ?)",
                (key, sqlite3.Binary(value), now, now + ttl_seconds),
            )

        self._run("set", upsert, key)

    def list_keys_by_prefix(self, prefix: str) -> list[str]:
        """Live keys starting with prefix, sorted."""

        def query(conn: sqlite3.Connection) -> list[str]:
            rows = conn.execute(
                "SELECT cache_key FROM location_cache "
                "WHERE substr(cache_key, 1, ?) = ? AND expires_at > ? "
                "ORDER BY cache_key",
                (len(prefix), prefix, self._clock()),
            ).fetchall()
            return [row[0] for row in rows]

        return self._run("list_keys", query)

    def delete_keys(self, keys: Sequence[str]) -> int:
        """Delete keys; returns how many live entries were removed."""
        keys = list(keys)
        if not keys:
            return 0

        def delete(conn: sqlite3.Connection) -> int:
            now = self._clock()
            deleted = 0
            for key in keys:
                cursor = conn.execute(
                    "DELETE FROM location_cache WHERE cache_key = ? AND expires_at > ?",
                    (key, now),
                )
                deleted += cursor.rowcount
            return deleted

        return self._run("delete", delete)

    def ping(self) -> bool:
        """True if the database answers a trivial query."""
        self._run("ping", lambda conn: conn.execute("SELECT 1").fetchone())
        return True

    def purge_expired(self) -> int:
        """Remove expired rows and return how many were removed."""

        def purge(conn: sqlite3.Connection) -> int:
            cursor = conn.execute(
                "DELETE FROM location_cache WHERE expires_at <= ?",
                (self._clock(),),
            )
            return cursor.rowcount

        return self._run("purge_expired", purge)

    def close(self) -> None:
        """Close the database connection."""
        if self.conn is not None:
            with self._lock:
                self.conn.close()
                self.conn = None
            logger.debug("Closed cache database %s", self.db_path)
