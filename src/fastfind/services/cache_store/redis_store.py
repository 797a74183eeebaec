"""Redis-backed cache store.

Entries are written with SETEX so Redis evicts them itself; listing uses
SCAN rather than KEYS to avoid blocking the server.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

import redis

from fastfind.shared.errors import create_cache_error

logger = logging.getLogger(__name__)

_GLOB_SPECIAL = re.compile(r"([\\*?\[\]])")

SCAN_BATCH_SIZE = 500


def escape_glob(value: str) -> str:
    """Escape Redis glob metacharacters so value matches literally."""
    return _GLOB_SPECIAL.sub(r"\\\1", value)


class RedisCacheStore:
    """Cache store backed by a Redis server.

    Example:
        >>> store = RedisCacheStore.from_url("redis://localhost:6379/0")
        >>> store.ping()
        True
    """

    def __init__(self, client: Any) -> None:
        """Wrap an existing redis client.

        Args:
            client: redis.Redis instance (or compatible)
        """
        self.redis_client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float | None = None) -> RedisCacheStore:
        """Create a store with a client connected to url."""
        client = redis.Redis.from_url(
            url,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client)

    def get(self, key: str) -> bytes | None:
        try:
            value = self.redis_client.get(key)
        except redis.RedisError as e:
            raise create_cache_error(
                f"Redis GET failed: {e}", operation="get", key=key, original_error=e
            ) from e
        if value is None:
            return None
        return value if isinstance(value, bytes) else str(value).encode("utf-8")

    def set_with_ttl(self, key: str, value: bytes, ttl_seconds: int) -> None:
        try:
            self.redis_client.setex(key, ttl_seconds, value)
        except redis.RedisError as e:
            raise create_cache_error(
                f"Redis SETEX failed: {e}", operation="set", key=key, original_error=e
            ) from e

    def list_keys_by_prefix(self, prefix: str) -> list[str]:
        pattern = f"{escape_glob(prefix)}*"
        try:
            keys = self.redis_client.scan_iter(match=pattern, count=SCAN_BATCH_SIZE)
            return sorted(
                {key.decode("utf-8") if isinstance(key, bytes) else key for key in keys}
            )
        except redis.RedisError as e:
            raise create_cache_error(
                f"Redis SCAN failed: {e}", operation="list_keys", original_error=e
            ) from e

    def delete_keys(self, keys: Sequence[str]) -> int:
        if not keys:
            return 0
        try:
            return int(self.redis_client.delete(*keys))
        except redis.RedisError as e:
            raise create_cache_error(
                f"Redis DEL failed: {e}", operation="delete", original_error=e
            ) from e

    def ping(self) -> bool:
        try:
            return bool(self.redis_client.ping())
        except redis.RedisError as e:
            raise create_cache_error(
                f"Redis PING failed: {e}", operation="ping", original_error=e
            ) from e

    def close(self) -> None:
        self.redis_client.close()
