"""Cache store adapters and backend selection."""

from __future__ import annotations

import logging

from fastfind.config.models.settings import Settings
from fastfind.shared.constants import CacheBackend
from fastfind.shared.protocols import CacheStoreProtocol

from .redis_store import RedisCacheStore, escape_glob
from .sqlite_store import SQLiteCacheStore

logger = logging.getLogger(__name__)


def create_cache_store(settings: Settings) -> CacheStoreProtocol:
    """Build the cache store selected by ``settings.cache.backend``.

    Raises:
        CacheUnavailableError: If the SQLite database cannot be opened
    """
    backend = settings.cache.backend
    if backend == CacheBackend.REDIS:
        logger.info("Using redis cache store at %s", settings.cache.redis_url)
        return RedisCacheStore.from_url(
            settings.cache.redis_url,
            socket_timeout=settings.store.timeout_seconds,
        )

    logger.info("Using sqlite cache store at %s", settings.cache.sqlite_path)
    return SQLiteCacheStore(settings.cache.sqlite_path)


__all__ = [
    "RedisCacheStore",
    "SQLiteCacheStore",
    "create_cache_store",
    "escape_glob",
]
