"""Cache store configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from fastfind.shared.constants import CacheBackend, FileSystem, LocationCache


class CacheSettings(BaseModel):
    """Cache backend selection and connection details.

    Per-city TTLs live on the city registry, not here.
    """

    backend: str = Field(
        default=CacheBackend.SQLITE,
        description="Cache backend (sqlite, redis)",
    )
    sqlite_path: str = Field(
        default=FileSystem.CACHE_DB_FILE,
        description="SQLite database file for the sqlite backend",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Connection URL for the redis backend",
    )
    key_prefix: str = Field(
        default=LocationCache.KEY_PREFIX,
        frozen=True,
        description="Namespace of location cache keys (fixed)",
    )

    @field_validator("backend")
    @classmethod
    def _known_backend(cls, value: str) -> str:
        backend = value.strip().lower()
        if backend not in CacheBackend.ALL:
            msg = f"backend must be one of {', '.join(CacheBackend.ALL)}"
            raise ValueError(msg)
        return backend

    @field_validator("key_prefix")
    @classmethod
    def _fixed_prefix(cls, value: str) -> str:
        if value != LocationCache.KEY_PREFIX:
            msg = f"key_prefix is fixed to {LocationCache.KEY_PREFIX!r}"
            raise ValueError(msg)
        return value


__all__ = ["CacheSettings"]
