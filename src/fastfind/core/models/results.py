"""Cached payload and caller-facing result models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from fastfind.core.models.events import EventSummary
from fastfind.shared.constants import Provenance


class CachedResult(BaseModel):
    """Payload stored under a location cache key.

    Never written with an empty event list. Replaced wholesale on
    recomputation, never patched in place.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    events: list[EventSummary]
    city: str
    radius_km: float = Field(..., alias="radius")
    filters: dict[str, str] = Field(default_factory=dict)
    generated_at: datetime

    def to_bytes(self) -> bytes:
        """Serialize for the cache store."""
        return orjson.dumps(self.model_dump(mode="json", by_alias=True))

    @classmethod
    def from_bytes(cls, payload: bytes) -> CachedResult:
        """Deserialize a cache store payload.

        Raises:
            orjson.JSONDecodeError: If the payload is not JSON
            pydantic.ValidationError: If the JSON does not match the schema
        """
        return cls.model_validate(orjson.loads(payload))


class SearchResult(BaseModel):
    """Result of a proximity search with its provenance."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    events: list[EventSummary]
    from_cache: bool
    city: str
    radius_km: float = Field(..., alias="radius")
    filters: dict[str, str] = Field(default_factory=dict)
    timestamp: datetime
    cache_key: str | None = None

    @computed_field(alias="totalResults")  # type: ignore[prop-decorator]
    @property
    def total_results(self) -> int:
        return len(self.events)

    @property
    def provenance(self) -> str:
        return Provenance.CACHE if self.from_cache else Provenance.LIVE

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class CacheStatistics(BaseModel):
    """Observational snapshot of the location cache namespace."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_cached_searches: int = 0
    cached_cities: list[str] = Field(default_factory=list)
    cache_keys: list[str] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
