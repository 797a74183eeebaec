"""Event and search filter models.

EventSummary is what the event store hands to this package; SearchFilters is
the closed set of refinements a caller can ask for.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from fastfind.core.models.geo import Coordinates
from fastfind.shared.constants import EventStatus


class VenueSummary(BaseModel):
    """Venue details carried on an event."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = ""
    city: str | None = None
    state: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    @property
    def coordinates(self) -> Coordinates | None:
        """Venue location, or None when the venue has not been geolocated."""
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(self.latitude, self.longitude)


class EventSummary(BaseModel):
    """An event as returned by proximity searches.

    distance_km is filled in by the live computation and is None on events
    straight out of the store.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str = ""
    category: str
    status: str = EventStatus.UPCOMING
    is_active: bool = True
    start_date: datetime
    end_date: datetime
    venue: VenueSummary | None = None
    distance_km: float | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def coordinates(self) -> Coordinates | None:
        """Venue coordinates, if the event has a geolocated venue."""
        return self.venue.coordinates if self.venue else None


class SearchFilters(BaseModel):
    """Optional refinements for a proximity search.

    Blank values are dropped and the rest are trimmed but otherwise kept as
    the caller sent them. ``search`` matches case-insensitively, so the cache
    key carries it case-folded; ``category`` is an exact match.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    category: str | None = None
    search: str | None = None

    @field_validator("category", "search", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @property
    def folded_search(self) -> str | None:
        """Search term in the form used for matching and cache keys."""
        return self.search.casefold() if self.search is not None else None

    @classmethod
    def from_mapping(cls, filters: Mapping[str, Any] | SearchFilters | None) -> SearchFilters:
        """Build filters from a plain mapping, passing instances through."""
        if filters is None:
            return cls()
        if isinstance(filters, SearchFilters):
            return filters
        return cls.model_validate(dict(filters))

    def normalized_items(self) -> list[tuple[str, str]]:
        """Set filters as (name, value) pairs sorted by name, search folded."""
        values = {"category": self.category, "search": self.folded_search}
        return sorted((name, value) for name, value in values.items() if value is not None)

    def as_dict(self) -> dict[str, str]:
        """Set filters as the caller sent them (trimmed), for echoing back."""
        return {
            name: value
            for name, value in sorted(self.model_dump().items())
            if value is not None
        }

    def matches(self, event: EventSummary) -> bool:
        """True when the event passes every set filter."""
        if self.category is not None and event.category != self.category:
            return False
        search = self.folded_search
        if search is not None:
            title_match = search in event.title.casefold()
            description_match = search in event.description.casefold()
            if not (title_match or description_match):
                return False
        return True


def event_sort_key(event: EventSummary) -> tuple[float, datetime]:
    """Order by distance, then start date."""
    distance = event.distance_km if event.distance_km is not None else float("inf")
    return distance, event.start_date


__all__ = [
    "EventSummary",
    "SearchFilters",
    "VenueSummary",
    "event_sort_key",
]
