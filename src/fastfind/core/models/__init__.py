"""Domain models for proximity searches."""

from __future__ import annotations

from .city import CityDescriptor, normalize_city_name
from .events import EventSummary, SearchFilters, VenueSummary, event_sort_key
from .geo import Coordinates
from .results import CachedResult, CacheStatistics, SearchResult

__all__ = [
    "CacheStatistics",
    "CachedResult",
    "CityDescriptor",
    "Coordinates",
    "EventSummary",
    "SearchFilters",
    "SearchResult",
    "VenueSummary",
    "event_sort_key",
    "normalize_city_name",
]
