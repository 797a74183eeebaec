"""Cache key derivation for location searches.

Every cache key for a proximity search is derived here so that writers,
statistics and invalidation agree on one layout:

    events:location:{city}:{radius}km[:{name}:{value}|{name}:{value}]

Key Features:
    - City segment is trimmed and case-folded
    - Radius rendered in its shortest exact form (10 and 10.0 both give
      "10km", 10.0000004 stays distinct)
    - Filters sorted by name, values percent-escaped so that ":" or "|" in a
      value can never make two different filter sets collide

Example:
    >>> from fastfind.core.models import SearchFilters
    >>> build_location_cache_key("Mumbai", 10, SearchFilters(category="music", search="Jazz"))
    'events:location:mumbai:10km:category:music|search:jazz'
"""

from __future__ import annotations

from urllib.parse import quote, unquote

from fastfind.core.models.city import normalize_city_name
from fastfind.core.models.events import SearchFilters
from fastfind.shared.constants import LocationCache


def format_radius(radius_km: float) -> str:
    """Render a radius in the shortest form that round-trips exactly.

    Distinct radii always render differently.

    Example:
        >>> format_radius(10.0)
        '10'
        >>> format_radius(2.5)
        '2.5'
        >>> format_radius(10.0000004)
        '10.0000004'
    """
    text = repr(float(radius_km))
    return text[:-2] if text.endswith(".0") else text


def _escape(value: str) -> str:
    return quote(value, safe="")


def city_cache_prefix(city_name: str) -> str:
    """Prefix shared by every key for one city, trailing separator included.

    The trailing separator keeps "pune" from matching "pune-cantonment".
    """
    return (
        f"{LocationCache.KEY_PREFIX}{_escape(normalize_city_name(city_name))}"
        f"{LocationCache.SEGMENT_SEPARATOR}"
    )


def build_location_cache_key(
    city_name: str,
    radius_km: float,
    filters: SearchFilters | None = None,
) -> str:
    """Build the cache key for a (city, radius, filters) search.

    Args:
        city_name: City name in any casing
        radius_km: Search radius in kilometres, already validated
        filters: Normalized search filters

    Returns:
        Deterministic cache key string
    """
    key = (
        f"{city_cache_prefix(city_name)}"
        f"{format_radius(radius_km)}{LocationCache.RADIUS_SUFFIX}"
    )

    items = filters.normalized_items() if filters is not None else []
    if items:
        filter_part = LocationCache.FILTER_SEPARATOR.join(
            f"{name}{LocationCache.SEGMENT_SEPARATOR}{_escape(value)}"
            for name, value in items
        )
        key = f"{key}{LocationCache.SEGMENT_SEPARATOR}{filter_part}"

    return key


def city_from_cache_key(cache_key: str) -> str | None:
    """Extract the city segment of a location cache key.

    Returns None for keys outside the location namespace.
    """
    if not cache_key.startswith(LocationCache.KEY_PREFIX):
        return None
    segments = cache_key.split(LocationCache.SEGMENT_SEPARATOR)
    if len(segments) <= LocationCache.CITY_SEGMENT_INDEX:
        return None
    return unquote(segments[LocationCache.CITY_SEGMENT_INDEX]) or None
