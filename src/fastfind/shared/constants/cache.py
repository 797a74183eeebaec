"""
Cache Configuration Constants

Key layout and defaults for the location event cache. Every key written by
this package starts with LocationCache.KEY_PREFIX so prefix scans for
statistics and invalidation never touch unrelated cache entries.
"""

from .system import BASE_MINUTE


class LocationCache:
    """Location event cache key layout."""

    KEY_PREFIX = "events:location:"
    SEGMENT_SEPARATOR = ":"
    FILTER_SEPARATOR = "|"
    RADIUS_SUFFIX = "km"

    # Position of the city segment in "events:location:{city}:{radius}km..."
    CITY_SEGMENT_INDEX = 2


class CacheBackend:
    """Supported cache store backends."""

    SQLITE = "sqlite"
    REDIS = "redis"

    ALL = (SQLITE, REDIS)


class CityCacheTTL:
    """Built-in per-city TTLs (seconds).

    These are tuning values for the built-in registry only; TTL is set per
    city and is not derived from tier anywhere in the code.
    """

    FAST_MOVING = 5 * BASE_MINUTE
    STANDARD = 10 * BASE_MINUTE
    SLOW_MOVING = 15 * BASE_MINUTE
