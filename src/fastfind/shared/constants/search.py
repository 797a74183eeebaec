"""
Search Configuration Constants
"""


class SearchDefaults:
    """Defaults for proximity searches."""

    RADIUS_KM = 10.0
    MAX_RESULTS = 50


class EventStatus:
    """Event status values that can still be attended."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"

    ATTENDABLE = (UPCOMING, ONGOING)


class Provenance:
    """Where a search result came from."""

    CACHE = "cache"
    LIVE = "live"
