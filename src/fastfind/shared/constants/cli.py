"""
CLI Configuration Constants
"""


class CLIDefaults:
    """Default values and exit codes for the CLI."""

    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_INVALID_INPUT = 2


class CLICommands:
    """Command names."""

    SEARCH = "search"
    CITIES = "cities"
    STATS = "stats"
    INVALIDATE = "invalidate"
    PING = "ping"


class CLIMessages:
    """User facing message templates."""

    UPSTREAM_UNAVAILABLE = "Event search is temporarily unavailable. Please try again shortly."
    INVALID_INPUT = "Invalid input: {message}"
    FROM_CACHE = "Events retrieved from cache"
    FROM_LIVE = "Events retrieved from database"
    NO_EVENTS = "No events found within {radius}km of {city}"
    INVALIDATED = "Invalidated {count} cached searches for {city}"
    CACHE_OK = "Cache store is reachable"
    CACHE_DOWN = "Cache store is unreachable; searches will be computed live"
