"""Store protocols for dependency inversion.

ProximityCacheService depends on these interfaces only. Concrete adapters
live in fastfind.services and are wired together in fastfind.containers.

All methods are synchronous; the service runs them in worker threads with a
timeout.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from fastfind.core.models import Coordinates, EventSummary


class EventStoreProtocol(Protocol):
    """Source of truth for events.

    Example:
        >>> store: EventStoreProtocol = JSONEventStore("data/events.json")
        >>> events = store.query_active_upcoming_or_ongoing(datetime.now(timezone.utc))
    """

    def query_active_upcoming_or_ongoing(self, now: datetime) -> Sequence[EventSummary]:
        """Return active events whose status is upcoming or ongoing and
        whose end date is after ``now``.

        Raises:
            UpstreamUnavailableError: If the store cannot be read
        """


class CacheStoreProtocol(Protocol):
    """Key-value store with per-entry expiry.

    Implementations raise CacheUnavailableError on any backend failure.
    """

    def get(self, key: str) -> bytes | None:
        """Return the stored value, or None when absent or expired."""

    def set_with_ttl(self, key: str, value: bytes, ttl_seconds: int) -> None:
        """Store value under key, expiring after ttl_seconds."""

    def list_keys_by_prefix(self, prefix: str) -> list[str]:
        """Return the live keys starting with prefix."""

    def delete_keys(self, keys: Sequence[str]) -> int:
        """Delete keys and return how many existed."""

    def ping(self) -> bool:
        """Return True if the backend answers."""


class GeocoderProtocol(Protocol):
    """Resolves a free-text city name to a reference coordinate."""

    def geocode(self, city_name: str) -> Coordinates | None:
        """Return the city's coordinates, or None if the place is unknown.

        Raises:
            UpstreamUnavailableError: If the geocoding service fails
        """
