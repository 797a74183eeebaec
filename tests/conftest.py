"""
Pytest configuration and shared fixtures for FastFind tests.

Provides in-memory stand-ins for the cache store, event store and geocoder,
an event factory, and a fixed clock so that cache behaviour can be observed
without a real database or network.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Generator, Sequence
from datetime import datetime, timedelta, timezone

import pytest

from fastfind.core.city_registry import CityRegistry
from fastfind.core.models import Coordinates, EventSummary, VenueSummary
from fastfind.services.proximity_cache import ProximityCacheService
from fastfind.shared.constants import Geo

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
MUMBAI = Coordinates(19.0760, 72.8777)


def point_north_of(origin: Coordinates, km: float) -> Coordinates:
    """Point km kilometres due north of origin (exact along a meridian)."""
    return Coordinates(origin.latitude + math.degrees(km / Geo.EARTH_RADIUS_KM), origin.longitude)


class FakeCacheStore:
    """In-memory cache store recording every call.

    Set ``error`` to make every operation raise it, or ``delay`` to make
    every operation block for that many seconds.
    """

    def __init__(self) -> None:
        self.entries: dict[str, bytes] = {}
        self.ttls: dict[str, int] = {}
        self.calls: list[tuple[str, str | None]] = []
        self.error: Exception | None = None
        self.delay: float = 0.0

    def _enter(self, operation: str, key: str | None = None) -> None:
        self.calls.append((operation, key))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error

    def get(self, key: str) -> bytes | None:
        self._enter("get", key)
        return self.entries.get(key)

    def set_with_ttl(self, key: str, value: bytes, ttl_seconds: int) -> None:
        self._enter("set", key)
        self.entries[key] = value
        self.ttls[key] = ttl_seconds

    def list_keys_by_prefix(self, prefix: str) -> list[str]:
        self._enter("list", prefix)
        return sorted(key for key in self.entries if key.startswith(prefix))

    def delete_keys(self, keys: Sequence[str]) -> int:
        self._enter("delete")
        deleted = 0
        for key in keys:
            if self.entries.pop(key, None) is not None:
                self.ttls.pop(key, None)
                deleted += 1
        return deleted

    def ping(self) -> bool:
        self._enter("ping")
        return True

    def operations(self) -> list[str]:
        return [operation for operation, _ in self.calls]


class FakeEventStore:
    """Event store serving a fixed list, with optional failure or delay."""

    def __init__(self, events: Sequence[EventSummary] = ()) -> None:
        self.events = list(events)
        self.query_count = 0
        self.error: Exception | None = None
        self.delay: float = 0.0

    def query_active_upcoming_or_ongoing(self, now: datetime) -> list[EventSummary]:
        self.query_count += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.events)


class FakeGeocoder:
    """Geocoder answering from a dict of known places."""

    def __init__(self, places: dict[str, Coordinates] | None = None) -> None:
        self.places = places or {}
        self.lookups: list[str] = []
        self.error: Exception | None = None

    def geocode(self, city_name: str) -> Coordinates | None:
        self.lookups.append(city_name)
        if self.error is not None:
            raise self.error
        return self.places.get(city_name.casefold())


@pytest.fixture(autouse=True)
def reset_fastfind_logger() -> Generator[None, None, None]:
    """Undo setup_structured_logger so caplog sees package records."""
    yield
    package_logger = logging.getLogger("fastfind")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_event(now: datetime) -> Callable[..., EventSummary]:
    """Factory for events at a given venue location."""

    def _make(
        event_id: str,
        location: Coordinates | None,
        *,
        title: str = "Community Meetup",
        description: str = "",
        category: str = "music",
        starts_in: timedelta = timedelta(days=1),
        duration: timedelta = timedelta(hours=3),
        status: str = "upcoming",
        is_active: bool = True,
    ) -> EventSummary:
        venue = VenueSummary(
            name=f"Venue {event_id}",
            city="Mumbai",
            state="Maharashtra",
            latitude=location.latitude if location else None,
            longitude=location.longitude if location else None,
        )
        start = now + starts_in
        return EventSummary(
            id=event_id,
            title=title,
            description=description,
            category=category,
            status=status,
            is_active=is_active,
            start_date=start,
            end_date=start + duration,
            venue=venue,
        )

    return _make


@pytest.fixture
def registry() -> CityRegistry:
    return CityRegistry.default()


@pytest.fixture
def cache_store() -> FakeCacheStore:
    return FakeCacheStore()


@pytest.fixture
def event_store() -> FakeEventStore:
    return FakeEventStore()


@pytest.fixture
def service(
    registry: CityRegistry,
    cache_store: FakeCacheStore,
    event_store: FakeEventStore,
    now: datetime,
) -> ProximityCacheService:
    return ProximityCacheService(
        registry=registry,
        cache_store=cache_store,
        event_store=event_store,
        timeout_seconds=1.0,
        clock=lambda: now,
    )


@pytest.fixture
def mumbai() -> Coordinates:
    """Reference point of the built-in Mumbai entry."""
    return MUMBAI


@pytest.fixture
def north_of() -> Callable[[Coordinates, float], Coordinates]:
    return point_north_of


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()
