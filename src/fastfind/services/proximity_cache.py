"""Read-through proximity cache for event searches.

ProximityCacheService answers "events within R km of city C matching F".
Registered cities are served from the cache store when possible and
populated on a miss; every other city is computed live from the event
store and never cached.

The cache is best effort: any cache store failure degrades to a live
computation. Event store failures always reach the caller.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, TypeVar

import orjson
from pydantic import ValidationError

from fastfind.core.city_registry import CityRegistry
from fastfind.core.geo_filter import distance_km, validate_point, validate_radius
from fastfind.core.models import (
    CachedResult,
    CacheStatistics,
    Coordinates,
    EventSummary,
    SearchFilters,
    SearchResult,
    event_sort_key,
)
from fastfind.shared.cache_utils import (
    build_location_cache_key,
    city_cache_prefix,
    city_from_cache_key,
)
from fastfind.shared.constants import LocationCache, SearchDefaults, Timeout
from fastfind.shared.errors import (
    CacheUnavailableError,
    ErrorCode,
    ErrorContext,
    InvalidCoordinatesError,
    UpstreamUnavailableError,
    create_cache_error,
    create_invalid_input_error,
    create_upstream_error,
)
from fastfind.shared.logging import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
)
from fastfind.shared.protocols import (
    CacheStoreProtocol,
    EventStoreProtocol,
    GeocoderProtocol,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

FiltersInput = SearchFilters | Mapping[str, Any] | None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProximityCacheService:
    """Geo-proximity event search with per-city read-through caching.

    The service holds no mutable state after construction and can be shared
    by concurrent callers. Concurrent misses on the same key are not
    coalesced; each computes and writes the same value.

    Example:
        >>> service = ProximityCacheService(CityRegistry.default(), cache, events)
        >>> result = await service.get_events("Mumbai", 10, {"category": "music"})
        >>> result.from_cache
        False
    """

    def __init__(
        self,
        registry: CityRegistry,
        cache_store: CacheStoreProtocol,
        event_store: EventStoreProtocol,
        geocoder: GeocoderProtocol | None = None,
        timeout_seconds: float = Timeout.STORE,
        max_results: int = SearchDefaults.MAX_RESULTS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the service.

        Args:
            registry: Cities eligible for caching
            cache_store: Key-value store with expiry
            event_store: Source of truth for events
            geocoder: Resolves unregistered cities; without one they yield
                no events
            timeout_seconds: Bound on every store and geocoder call
            max_results: Maximum number of events per result
            clock: Source of the current UTC time
        """
        self.registry = registry
        self.cache_store = cache_store
        self.event_store = event_store
        self.geocoder = geocoder
        self.timeout_seconds = timeout_seconds
        self.max_results = max_results
        self._clock = clock

    async def get_events(
        self,
        city_name: str,
        radius_km: float = SearchDefaults.RADIUS_KM,
        filters: FiltersInput = None,
    ) -> SearchResult:
        """Find events within radius_km of a city.

        Args:
            city_name: City name in any casing
            radius_km: Positive, finite search radius in kilometres
            filters: Optional ``category`` / ``search`` refinements

        Returns:
            SearchResult with events sorted by distance and a from_cache flag

        Raises:
            InvalidInputError: If the city is blank, the radius is not a
                positive finite number, or the filters are malformed
            UpstreamUnavailableError: If the event store (or geocoder) fails
                or times out
        """
        display_name = self._validate_city_name(city_name, operation="get_events")
        radius = validate_radius(radius_km)
        search_filters = self._normalize_filters(filters)

        start_time = time.perf_counter()
        log_operation_start(
            logger,
            "get_events",
            {"city": display_name, "radius_km": radius, "filters": search_filters.as_dict()},
        )

        city = self.registry.lookup(display_name)
        if city is None:
            result = await self._search_unregistered(display_name, radius, search_filters)
        else:
            cache_key = build_location_cache_key(city.name, radius, search_filters)
            cached = await self._read_cache(cache_key)
            if cached is not None:
                logger.debug("Cache hit for %s", cache_key)
                result = self._build_result(
                    cached.events, True, city.name, radius, search_filters, cache_key
                )
            else:
                logger.debug("Cache miss for %s", cache_key)
                events = await self._compute_live(city.coordinates, radius, search_filters, city.name)
                if events:
                    payload = CachedResult(
                        events=events,
                        city=city.name,
                        radius_km=radius,
                        filters=search_filters.as_dict(),
                        generated_at=self._clock(),
                    )
                    await self._write_cache(cache_key, payload, city.cache_ttl_seconds)
                result = self._build_result(
                    events, False, city.name, radius, search_filters, cache_key
                )

        log_operation_success(
            logger,
            "get_events",
            (time.perf_counter() - start_time) * 1000,
            result_info={
                "total_results": result.total_results,
                "provenance": result.provenance,
            },
            context=ErrorContext(operation="get_events", city=result.city),
        )
        return result

    async def cache_statistics(self) -> CacheStatistics:
        """Snapshot of the location cache namespace.

        A cache store failure yields empty statistics rather than an error.
        """
        try:
            keys = await self._call(self.cache_store.list_keys_by_prefix, LocationCache.KEY_PREFIX)
        except Exception as e:  # noqa: BLE001
            self._absorb_cache_failure(e, "cache_statistics")
            return CacheStatistics()

        cities = {city for city in map(city_from_cache_key, keys) if city}
        return CacheStatistics(
            total_cached_searches=len(keys),
            cached_cities=sorted(cities),
            cache_keys=sorted(keys),
        )

    async def invalidate_city(self, city_name: str) -> int:
        """Delete every cached search for a city.

        Returns:
            Number of deleted entries; 0 if the cache store is unavailable

        Raises:
            InvalidInputError: If the city name is blank
        """
        display_name = self._validate_city_name(city_name, operation="invalidate_city")
        prefix = city_cache_prefix(display_name)

        try:
            keys = await self._call(self.cache_store.list_keys_by_prefix, prefix)
            deleted = await self._call(self.cache_store.delete_keys, keys) if keys else 0
        except Exception as e:  # noqa: BLE001
            self._absorb_cache_failure(e, "invalidate_city", key=prefix)
            return 0

        logger.info("Invalidated %d cached searches for %s", deleted, display_name)
        return deleted

    async def check_cache(self) -> bool:
        """Ping the cache store.

        False means searches will be computed live until the store recovers.
        """
        try:
            reachable = bool(await self._call(self.cache_store.ping))
        except Exception as e:  # noqa: BLE001
            self._absorb_cache_failure(e, "check_cache")
            return False

        if reachable:
            logger.info("Cache store is reachable")
        else:
            logger.warning("Cache store did not answer ping; serving live results only")
        return reachable

    def list_cacheable_cities(self) -> list[dict[str, str | int]]:
        """Registered cities as {name, state, tier}, ordered by tier then name."""
        return [city.summary() for city in self.registry.list_all()]

    async def _search_unregistered(
        self,
        display_name: str,
        radius: float,
        search_filters: SearchFilters,
    ) -> SearchResult:
        center = await self._geocode(display_name)
        if center is None:
            logger.info("No reference location for unregistered city %r", display_name)
            events: list[EventSummary] = []
        else:
            events = await self._compute_live(center, radius, search_filters, display_name)
        return self._build_result(events, False, display_name, radius, search_filters, None)

    async def _geocode(self, city_name: str) -> Coordinates | None:
        if self.geocoder is None:
            return None
        try:
            return await self._call(self.geocoder.geocode, city_name)
        except asyncio.TimeoutError as e:
            raise self._upstream_failure(
                create_upstream_error(
                    f"Geocoder timed out after {self.timeout_seconds}s",
                    operation="geocode",
                    city=city_name,
                    original_error=e,
                    timed_out=True,
                )
            ) from e
        except UpstreamUnavailableError as e:
            raise self._upstream_failure(e) from e
        except Exception as e:  # noqa: BLE001
            raise self._upstream_failure(
                create_upstream_error(
                    f"Geocoder failed: {e}",
                    operation="geocode",
                    city=city_name,
                    original_error=e,
                )
            ) from e

    async def _compute_live(
        self,
        center: Coordinates,
        radius: float,
        search_filters: SearchFilters,
        city_label: str,
    ) -> list[EventSummary]:
        """Filter, sort and truncate events around center.

        Raises:
            InvalidCoordinatesError: If center itself is not a valid point
            UpstreamUnavailableError: If the event store fails or times out
        """
        center = validate_point(center)
        now = self._clock()
        try:
            candidates = await self._call(self.event_store.query_active_upcoming_or_ongoing, now)
        except asyncio.TimeoutError as e:
            raise self._upstream_failure(
                create_upstream_error(
                    f"Event store timed out after {self.timeout_seconds}s",
                    operation="query_events",
                    city=city_label,
                    original_error=e,
                    timed_out=True,
                )
            ) from e
        except UpstreamUnavailableError as e:
            raise self._upstream_failure(e) from e
        except Exception as e:  # noqa: BLE001
            raise self._upstream_failure(
                create_upstream_error(
                    f"Event store failed: {e}",
                    operation="query_events",
                    city=city_label,
                    original_error=e,
                )
            ) from e

        matches: list[EventSummary] = []
        for event in candidates:
            venue_point = event.coordinates
            if venue_point is None:
                continue
            try:
                distance = distance_km(center, venue_point)
            except InvalidCoordinatesError:
                logger.warning(
                    "Skipping event %s: venue has invalid coordinates %s",
                    event.id,
                    tuple(venue_point),
                )
                continue
            if distance <= radius and search_filters.matches(event):
                matches.append(event.model_copy(update={"distance_km": distance}))

        matches.sort(key=event_sort_key)
        return matches[: self.max_results]

    async def _read_cache(self, cache_key: str) -> CachedResult | None:
        try:
            payload = await self._call(self.cache_store.get, cache_key)
        except Exception as e:  # noqa: BLE001
            self._absorb_cache_failure(e, "cache_read", key=cache_key)
            return None

        if payload is None:
            return None

        try:
            cached = CachedResult.from_bytes(payload)
        except (orjson.JSONDecodeError, ValidationError) as e:
            log_operation_error(
                logger,
                create_cache_error(
                    f"Undecodable cache entry treated as a miss: {e}",
                    operation="cache_read",
                    key=cache_key,
                    original_error=e,
                    code=ErrorCode.CACHE_CORRUPTED,
                ),
                level=logging.WARNING,
            )
            return None

        return cached if cached.events else None

    async def _write_cache(self, cache_key: str, payload: CachedResult, ttl_seconds: int) -> None:
        try:
            await self._call(self.cache_store.set_with_ttl, cache_key, payload.to_bytes(), ttl_seconds)
        except Exception as e:  # noqa: BLE001
            self._absorb_cache_failure(e, "cache_write", key=cache_key)
            return
        logger.debug("Cached %d events under %s for %ds", len(payload.events), cache_key, ttl_seconds)

    async def _call(self, func: Callable[..., T], *args: Any) -> T:
        """Run a blocking store call in a worker thread, bounded by the timeout."""
        return await asyncio.wait_for(asyncio.to_thread(func, *args), self.timeout_seconds)

    def _absorb_cache_failure(self, error: Exception, operation: str, key: str | None = None) -> None:
        if isinstance(error, CacheUnavailableError):
            cache_error = error
        elif isinstance(error, asyncio.TimeoutError):
            cache_error = create_cache_error(
                f"Cache store timed out after {self.timeout_seconds}s",
                operation=operation,
                key=key,
                original_error=error,
                timed_out=True,
            )
        else:
            cache_error = create_cache_error(
                f"Cache store failed: {error}",
                operation=operation,
                key=key,
                original_error=error,
            )
        log_operation_error(logger, cache_error, operation=operation, level=logging.WARNING)

    @staticmethod
    def _upstream_failure(error: UpstreamUnavailableError) -> UpstreamUnavailableError:
        log_operation_error(logger, error)
        return error

    @staticmethod
    def _validate_city_name(city_name: Any, operation: str) -> str:
        if not isinstance(city_name, str) or not city_name.strip():
            raise create_invalid_input_error(
                "City name must be a non-empty string",
                code=ErrorCode.INVALID_CITY,
                field="city",
                operation=operation,
            )
        return city_name.strip()

    @staticmethod
    def _normalize_filters(filters: FiltersInput) -> SearchFilters:
        try:
            return SearchFilters.from_mapping(filters)
        except (ValidationError, TypeError, ValueError) as e:
            raise create_invalid_input_error(
                f"Invalid search filters: {e}",
                code=ErrorCode.INVALID_FILTERS,
                field="filters",
                operation="get_events",
            ) from e

    def _build_result(
        self,
        events: Sequence[EventSummary],
        from_cache: bool,
        city: str,
        radius: float,
        search_filters: SearchFilters,
        cache_key: str | None,
    ) -> SearchResult:
        return SearchResult(
            events=list(events),
            from_cache=from_cache,
            city=city,
            radius_km=radius,
            filters=search_filters.as_dict(),
            timestamp=self._clock(),
            cache_key=cache_key,
        )
