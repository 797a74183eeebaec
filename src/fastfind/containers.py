"""Dependency Injection container for FastFind.

The container manages:
- Settings (Singleton)
- City registry (Singleton, built-in cities or a TOML city file)
- Cache store (Singleton, sqlite or redis per settings)
- Event store and optional geocoder
- ProximityCacheService (Singleton, one explicit instance per container)
"""

from __future__ import annotations

from dependency_injector import containers, providers

from fastfind.config.loader import load_settings
from fastfind.config.models.settings import Settings
from fastfind.core.city_registry import CityRegistry
from fastfind.services.cache_store import create_cache_store
from fastfind.services.event_store import JSONEventStore
from fastfind.services.geocoder import NominatimGeocoder
from fastfind.services.proximity_cache import ProximityCacheService


def create_city_registry(settings: Settings) -> CityRegistry:
    """Registry from the configured city file, or the built-in cities."""
    if settings.registry.cities_file:
        return CityRegistry.from_toml(settings.registry.cities_file)
    return CityRegistry.default()


def create_geocoder(settings: Settings) -> NominatimGeocoder | None:
    """Geocoder for unregistered cities, if enabled."""
    if not settings.geocoder.enabled:
        return None
    return NominatimGeocoder(
        user_agent=settings.geocoder.user_agent,
        country_hint=settings.geocoder.country_hint,
        timeout=settings.geocoder.timeout_seconds,
    )


class Container(containers.DeclarativeContainer):
    """Dependency Injection container for FastFind services.

    Example:
        >>> container = Container()
        >>> container.config.override(providers.Object(load_settings("config.toml")))
        >>> service = container.proximity_cache_service()
        >>> result = await service.get_events("Mumbai", 10)
    """

    # Configuration
    config = providers.Singleton(load_settings)

    # Collaborators
    city_registry = providers.Singleton(create_city_registry, settings=config)

    cache_store = providers.Singleton(create_cache_store, settings=config)

    event_store = providers.Singleton(
        JSONEventStore,
        file_path=providers.Callable(lambda config: config.store.events_file, config=config),
    )

    geocoder = providers.Singleton(create_geocoder, settings=config)

    # Service
    proximity_cache_service = providers.Singleton(
        ProximityCacheService,
        registry=city_registry,
        cache_store=cache_store,
        event_store=event_store,
        geocoder=geocoder,
        timeout_seconds=providers.Callable(
            lambda config: config.store.timeout_seconds,
            config=config,
        ),
        max_results=providers.Callable(
            lambda config: config.search.max_results,
            config=config,
        ),
    )
