"""Event store, search, registry and geocoder configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from fastfind.shared.constants import FileSystem, SearchDefaults, Timeout


class StoreSettings(BaseModel):
    """Event store source and the timeout applied to every store call."""

    events_file: str = Field(
        default=FileSystem.EVENTS_FILE,
        description="JSON document holding the events",
    )
    timeout_seconds: float = Field(
        default=Timeout.STORE,
        gt=0,
        description="Bound on each event store, cache store and geocoder call",
    )


class SearchSettings(BaseModel):
    """Search defaults."""

    default_radius_km: float = Field(default=SearchDefaults.RADIUS_KM, gt=0)
    max_results: int = Field(default=SearchDefaults.MAX_RESULTS, gt=0)


class RegistrySettings(BaseModel):
    """Source of the cacheable city list."""

    cities_file: str | None = Field(
        default=None,
        description="TOML file replacing the built-in cities",
    )


class GeocoderSettings(BaseModel):
    """Geocoding of cities that are not in the registry."""

    enabled: bool = Field(default=False, description="Resolve unregistered cities")
    user_agent: str = Field(default="fastfind", description="Nominatim user agent")
    country_hint: str | None = Field(
        default="in",
        description="ISO country code restricting geocoder matches",
    )
    timeout_seconds: float = Field(default=Timeout.GEOCODER, gt=0)


__all__ = [
    "GeocoderSettings",
    "RegistrySettings",
    "SearchSettings",
    "StoreSettings",
]
