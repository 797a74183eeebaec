"""City reference data model."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fastfind.core.models.geo import Coordinates
from fastfind.shared.constants import Geo


class CityDescriptor(BaseModel):
    """One city eligible for caching.

    Attributes:
        name: Canonical display name; compared case-insensitively.
        state_name: State or region the city belongs to.
        tier: Traffic rank (1 = highest). Display grouping only.
        coordinates: Reference point distances are measured from.
        cache_ttl_seconds: Lifetime of cache entries keyed on this city.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    state_name: str = Field(..., min_length=1)
    tier: int = Field(..., ge=1)
    coordinates: Coordinates
    cache_ttl_seconds: int = Field(..., gt=0)

    @field_validator("name", "state_name")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "must not be blank"
            raise ValueError(msg)
        return value

    @field_validator("coordinates")
    @classmethod
    def _on_the_globe(cls, value: Coordinates) -> Coordinates:
        latitude, longitude = value
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            msg = f"coordinates must be finite, got ({latitude}, {longitude})"
            raise ValueError(msg)
        if not Geo.MIN_LATITUDE <= latitude <= Geo.MAX_LATITUDE:
            msg = f"latitude {latitude} is outside [-90, 90]"
            raise ValueError(msg)
        if not Geo.MIN_LONGITUDE <= longitude <= Geo.MAX_LONGITUDE:
            msg = f"longitude {longitude} is outside [-180, 180]"
            raise ValueError(msg)
        return value

    @property
    def key(self) -> str:
        """Case-insensitive lookup key, also used as the cache key segment."""
        return normalize_city_name(self.name)

    def summary(self) -> dict[str, str | int]:
        """Public view used by city selection lists."""
        return {"name": self.name, "state": self.state_name, "tier": self.tier}


def normalize_city_name(name: str) -> str:
    """Trim and case-fold a city name for comparison."""
    return name.strip().casefold()
