"""Nominatim geocoder for cities outside the registry."""

from __future__ import annotations

import logging
from typing import Any

from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from fastfind.core.models import Coordinates
from fastfind.shared.constants import Timeout
from fastfind.shared.errors import ErrorCode, ErrorContext, UpstreamUnavailableError

logger = logging.getLogger(__name__)


class NominatimGeocoder:
    """Resolve a city name to coordinates with OpenStreetMap Nominatim.

    Args:
        user_agent: User agent required by the Nominatim usage policy
        country_hint: Optional ISO country code restricting matches
        timeout: Per-request timeout in seconds
        client: Pre-built geopy geocoder, mainly for tests
    """

    def __init__(
        self,
        user_agent: str = "fastfind",
        country_hint: str | None = None,
        timeout: float = Timeout.GEOCODER,
        client: Any | None = None,
    ) -> None:
        self.country_hint = country_hint
        self.timeout = timeout
        self.client = client or Nominatim(user_agent=user_agent)

    def geocode(self, city_name: str) -> Coordinates | None:
        """Return the coordinates of city_name, or None if nothing matches.

        Raises:
            UpstreamUnavailableError: If the geocoding service fails
        """
        kwargs: dict[str, Any] = {"exactly_one": True, "timeout": self.timeout}
        if self.country_hint:
            kwargs["country_codes"] = self.country_hint

        try:
            location = self.client.geocode(city_name, **kwargs)
        except GeopyError as e:
            raise UpstreamUnavailableError(
                ErrorCode.GEOCODER_UNAVAILABLE,
                f"Geocoding failed for {city_name!r}: {e}",
                ErrorContext(operation="geocode", city=city_name),
                original_error=e,
            ) from e

        if location is None:
            logger.info("No geocoding match for %r", city_name)
            return None
        return Coordinates(float(location.latitude), float(location.longitude))
