"""Registry of cities eligible for location caching.

The registry is built once at start-up and never mutated afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import toml
from pydantic import ValidationError

from fastfind.core.cities import BUILTIN_CITIES
from fastfind.core.models.city import CityDescriptor, normalize_city_name
from fastfind.core.models.geo import Coordinates
from fastfind.shared.errors import ErrorCode, create_config_error

logger = logging.getLogger(__name__)


class CityRegistry:
    """Immutable, case-insensitive index of cacheable cities.

    Lookup is an exact match on the trimmed, case-folded name. There is no
    fuzzy matching: "Bangalore" and "Bengaluru" are different entries.

    Example:
        >>> registry = CityRegistry.default()
        >>> registry.lookup("mumbai").name
        'Mumbai'
        >>> registry.lookup("Atlantis") is None
        True
    """

    def __init__(self, cities: Iterable[CityDescriptor]) -> None:
        """Build the index.

        Args:
            cities: City descriptors; names must be unique ignoring case

        Raises:
            ApplicationError: If two cities share a name
        """
        by_key: dict[str, CityDescriptor] = {}
        for city in cities:
            if city.key in by_key:
                raise create_config_error(
                    f"Duplicate city in registry: {city.name!r}",
                    config_key="cities",
                    code=ErrorCode.DUPLICATE_CITY,
                )
            by_key[city.key] = city

        self._by_key = by_key
        self._ordered = tuple(
            sorted(by_key.values(), key=lambda c: (c.tier, c.name.casefold()))
        )

    @classmethod
    def default(cls) -> CityRegistry:
        """Registry populated from the built-in city list."""
        return cls(BUILTIN_CITIES)

    @classmethod
    def from_toml(cls, file_path: str | Path) -> CityRegistry:
        """Load a registry from a TOML file with a ``[[cities]]`` array.

        Each entry needs ``name``, ``state``, ``tier``, ``latitude``,
        ``longitude`` and ``cache_ttl_seconds``.

        Raises:
            ApplicationError: If the file is missing, unreadable or invalid
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise create_config_error(
                f"City file not found: {file_path}",
                config_key="registry.cities_file",
                code=ErrorCode.CONFIG_MISSING,
            )

        try:
            raw = toml.load(file_path)
            cities = [_city_from_mapping(entry) for entry in raw.get("cities", [])]
        except (toml.TomlDecodeError, OSError, KeyError, TypeError, ValidationError) as e:
            raise create_config_error(
                f"Invalid city file {file_path}: {e}",
                config_key="registry.cities_file",
                original_error=e,
            ) from e

        if not cities:
            raise create_config_error(
                f"City file {file_path} defines no cities",
                config_key="registry.cities_file",
            )

        logger.info("Loaded %d cacheable cities from %s", len(cities), file_path)
        return cls(cities)

    def lookup(self, city_name: str) -> CityDescriptor | None:
        """Find a city by name, ignoring case and surrounding whitespace."""
        return self._by_key.get(normalize_city_name(city_name))

    def list_all(self) -> tuple[CityDescriptor, ...]:
        """All cities ordered by tier, then name."""
        return self._ordered

    def __contains__(self, city_name: object) -> bool:
        return isinstance(city_name, str) and self.lookup(city_name) is not None

    def __len__(self) -> int:
        return len(self._ordered)


def _city_from_mapping(entry: dict[str, Any]) -> CityDescriptor:
    return CityDescriptor(
        name=entry["name"],
        state_name=entry["state"],
        tier=entry["tier"],
        coordinates=Coordinates(float(entry["latitude"]), float(entry["longitude"])),
        cache_ttl_seconds=entry["cache_ttl_seconds"],
    )
