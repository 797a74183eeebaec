"""Tests for location cache key derivation."""

from __future__ import annotations

import pytest

from fastfind.core.models import SearchFilters
from fastfind.shared.cache_utils import (
    build_location_cache_key,
    city_cache_prefix,
    city_from_cache_key,
    format_radius,
)


class TestFormatRadius:
    @pytest.mark.parametrize(
        ("radius", "expected"),
        [(10, "10"), (10.0, "10"), (2.5, "2.5"), (0.25, "0.25"), (12.3456789, "12.3456789")],
    )
    def test_shortest_form(self, radius: float, expected: str) -> None:
        assert format_radius(radius) == expected

    @pytest.mark.parametrize(
        ("first", "second"),
        [(10.0, 10.0000004), (12.3457, 12.3456789), (1000000.0, 1000000.5)],
    )
    def test_close_radii_stay_distinct(self, first: float, second: float) -> None:
        assert format_radius(first) != format_radius(second)
        assert build_location_cache_key("Mumbai", first) != build_location_cache_key("Mumbai", second)


class TestBuildLocationCacheKey:
    def test_documented_layout(self) -> None:
        filters = SearchFilters(category="music", search="Jazz")

        assert (
            build_location_cache_key("Mumbai", 10, filters)
            == "events:location:mumbai:10km:category:music|search:jazz"
        )

    def test_without_filters(self) -> None:
        assert build_location_cache_key("Mumbai", 10) == "events:location:mumbai:10km"
        assert build_location_cache_key("Mumbai", 10, SearchFilters()) == "events:location:mumbai:10km"

    def test_equivalent_requests_share_a_key(self) -> None:
        # Given
        first = SearchFilters.from_mapping({"search": "JAZZ ", "category": "music"})
        second = SearchFilters.from_mapping({"category": "music", "search": "jazz"})

        # When / Then
        assert build_location_cache_key(" MUMBAI ", 10.0, first) == build_location_cache_key(
            "mumbai", 10, second
        )

    def test_category_case_is_significant(self) -> None:
        assert build_location_cache_key("Mumbai", 10, SearchFilters(category="Music")) != (
            build_location_cache_key("Mumbai", 10, SearchFilters(category="music"))
        )

    def test_separator_in_value_cannot_collide(self) -> None:
        # Given
        crafted = SearchFilters(category="a|search:b")
        genuine = SearchFilters(category="a", search="b")

        # When
        crafted_key = build_location_cache_key("Mumbai", 10, crafted)
        genuine_key = build_location_cache_key("Mumbai", 10, genuine)

        # Then
        assert crafted_key != genuine_key
        assert crafted_key == "events:location:mumbai:10km:category:a%7Csearch%3Ab"

    def test_different_radius_different_key(self) -> None:
        assert build_location_cache_key("Pune", 5) != build_location_cache_key("Pune", 50)


class TestCityPrefix:
    def test_prefix_has_trailing_separator(self) -> None:
        assert city_cache_prefix(" Pune ") == "events:location:pune:"

    def test_prefix_does_not_match_longer_city(self) -> None:
        key = build_location_cache_key("Pune-Cantonment", 10)

        assert not key.startswith(city_cache_prefix("Pune"))

    def test_every_city_key_starts_with_prefix(self) -> None:
        key = build_location_cache_key("Pune", 7.5, SearchFilters(search="x"))

        assert key.startswith(city_cache_prefix("pune"))


class TestCityFromCacheKey:
    def test_extracts_city_segment(self) -> None:
        assert city_from_cache_key("events:location:mumbai:10km:category:music") == "mumbai"

    @pytest.mark.parametrize("key", ["other:namespace:mumbai", "events:location:", "events:location"])
    def test_foreign_or_truncated_keys(self, key: str) -> None:
        assert city_from_cache_key(key) is None
