"""Great-circle distance and radius membership.

Pure functions, no state. Invalid coordinates or radii raise typed errors
instead of producing a distance that looks plausible but is wrong.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from fastfind.core.models.geo import Coordinates
from fastfind.shared.constants import Geo
from fastfind.shared.errors import (
    ErrorCode,
    ErrorContext,
    InvalidCoordinatesError,
    InvalidInputError,
)

PointLike = Coordinates | Sequence[float]


def validate_point(point: PointLike) -> Coordinates:
    """Check a (latitude, longitude) pair and return it as Coordinates.

    Raises:
        InvalidCoordinatesError: If either value is missing, not finite, or
            outside [-90, 90] / [-180, 180]
    """
    try:
        latitude, longitude = (float(value) for value in point)
    except (TypeError, ValueError) as e:
        raise InvalidCoordinatesError(
            ErrorCode.INVALID_COORDINATES,
            f"Expected a (latitude, longitude) pair, got {point!r}",
            ErrorContext(operation="validate_point"),
            original_error=e,
        ) from e

    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise InvalidCoordinatesError(
            ErrorCode.INVALID_COORDINATES,
            f"Coordinates must be finite, got ({latitude}, {longitude})",
            ErrorContext(operation="validate_point"),
        )
    if not Geo.MIN_LATITUDE <= latitude <= Geo.MAX_LATITUDE:
        raise InvalidCoordinatesError(
            ErrorCode.INVALID_COORDINATES,
            f"Latitude {latitude} is outside [-90, 90]",
            ErrorContext(operation="validate_point", additional_data={"latitude": latitude}),
        )
    if not Geo.MIN_LONGITUDE <= longitude <= Geo.MAX_LONGITUDE:
        raise InvalidCoordinatesError(
            ErrorCode.INVALID_COORDINATES,
            f"Longitude {longitude} is outside [-180, 180]",
            ErrorContext(operation="validate_point", additional_data={"longitude": longitude}),
        )
    return Coordinates(latitude, longitude)


def validate_radius(radius_km: float) -> float:
    """Check that a search radius is a positive, finite number of kilometres.

    Raises:
        InvalidInputError: If the radius is not a number, not finite, or <= 0
    """
    try:
        radius = float(radius_km)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            ErrorCode.INVALID_RADIUS,
            f"Radius must be a number, got {radius_km!r}",
            ErrorContext(operation="validate_radius"),
            original_error=e,
        ) from e
    if not math.isfinite(radius) or radius <= 0:
        raise InvalidInputError(
            ErrorCode.INVALID_RADIUS,
            f"Radius must be a positive number of kilometres, got {radius_km!r}",
            ErrorContext(operation="validate_radius"),
        )
    return radius


def distance_km(point_a: PointLike, point_b: PointLike) -> float:
    """Haversine distance between two points in kilometres.

    Args:
        point_a: (latitude, longitude) in decimal degrees
        point_b: (latitude, longitude) in decimal degrees

    Returns:
        Great-circle distance on a sphere of radius 6371 km

    Raises:
        InvalidCoordinatesError: If either point is invalid
    """
    lat1, lon1 = validate_point(point_a)
    lat2, lon2 = validate_point(point_b)

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return Geo.EARTH_RADIUS_KM * c


def is_within(center: PointLike, point: PointLike, radius_km: float) -> bool:
    """True if point lies within radius_km of center, boundary included.

    Raises:
        InvalidCoordinatesError: If either point is invalid
        InvalidInputError: If the radius is not positive and finite
    """
    radius = validate_radius(radius_km)
    return distance_km(center, point) <= radius
