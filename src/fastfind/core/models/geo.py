"""Geographic value types."""

from __future__ import annotations

from typing import NamedTuple


class Coordinates(NamedTuple):
    """A (latitude, longitude) pair in decimal degrees.

    Range checks are done by the geo filter at computation time so that
    bad data coming from a store surfaces as a typed error there.
    """

    latitude: float
    longitude: float
