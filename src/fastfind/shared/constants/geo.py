"""
Geographic Constants
"""


class Geo:
    """Great-circle computation constants."""

    EARTH_RADIUS_KM = 6371.0

    MIN_LATITUDE = -90.0
    MAX_LATITUDE = 90.0
    MIN_LONGITUDE = -180.0
    MAX_LONGITUDE = 180.0
