"""Built-in cacheable cities.

Coordinates are city-centre reference points. TTLs are tuned per city;
a deployment can replace this whole list with a TOML file (see
``registry.cities_file`` in the settings).
"""

from __future__ import annotations

from fastfind.core.models.city import CityDescriptor
from fastfind.core.models.geo import Coordinates
from fastfind.shared.constants import CityCacheTTL


def _city(
    name: str,
    state_name: str,
    tier: int,
    latitude: float,
    longitude: float,
    cache_ttl_seconds: int,
) -> CityDescriptor:
    return CityDescriptor(
        name=name,
        state_name=state_name,
        tier=tier,
        coordinates=Coordinates(latitude, longitude),
        cache_ttl_seconds=cache_ttl_seconds,
    )


BUILTIN_CITIES: tuple[CityDescriptor, ...] = (
    # Tier 1
    _city("Mumbai", "Maharashtra", 1, 19.0760, 72.8777, CityCacheTTL.FAST_MOVING),
    _city("Delhi", "Delhi", 1, 28.7041, 77.1025, CityCacheTTL.FAST_MOVING),
    _city("Bangalore", "Karnataka", 1, 12.9716, 77.5946, CityCacheTTL.FAST_MOVING),
    _city("Hyderabad", "Telangana", 1, 17.3850, 78.4867, CityCacheTTL.STANDARD),
    _city("Chennai", "Tamil Nadu", 1, 13.0827, 80.2707, CityCacheTTL.STANDARD),
    _city("Kolkata", "West Bengal", 1, 22.5726, 88.3639, CityCacheTTL.STANDARD),
    _city("Pune", "Maharashtra", 1, 18.5204, 73.8567, CityCacheTTL.FAST_MOVING),
    _city("Ahmedabad", "Gujarat", 1, 23.0225, 72.5714, CityCacheTTL.STANDARD),
    # Tier 2
    _city("Jaipur", "Rajasthan", 2, 26.9124, 75.7873, CityCacheTTL.STANDARD),
    _city("Lucknow", "Uttar Pradesh", 2, 26.8467, 80.9462, CityCacheTTL.STANDARD),
    _city("Chandigarh", "Chandigarh", 2, 30.7333, 76.7794, CityCacheTTL.STANDARD),
    _city("Kochi", "Kerala", 2, 9.9312, 76.2673, CityCacheTTL.STANDARD),
    _city("Indore", "Madhya Pradesh", 2, 22.7196, 75.8577, CityCacheTTL.SLOW_MOVING),
    _city("Surat", "Gujarat", 2, 21.1702, 72.8311, CityCacheTTL.SLOW_MOVING),
    _city("Nagpur", "Maharashtra", 2, 21.1458, 79.0882, CityCacheTTL.SLOW_MOVING),
    _city("Goa", "Goa", 2, 15.4909, 73.8278, CityCacheTTL.FAST_MOVING),
    # Tier 3
    _city("Bhopal", "Madhya Pradesh", 3, 23.2599, 77.4126, CityCacheTTL.SLOW_MOVING),
    _city("Coimbatore", "Tamil Nadu", 3, 11.0168, 76.9558, CityCacheTTL.SLOW_MOVING),
    _city("Visakhapatnam", "Andhra Pradesh", 3, 17.6868, 83.2185, CityCacheTTL.SLOW_MOVING),
    _city("Vadodara", "Gujarat", 3, 22.3072, 73.1812, CityCacheTTL.SLOW_MOVING),
    _city("Mysore", "Karnataka", 3, 12.2958, 76.6394, CityCacheTTL.SLOW_MOVING),
    _city("Thiruvananthapuram", "Kerala", 3, 8.5241, 76.9366, CityCacheTTL.SLOW_MOVING),
)
