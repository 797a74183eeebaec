"""Protocol interfaces for the external collaborators of the service layer."""

from __future__ import annotations

from .stores import CacheStoreProtocol, EventStoreProtocol, GeocoderProtocol

__all__ = [
    "CacheStoreProtocol",
    "EventStoreProtocol",
    "GeocoderProtocol",
]
