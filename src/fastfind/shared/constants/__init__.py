"""
FastFind Constants Module

Centralized constants for the FastFind application.
"""

from .cache import CacheBackend, CityCacheTTL, LocationCache
from .cli import CLICommands, CLIDefaults, CLIMessages
from .geo import Geo
from .search import EventStatus, Provenance, SearchDefaults
from .system import Application, FileSystem, Logging, Timeout

__all__ = [
    "Application",
    "CLICommands",
    "CLIDefaults",
    "CLIMessages",
    "CacheBackend",
    "CityCacheTTL",
    "EventStatus",
    "FileSystem",
    "Geo",
    "LocationCache",
    "Logging",
    "Provenance",
    "SearchDefaults",
    "Timeout",
]
