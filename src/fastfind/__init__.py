"""FastFind: geo-proximity event search with per-city read-through caching."""

from __future__ import annotations

from fastfind.shared.constants import Application

__version__ = Application.VERSION

__all__ = ["__version__"]
