"""FastFind Error Handling Module

This module defines the error handling system for FastFind, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved

Only InvalidInputError and UpstreamUnavailableError are meant to cross the
ProximityCacheService boundary. CacheUnavailableError is raised by cache
adapters and absorbed by the service.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for FastFind.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Input Validation Errors
    INVALID_RADIUS = "INVALID_RADIUS"
    INVALID_CITY = "INVALID_CITY"
    INVALID_FILTERS = "INVALID_FILTERS"
    INVALID_COORDINATES = "INVALID_COORDINATES"

    # Upstream (source of truth) Errors
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    UPSTREAM_INVALID_RESPONSE = "UPSTREAM_INVALID_RESPONSE"
    GEOCODER_UNAVAILABLE = "GEOCODER_UNAVAILABLE"

    # Cache Errors
    CACHE_UNAVAILABLE = "CACHE_UNAVAILABLE"
    CACHE_TIMEOUT = "CACHE_TIMEOUT"
    CACHE_CORRUPTED = "CACHE_CORRUPTED"

    # Configuration Errors
    CONFIG_INVALID = "CONFIG_INVALID"
    CONFIG_MISSING = "CONFIG_MISSING"
    DUPLICATE_CITY = "DUPLICATE_CITY"

    # Application Errors
    APPLICATION_ERROR = "APPLICATION_ERROR"
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to keep log records serializable.

    Attributes:
        operation: Optional operation name that caused the error
        city: Optional city the operation was working on
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    city: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as a dict for logging.

        additional_data is always present (never None) so consumers can
        index into it without checks.

        Example:
            >>> ErrorContext(operation="get_events").safe_dict()
            {'operation': 'get_events', 'additional_data': {}}
        """
        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.city is not None:
            data["city"] = self.city
        data["additional_data"] = dict(self.additional_data or {})
        return data


class FastFindError(Exception):
    """Base exception class for all FastFind errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize FastFindError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error
        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging and JSON output."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(FastFindError):
    """Domain-specific errors.

    Raised when a request or a piece of data violates a domain rule,
    e.g. a non-positive radius or a latitude outside [-90, 90].
    """


class InfrastructureError(FastFindError):
    """Infrastructure-related errors.

    Raised when talking to an external system (event store, cache store,
    geocoding service) fails.
    """


class ApplicationError(FastFindError):
    """Application-level errors such as invalid configuration."""


class InvalidInputError(DomainError):
    """Malformed caller input, rejected before any store is touched."""


class InvalidCoordinatesError(InvalidInputError):
    """Coordinates that are NaN, infinite, or outside the valid range."""


class UpstreamUnavailableError(InfrastructureError):
    """The source of truth could not be reached or timed out.

    Always surfaced to the caller so that "no events" can be told apart
    from "could not determine events".
    """


class CacheUnavailableError(InfrastructureError):
    """The cache store could not be reached or timed out.

    Never surfaced to callers of ProximityCacheService; the service falls
    back to live computation.
    """


def create_invalid_input_error(
    message: str,
    code: ErrorCode,
    field: str | None = None,
    operation: str | None = None,
) -> InvalidInputError:
    """Create an invalid input error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"field": field} if field else None
    )
    context = ErrorContext(operation=operation, additional_data=additional_data)
    return InvalidInputError(code, message, context)


def create_upstream_error(
    message: str,
    operation: str | None = None,
    city: str | None = None,
    original_error: Exception | None = None,
    *,
    timed_out: bool = False,
) -> UpstreamUnavailableError:
    """Create an upstream unavailable error with context."""
    code = ErrorCode.UPSTREAM_TIMEOUT if timed_out else ErrorCode.UPSTREAM_UNAVAILABLE
    context = ErrorContext(operation=operation, city=city)
    return UpstreamUnavailableError(code, message, context, original_error)


def create_cache_error(
    message: str,
    operation: str | None = None,
    key: str | None = None,
    original_error: Exception | None = None,
    *,
    timed_out: bool = False,
    code: ErrorCode | None = None,
) -> CacheUnavailableError:
    """Create a cache unavailable error with context."""
    if code is None:
        code = ErrorCode.CACHE_TIMEOUT if timed_out else ErrorCode.CACHE_UNAVAILABLE
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"key": key} if key else None
    )
    context = ErrorContext(operation=operation, additional_data=additional_data)
    return CacheUnavailableError(code, message, context, original_error)


def create_config_error(
    message: str,
    config_key: str | None = None,
    code: ErrorCode = ErrorCode.CONFIG_INVALID,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(operation="load_config", additional_data=additional_data)
    return ApplicationError(code, message, context, original_error)
