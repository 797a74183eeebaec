"""
JSON Output Formatter for FastFind CLI

Every command emits the same envelope when --json is given.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import orjson


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
    warnings: list[str] | None = None,
) -> bytes:
    """
    Format command output as JSON.

    Args:
        success: Whether the command executed successfully
        command: The command name (e.g., "search", "stats")
        data: The command's output data
        errors: List of error messages
        warnings: List of warning messages

    Returns:
        JSON-encoded bytes ready for output

    Example:
        >>> output = format_json_output(True, "cities", data={"cities": []})
        >>> print(output.decode())
        {
          "command": "cities",
          "data": {
            "cities": []
          },
          "errors": [],
          "success": true,
          "timestamp": "2026-01-01T10:30:00+00:00",
          "warnings": []
        }
    """
    errors = errors or []
    warnings = warnings or []

    # Any error means failure
    if errors:
        success = False

    json_data = {
        "success": success,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": data,
        "errors": errors,
        "warnings": warnings,
    }

    try:
        return orjson.dumps(
            json_data,
            option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
        )
    except TypeError as e:
        error_data = {
            "success": False,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "command": command,
            "data": None,
            "errors": [f"JSON serialization failed: {e!s}"],
            "warnings": [],
        }
        return orjson.dumps(
            error_data,
            option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
        )


def format_success_output(command: str, data: Any, warnings: list[str] | None = None) -> bytes:
    """Format successful command output."""
    return format_json_output(success=True, command=command, data=data, warnings=warnings)


def format_error_output(command: str, errors: list[str], data: Any | None = None) -> bytes:
    """Format failed command output."""
    return format_json_output(success=False, command=command, data=data, errors=errors)
