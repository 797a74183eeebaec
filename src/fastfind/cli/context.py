"""
CLI Context Management Module

Holds the global options parsed by the main callback so that every command
sees the same config path, log level and output mode.
"""

from __future__ import annotations

import contextvars
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """Log level enumeration for type safety."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CliContext(BaseModel):
    """
    Global CLI options.

    Attributes:
        config_path: Explicit TOML configuration file, if any
        log_level: Overrides the configured log level when set
        json_output: Whether to output in JSON format
    """

    config_path: Path | None = Field(default=None, description="Configuration file")
    log_level: LogLevel | None = Field(default=None, description="Logging level override")
    json_output: bool = Field(default=False, description="Whether to output in JSON format")


_cli_context: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "fastfind_cli_context",
    default=None,
)


def set_cli_context(context: CliContext) -> None:
    """Store the context for the running command."""
    _cli_context.set(context)


def get_cli_context() -> CliContext:
    """Return the current context, or defaults if none was set."""
    return _cli_context.get() or CliContext()
