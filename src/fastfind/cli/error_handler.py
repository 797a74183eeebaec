"""
CLI Error Handling Utilities

Maps exceptions raised by commands to a user message, a log record and an
exit code:

- InvalidInputError -> usage-style message, exit 2
- UpstreamUnavailableError -> "temporarily unavailable", exit 1
- ApplicationError / invalid settings -> configuration message, exit 1
- anything else -> unexpected error, exit 1
"""

from __future__ import annotations

import logging

import typer
from pydantic import ValidationError
from rich.console import Console

from fastfind.cli.json_formatter import format_error_output
from fastfind.shared.constants import CLIDefaults, CLIMessages
from fastfind.shared.errors import (
    ApplicationError,
    ErrorCode,
    ErrorContext,
    FastFindError,
    InvalidInputError,
    UpstreamUnavailableError,
)
from fastfind.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


def _describe(error: Exception) -> tuple[str, int]:
    if isinstance(error, InvalidInputError):
        return CLIMessages.INVALID_INPUT.format(message=error.message), CLIDefaults.EXIT_INVALID_INPUT
    if isinstance(error, UpstreamUnavailableError):
        return CLIMessages.UPSTREAM_UNAVAILABLE, CLIDefaults.EXIT_ERROR
    if isinstance(error, ApplicationError):
        return f"Configuration error: {error.message}", CLIDefaults.EXIT_ERROR
    if isinstance(error, ValidationError):
        return f"Invalid configuration: {error.error_count()} invalid value(s)", CLIDefaults.EXIT_ERROR
    if isinstance(error, FastFindError):
        return error.message, CLIDefaults.EXIT_ERROR
    return f"Unexpected error: {error}", CLIDefaults.EXIT_ERROR


def handle_cli_error(error: Exception, command: str, *, json_output: bool = False) -> int:
    """Report error for command and return the exit code.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    message, exit_code = _describe(error)

    if isinstance(error, FastFindError):
        # Service-level failures were already logged where they happened
        if not isinstance(error, (InvalidInputError, UpstreamUnavailableError)):
            log_operation_error(logger, error, operation=command)
    else:
        log_operation_error(
            logger,
            FastFindError(
                ErrorCode.CLI_UNEXPECTED_ERROR,
                str(error),
                ErrorContext(operation=command),
                original_error=error,
            ),
            operation=command,
        )

    if json_output:
        typer.echo(format_error_output(command, [message]).decode("utf-8"))
    else:
        Console(stderr=True).print(message, style="red", markup=False, highlight=False)

    return exit_code
