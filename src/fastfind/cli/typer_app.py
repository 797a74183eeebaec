"""
FastFind Typer CLI Application

Commands:
    search      Events near a city, served from cache when possible
    cities      Cities eligible for caching
    stats       Contents of the location cache
    invalidate  Drop every cached search for a city
    ping        Check that the cache store is reachable
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

import typer
from dependency_injector import providers
from rich.console import Console
from rich.table import Table

from fastfind.cli.context import CliContext, LogLevel, get_cli_context, set_cli_context
from fastfind.cli.error_handler import handle_cli_error
from fastfind.cli.json_formatter import format_success_output
from fastfind.config.loader import load_settings
from fastfind.containers import Container
from fastfind.core.models import CacheStatistics, SearchResult
from fastfind.shared.cache_utils import format_radius
from fastfind.shared.constants import Application, CLICommands, CLIDefaults, CLIMessages
from fastfind.shared.logging import setup_structured_logger

console = Console()

app = typer.Typer(
    name="fastfind",
    help=Application.DESCRIPTION,
    add_completion=False,
    no_args_is_help=True,
)


def create_container(cli_context: CliContext) -> Container:
    """Load settings, configure logging and wire the service container."""
    settings = load_settings(cli_context.config_path)

    level = cli_context.log_level.value if cli_context.log_level else settings.logging.level
    setup_structured_logger(
        "fastfind",
        level=level,
        log_file=settings.logging.file,
        use_rich_console=settings.logging.console_output,
    )

    container = Container()
    container.config.override(providers.Object(settings))
    return container


def _run(command: str, action: Callable[[Container], int | None]) -> None:
    """Run action against a fresh container and map failures to exit codes."""
    cli_context = get_cli_context()
    try:
        exit_code = action(create_container(cli_context))
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, command, json_output=cli_context.json_output)
        raise typer.Exit(exit_code) from e
    if exit_code:
        raise typer.Exit(exit_code)


def _emit_json(command: str, data: Any) -> None:
    typer.echo(format_success_output(command, data).decode("utf-8"))


@app.callback()
def main(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML configuration file",
        dir_okay=False,
    ),
    log_level: Optional[LogLevel] = typer.Option(
        None,
        "--log-level",
        help="Override the configured log level",
        case_sensitive=False,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output results in JSON format",
    ),
) -> None:
    """Geo-proximity event search with per-city caching."""
    set_cli_context(
        CliContext(config_path=config, log_level=log_level, json_output=json_output)
    )


@app.command(CLICommands.SEARCH)
def search_command(
    city: str = typer.Argument(..., help="City to search around"),
    radius: Optional[float] = typer.Option(
        None,
        "--radius",
        "-r",
        help="Search radius in kilometres (default from settings)",
    ),
    category: Optional[str] = typer.Option(None, "--category", help="Exact category"),
    search: Optional[str] = typer.Option(
        None,
        "--search",
        "-s",
        help="Case-insensitive text in title or description",
    ),
) -> None:
    """
    Find events within a radius of a city.

    Examples:
        fastfind search Mumbai --radius 10 --category music
        fastfind --json search Delhi --search jazz
    """

    def action(container: Container) -> None:
        radius_km = radius if radius is not None else container.config().search.default_radius_km
        service = container.proximity_cache_service()
        result = asyncio.run(
            service.get_events(city, radius_km, {"category": category, "search": search})
        )
        if get_cli_context().json_output:
            _emit_json(CLICommands.SEARCH, result.to_dict())
        else:
            _print_search_result(result)

    _run(CLICommands.SEARCH, action)


@app.command(CLICommands.CITIES)
def cities_command() -> None:
    """List the cities whose searches are cached."""

    def action(container: Container) -> None:
        cities = container.proximity_cache_service().list_cacheable_cities()
        if get_cli_context().json_output:
            _emit_json(CLICommands.CITIES, {"cities": cities})
            return

        table = Table(title="Cacheable cities", show_header=True, header_style="bold magenta")
        table.add_column("Tier", style="cyan", justify="right")
        table.add_column("City", style="green")
        table.add_column("State")
        for city in cities:
            table.add_row(str(city["tier"]), str(city["name"]), str(city["state"]))
        console.print(table)

    _run(CLICommands.CITIES, action)


@app.command(CLICommands.STATS)
def stats_command() -> None:
    """Show what the location cache currently holds."""

    def action(container: Container) -> None:
        stats = asyncio.run(container.proximity_cache_service().cache_statistics())
        if get_cli_context().json_output:
            _emit_json(CLICommands.STATS, stats.to_dict())
        else:
            _print_statistics(stats)

    _run(CLICommands.STATS, action)


@app.command(CLICommands.INVALIDATE)
def invalidate_command(
    city: str = typer.Argument(..., help="City whose cached searches are dropped"),
) -> None:
    """Drop every cached search for a city."""

    def action(container: Container) -> None:
        deleted = asyncio.run(container.proximity_cache_service().invalidate_city(city))
        if get_cli_context().json_output:
            _emit_json(CLICommands.INVALIDATE, {"city": city.strip(), "deleted": deleted})
        else:
            console.print(CLIMessages.INVALIDATED.format(count=deleted, city=city.strip()))

    _run(CLICommands.INVALIDATE, action)


@app.command(CLICommands.PING)
def ping_command() -> None:
    """Check the cache store. Exits 1 when it is unreachable."""

    def action(container: Container) -> int:
        reachable = asyncio.run(container.proximity_cache_service().check_cache())
        if get_cli_context().json_output:
            _emit_json(CLICommands.PING, {"cacheReachable": reachable})
        elif reachable:
            console.print(f"[green]{CLIMessages.CACHE_OK}[/green]")
        else:
            console.print(f"[yellow]{CLIMessages.CACHE_DOWN}[/yellow]")
        return CLIDefaults.EXIT_SUCCESS if reachable else CLIDefaults.EXIT_ERROR

    _run(CLICommands.PING, action)


def _print_search_result(result: SearchResult) -> None:
    if not result.events:
        console.print(
            CLIMessages.NO_EVENTS.format(radius=format_radius(result.radius_km), city=result.city),
            highlight=False,
        )
        return

    source = CLIMessages.FROM_CACHE if result.from_cache else CLIMessages.FROM_LIVE
    table = Table(
        title=f"{result.total_results} events within {format_radius(result.radius_km)}km of {result.city}",
        caption=source,
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Title", style="green")
    table.add_column("Category", style="cyan")
    table.add_column("Venue")
    table.add_column("Distance", justify="right")
    table.add_column("Starts")
    for event in result.events:
        table.add_row(
            event.title,
            event.category,
            event.venue.name if event.venue else "",
            f"{event.distance_km:.1f} km" if event.distance_km is not None else "",
            event.start_date.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


def _print_statistics(stats: CacheStatistics) -> None:
    table = Table(title="Location cache", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Cached searches", str(stats.total_cached_searches))
    table.add_row("Cached cities", ", ".join(stats.cached_cities) or "-")
    console.print(table)

    for key in stats.cache_keys:
        console.print(f"  {key}", highlight=False, markup=False)
