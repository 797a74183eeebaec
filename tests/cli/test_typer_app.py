"""End-to-end tests for the fastfind CLI.

Each test points the CLI at a TOML config with a temporary SQLite cache and a
JSON events file, so commands run against real adapters.
"""

from __future__ import annotations

from pathlib import Path

import orjson
import pytest
from rich.console import Console
from typer.testing import CliRunner

from fastfind.cli import typer_app
from fastfind.cli.typer_app import app
from fastfind.shared.constants import CLIDefaults, CLIMessages

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Render tables wide enough that cell text is never wrapped."""
    monkeypatch.setattr(typer_app, "console", Console(width=200))


def _event(event_id: str, latitude: float, longitude: float, **overrides) -> dict:
    event = {
        "id": event_id,
        "title": f"Event {event_id}",
        "description": "",
        "category": "music",
        "status": "upcoming",
        "isActive": True,
        "startDate": "2099-01-01T18:00:00Z",
        "endDate": "2099-01-01T21:00:00Z",
        "venue": {"name": "Hall", "latitude": latitude, "longitude": longitude},
    }
    event.update(overrides)
    return event


@pytest.fixture
def events_file(tmp_path: Path) -> Path:
    path = tmp_path / "events.json"
    path.write_bytes(
        orjson.dumps(
            {
                "events": [
                    # About 4 km north of the Mumbai reference point
                    _event("near", 19.1120, 72.8777, title="Jazz by the Sea"),
                    # About 15 km north
                    _event("far", 19.2109, 72.8777),
                ]
            }
        )
    )
    return path


@pytest.fixture
def config_file(tmp_path: Path, events_file: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(
        "\n".join(
            [
                "[logging]",
                'level = "ERROR"',
                "console_output = false",
                "",
                "[cache]",
                'backend = "sqlite"',
                f"sqlite_path = {orjson.dumps(str(tmp_path / 'cache.db')).decode()}",
                "",
                "[store]",
                f"events_file = {orjson.dumps(str(events_file)).decode()}",
                "",
            ]
        ),
        encoding="utf-8",
    )
    return path


def invoke_json(config_file: Path, *args: str) -> tuple[int, dict]:
    result = runner.invoke(app, ["--config", str(config_file), "--log-level", "CRITICAL", "--json", *args])
    return result.exit_code, orjson.loads(result.stdout)


class TestCliFailures:
    def test_invalid_radius_exits_with_usage_code(self, config_file: Path) -> None:
        result = runner.invoke(app, ["--config", str(config_file), "search", "Mumbai", "--radius=0"])

        assert result.exit_code == CLIDefaults.EXIT_INVALID_INPUT

    def test_invalid_radius_json_envelope(self, config_file: Path) -> None:
        exit_code, output = invoke_json(config_file, "search", "Mumbai", "--radius=-3")

        assert exit_code == CLIDefaults.EXIT_INVALID_INPUT
        assert output["success"] is False
        assert output["errors"][0].startswith("Invalid input")

    def test_unavailable_event_store(self, config_file: Path, events_file: Path) -> None:
        # Given
        events_file.unlink()

        # When
        exit_code, output = invoke_json(config_file, "search", "Mumbai")

        # Then
        assert exit_code == CLIDefaults.EXIT_ERROR
        assert output["errors"] == [CLIMessages.UPSTREAM_UNAVAILABLE]

    def test_missing_config_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--config", str(tmp_path / "missing.toml"), "cities"])

        assert result.exit_code == CLIDefaults.EXIT_ERROR


class TestSearchCommand:
    def test_first_live_then_cached(self, config_file: Path) -> None:
        # When
        first_code, first = invoke_json(config_file, "search", "Mumbai", "--radius", "10")
        second_code, second = invoke_json(config_file, "search", "mumbai", "--radius", "10")

        # Then
        assert first_code == second_code == 0
        assert first["data"]["fromCache"] is False
        assert first["data"]["totalResults"] == 1
        assert first["data"]["events"][0]["id"] == "near"
        assert first["data"]["cacheKey"] == "events:location:mumbai:10km"
        assert second["data"]["fromCache"] is True
        assert second["data"]["events"] == first["data"]["events"]

    def test_filters_are_echoed(self, config_file: Path) -> None:
        _, output = invoke_json(config_file, "search", "Mumbai", "--category", "music", "--search", "JAZZ")

        assert output["data"]["filters"] == {"category": "music", "search": "JAZZ"}
        assert output["data"]["cacheKey"] == "events:location:mumbai:10km:category:music|search:jazz"
        assert output["data"]["totalResults"] == 1

    def test_unregistered_city_is_empty_and_live(self, config_file: Path) -> None:
        exit_code, output = invoke_json(config_file, "search", "Atlantis")

        assert exit_code == 0
        assert output["data"]["fromCache"] is False
        assert output["data"]["totalResults"] == 0
        assert output["data"]["cacheKey"] is None

    def test_table_output(self, config_file: Path) -> None:
        result = runner.invoke(app, ["--config", str(config_file), "search", "Mumbai"])

        assert result.exit_code == 0
        assert "1 events within 10km of Mumbai" in result.stdout
        assert "Event near" in result.stdout
        assert CLIMessages.FROM_LIVE in result.stdout

    def test_no_events_message(self, config_file: Path) -> None:
        result = runner.invoke(app, ["--config", str(config_file), "search", "Delhi", "-r", "5"])

        assert result.exit_code == 0
        assert "No events found" in result.stdout


class TestCacheCommands:
    def test_cities(self, config_file: Path) -> None:
        exit_code, output = invoke_json(config_file, "cities")

        assert exit_code == 0
        cities = output["data"]["cities"]
        assert cities[0]["tier"] == 1
        assert {"name": "Mumbai", "state": "Maharashtra", "tier": 1} in cities

    def test_stats_and_invalidate(self, config_file: Path) -> None:
        # Given
        invoke_json(config_file, "search", "Mumbai")

        # When
        _, stats = invoke_json(config_file, "stats")
        _, invalidated = invoke_json(config_file, "invalidate", "Mumbai")
        _, stats_after = invoke_json(config_file, "stats")

        # Then
        assert stats["data"] == {
            "totalCachedSearches": 1,
            "cachedCities": ["mumbai"],
            "cacheKeys": ["events:location:mumbai:10km"],
        }
        assert invalidated["data"] == {"city": "Mumbai", "deleted": 1}
        assert stats_after["data"]["totalCachedSearches"] == 0

    def test_ping(self, config_file: Path) -> None:
        exit_code, output = invoke_json(config_file, "ping")

        assert exit_code == 0
        assert output["data"] == {"cacheReachable": True}
