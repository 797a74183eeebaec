"""Tests for the CLI JSON envelope."""

from __future__ import annotations

import orjson

from fastfind.cli.json_formatter import format_error_output, format_json_output, format_success_output


class TestFormatJsonOutput:
    def test_unserializable_data_reports_error(self) -> None:
        output = orjson.loads(format_json_output(True, "stats", data={"bad": object()}))

        assert output["success"] is False
        assert output["data"] is None
        assert output["errors"][0].startswith("JSON serialization failed")

    def test_errors_force_failure(self) -> None:
        output = orjson.loads(format_json_output(True, "search", errors=["boom"]))

        assert output["success"] is False

    def test_envelope_fields(self) -> None:
        output = orjson.loads(format_success_output("cities", {"cities": []}))

        assert set(output) == {"success", "timestamp", "command", "data", "errors", "warnings"}
        assert output["success"] is True
        assert output["command"] == "cities"
        assert output["errors"] == []

    def test_error_output(self) -> None:
        output = orjson.loads(format_error_output("search", ["unavailable"]))

        assert output["success"] is False
        assert output["errors"] == ["unavailable"]
