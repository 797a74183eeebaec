"""JSON file event store.

Reads a JSON document of events, either a bare array or an object with an
``events`` array, using the same camelCase field names callers receive.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

import orjson
from pydantic import ValidationError

from fastfind.core.models import EventSummary
from fastfind.shared.constants import EventStatus
from fastfind.shared.errors import ErrorCode, ErrorContext, UpstreamUnavailableError

logger = logging.getLogger(__name__)


class JSONEventStore:
    """Event store backed by a JSON file.

    The file is read on every query so edits show up without a restart.

    Example:
        >>> store = JSONEventStore("data/events.json")
        >>> events = store.query_active_upcoming_or_ongoing(datetime.now(timezone.utc))
    """

    def __init__(self, file_path: str | Path) -> None:
        self.file_path = Path(file_path)

    def query_active_upcoming_or_ongoing(self, now: datetime) -> Sequence[EventSummary]:
        """Return attendable events ending after now.

        Raises:
            UpstreamUnavailableError: If the file cannot be read or decoded
        """
        records = self._read_records()

        events: list[EventSummary] = []
        for record in records:
            try:
                event = EventSummary.model_validate(record)
            except ValidationError as e:
                logger.warning(
                    "Skipping malformed event record %r: %s",
                    record.get("id") if isinstance(record, dict) else None,
                    e.errors()[0]["msg"],
                )
                continue
            if event.is_active and event.status in EventStatus.ATTENDABLE and event.end_date > now:
                events.append(event)

        logger.debug("Event store returned %d of %d events", len(events), len(records))
        return events

    def _read_records(self) -> list[Any]:
        context = ErrorContext(
            operation="query_events",
            additional_data={"file_path": str(self.file_path)},
        )
        try:
            document = orjson.loads(self.file_path.read_bytes())
        except OSError as e:
            raise UpstreamUnavailableError(
                ErrorCode.UPSTREAM_UNAVAILABLE,
                f"Cannot read event file {self.file_path}: {e}",
                context,
                original_error=e,
            ) from e
        except orjson.JSONDecodeError as e:
            raise UpstreamUnavailableError(
                ErrorCode.UPSTREAM_INVALID_RESPONSE,
                f"Event file {self.file_path} is not valid JSON: {e}",
                context,
                original_error=e,
            ) from e

        if isinstance(document, dict):
            document = document.get("events")
        if not isinstance(document, list):
            raise UpstreamUnavailableError(
                ErrorCode.UPSTREAM_INVALID_RESPONSE,
                f"Event file {self.file_path} does not contain an events array",
                context,
            )
        return document
