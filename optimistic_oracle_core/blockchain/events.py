"""Notification sinks receiving committed program events."""

import logging
from typing import Protocol

from optimistic_oracle_core.models.events import OracleEvent

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    def emit(self, event: OracleEvent) -> None: ...


class EventLog:
    """Append-only in-memory event log."""

    def __init__(self, events: list[OracleEvent] | None = None) -> None:
        self._events: list[OracleEvent] = list(events or [])

    def emit(self, event: OracleEvent) -> None:
        logger.info("Event %s: %s", event.NAME, event.to_dict())
        self._events.append(event)

    @property
    def events(self) -> list[OracleEvent]:
        return list(self._events)

    def for_request(self, request_id: int) -> list[OracleEvent]:
        return [event for event in self._events if event.request_id == request_id]

    def __len__(self) -> int:
        return len(self._events)
