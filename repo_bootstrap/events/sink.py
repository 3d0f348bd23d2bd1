"""Destinations for lifecycle events."""

from __future__ import annotations

import logging

from repo_bootstrap.events.repo_created import RepositoryCreatedEvent

EVENT_LOGGER_NAME = "repo_bootstrap.events"


class EventSink:
    """Abstract event sink."""

    def emit(self, event: RepositoryCreatedEvent) -> None:
        raise NotImplementedError


class LoggingEventSink(EventSink):
    """Writes each event as one JSON line to the structured log stream.

    Delivery is best effort: there is no acknowledgement or retry.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(EVENT_LOGGER_NAME)

    def emit(self, event: RepositoryCreatedEvent) -> None:
        self._logger.info("%s", event.to_json())
