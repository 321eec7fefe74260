"""Event-driven JSON logger."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from event_logger.config import ConfigSource, LoggerConfig, load_config, require_diagnostic_levels
from event_logger.formatting import format_message
from event_logger.normalize import normalize_fields
from event_logger.sink import ConsoleSink, Severity, dispatch
from event_logger.utils import format_timestamp, utc_now
from event_logger.validation import check_timestamp, find_missing_fields, required_fields_for

LOGGER = logging.getLogger(__name__)

UNKNOWN_EVENT_LEVEL = Severity.WARN


class EventLogger:
    """Emits one JSON line per named event through a severity-addressed sink.

    The configuration is loaded and validated once, on construction; an
    invalid configuration raises ``ConfigError`` and no logger is created.
    Problems found while logging (missing template values, missing required
    fields, odd timestamps, unknown events) are reported to the same sink as
    diagnostics and never stop the entry from being written.

    Instances are not synchronized. Callers sharing one logger between
    threads must serialize ``add_context`` and ``log`` themselves.

    Example:
        >>> logger = EventLogger({"USER_SIGNED_IN": {"log_level": "info", "format": "User {userId} signed in"}})
        >>> logger.add_context(traceId="abc")
        >>> logger.log("USER_SIGNED_IN", {"userId": 42})
    """

    def __init__(
        self,
        config_source: ConfigSource,
        sink: Any = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.sink = sink if sink is not None else ConsoleSink()
        require_diagnostic_levels(self.sink)
        self.config: LoggerConfig = load_config(config_source, self.sink)
        self._clock = clock or utc_now
        self._context: dict[str, Any] = {}

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._context)

    def add_context(self, context: Optional[Mapping[str, Any]] = None, **fields: Any) -> None:
        if context:
            self._context.update(context)
        self._context.update(fields)

    def log(self, event: str, data: Optional[Mapping[str, Any]] = None) -> str:
        metadata = {**self._context, **(data or {})}
        event_config = self.config.get(event)

        if event_config is None:
            message = event
            severity = UNKNOWN_EVENT_LEVEL
            metadata = {"configFile": self.config.source, **metadata}
            self._diagnose(Severity.ERROR, f"Unknown event: {event}")
        else:
            for name in find_missing_fields(required_fields_for(event_config), metadata):
                self._diagnose(Severity.WARN, f"Missing required field '{name}' for event '{event}'")
            result = format_message(event_config.format, metadata)
            for key in result.missing:
                self._diagnose(
                    Severity.ERROR,
                    f"Failed to format message for event '{event}' ~ missing required parameter '{key}'",
                )
            message = result.message
            severity = event_config.log_level

        entry = {
            "timestamp": format_timestamp(self._clock()),
            "event": event,
            "message": message,
            "logLevel": severity.value,
            **metadata,
        }

        for problem in check_timestamp(entry["timestamp"], now=self._clock()):
            self._diagnose(Severity.WARN, problem)

        line = json.dumps(normalize_fields(entry), separators=(",", ":"), default=str)
        dispatch(self.sink, severity, line)
        return line

    __call__ = log

    def _diagnose(self, severity: Severity, message: str) -> None:
        LOGGER.debug("diagnostic level=%s message=%s", severity.value, message)
        dispatch(self.sink, severity, message)


def create_logger(config_source: ConfigSource, sink: Any = None) -> EventLogger:
    """Build an ``EventLogger``; the returned handle is callable like ``log``."""
    return EventLogger(config_source, sink=sink)
