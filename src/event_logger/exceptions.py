"""Exception hierarchy."""

from __future__ import annotations


class EventLoggerError(Exception):
    """Base exception for event logger errors."""


class ConfigError(EventLoggerError, ValueError):
    """Raised when the event configuration cannot be loaded or is invalid."""


class UsageError(EventLoggerError):
    """Raised when the formatter CLI is invoked with invalid arguments."""
