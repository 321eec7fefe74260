"""Severity levels and the sinks that receive serialized log entries."""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import Any, Optional, Protocol, TextIO


class Severity(str, Enum):
    """Severity tags accepted as ``log_level`` in the event configuration.

    Each value is also the name of the sink operation that receives entries
    of that severity.
    """

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @classmethod
    def parse(cls, value: Any) -> Optional["Severity"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# Channels used for diagnostics; every sink must provide them.
DIAGNOSTIC_LEVELS = (Severity.WARN, Severity.ERROR)


class Sink(Protocol):
    def debug(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


def supports(sink: Any, severity: Severity) -> bool:
    return callable(getattr(sink, severity.value, None))


def dispatch(sink: Any, severity: Severity, message: str) -> None:
    getattr(sink, severity.value)(message)


class ConsoleSink:
    """Writes ``debug``/``info`` to stdout and ``warn``/``error`` to stderr.

    Streams default to ``sys.stdout``/``sys.stderr``, looked up on every
    write.
    """

    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> None:
        self._stdout = stdout
        self._stderr = stderr

    def debug(self, message: str) -> None:
        self._write(self._out(), message)

    def info(self, message: str) -> None:
        self._write(self._out(), message)

    def warn(self, message: str) -> None:
        self._write(self._err(), message)

    def error(self, message: str) -> None:
        self._write(self._err(), message)

    def _out(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def _err(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    @staticmethod
    def _write(stream: TextIO, message: str) -> None:
        stream.write(message + "\n")
        stream.flush()


class LoggingSink:
    """Forwards entries to a standard library logger."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger("event_logger.entries")

    def debug(self, message: str) -> None:
        self.logger.debug(message)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warn(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)
