"""Plain-text rendering of JSON log lines."""

from __future__ import annotations

import json
import re
from typing import Any, Iterable, Iterator, Mapping

from event_logger.formatting import placeholders

ANSI_ESCAPE_RE = re.compile(r"\x1B\[([0-9]{1,3}(;[0-9]{1,2})*)?[mGKH]")

ENTRY_KEYS = ("timestamp", "event", "message")


def strip_colors(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def format_log_entry(config: Mapping[str, Any], entry: Mapping[str, Any]) -> str:
    timestamp = entry.get("timestamp")
    event = entry.get("event")
    message = entry.get("message")

    consumed = set(_template_args(config, event))
    extras = " ".join(
        f"{key}={_to_json(value)}"
        for key, value in entry.items()
        if key not in ENTRY_KEYS and key not in consumed
    )
    suffix = f" -- {extras}" if extras else ""
    return f"{timestamp} [{event}] {message}{suffix}"


def render_line(config: Mapping[str, Any], line: str) -> str:
    """Render one input line; anything that is not a log entry is echoed as is."""
    plain = strip_colors(line)
    try:
        entry = json.loads(plain)
    except ValueError:
        return line
    if not isinstance(entry, dict) or not all(key in entry for key in ENTRY_KEYS):
        return line
    return format_log_entry(config, entry)


def render_stream(config: Mapping[str, Any], lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield render_line(config, line.rstrip("\r\n"))


def _template_args(config: Mapping[str, Any], event: Any) -> list[str]:
    event_config = config.get(event) if isinstance(event, str) else None
    if not isinstance(event_config, Mapping):
        return []
    template = event_config.get("format")
    if not isinstance(template, str):
        return []
    return placeholders(template)


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
