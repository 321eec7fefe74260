"""Advisory checks run on every log call."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from event_logger.config import EventConfig
from event_logger.utils import parse_timestamp, utc_now

TRACE_ID_FIELD = "trace_id"

# example: 2024-10-15T11:30:43.803Z
TIMESTAMP_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3}Z$")

FUTURE_TIMESTAMP = "Log entry has a timestamp in the future"
MALFORMED_TIMESTAMP = "Log entry has a timestamp in the wrong format"


def required_fields_for(event_config: EventConfig) -> tuple[str, ...]:
    declared = tuple(event_config.required_fields)
    if TRACE_ID_FIELD in declared:
        return declared
    return declared + (TRACE_ID_FIELD,)


def find_missing_fields(required: Iterable[str], metadata: Mapping[str, Any]) -> list[str]:
    return [name for name in required if metadata.get(name) is None]


def check_timestamp(value: Any, now: Optional[datetime] = None) -> list[str]:
    problems: list[str] = []

    current = now or utc_now()
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)

    parsed = parse_timestamp(value)
    if parsed is not None and parsed > current:
        problems.append(FUTURE_TIMESTAMP)

    if not isinstance(value, str) or not TIMESTAMP_PATTERN.fullmatch(value):
        problems.append(MALFORMED_TIMESTAMP)

    return problems
