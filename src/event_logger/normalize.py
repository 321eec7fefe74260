"""Key normalization for the wire format."""

from __future__ import annotations

import re
from typing import Any, Mapping

UPPERCASE_RE = re.compile(r"([A-Z])")


def to_snake_case(key: str) -> str:
    """``logLevel`` -> ``log_level``; snake_case keys are returned unchanged."""
    return UPPERCASE_RE.sub(r"_\1", key).lower()


def normalize_fields(entry: Mapping[str, Any]) -> dict[str, Any]:
    # Keys that collide after conversion keep the value written last.
    normalized: dict[str, Any] = {}
    for key, value in entry.items():
        normalized[to_snake_case(str(key))] = value
    return normalized
