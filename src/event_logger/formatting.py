"""Message template interpolation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class FormatResult:
    message: str
    missing: tuple[str, ...]


def placeholders(template: str) -> list[str]:
    return PLACEHOLDER_RE.findall(template)


def format_message(template: str, metadata: Mapping[str, Any]) -> FormatResult:
    """Replace every ``{name}`` in ``template`` with ``str(metadata[name])``.

    Placeholders without a value are left untouched and reported in
    ``FormatResult.missing``, once per key.
    """
    missing: list[str] = []

    def _substitute(match: re.Match) -> str:
        key = match.group(1)
        if key not in metadata:
            if key not in missing:
                missing.append(key)
            return match.group(0)
        return str(metadata[key])

    message = PLACEHOLDER_RE.sub(_substitute, template)
    return FormatResult(message=message, missing=tuple(missing))

