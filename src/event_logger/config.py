"""Event configuration loading and validation."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from event_logger.exceptions import ConfigError
from event_logger.sink import DIAGNOSTIC_LEVELS, Severity, supports

LOGGER = logging.getLogger(__name__)

ConfigSource = Union[str, os.PathLike, Mapping[str, Any]]

MAPPING_SOURCE = "<mapping>"
YAML_SUFFIXES = {".yaml", ".yml"}


@dataclass(frozen=True)
class EventConfig:
    name: str
    format: str
    log_level: Severity
    required_fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class LoggerConfig:
    events: Mapping[str, EventConfig]
    source: str = MAPPING_SOURCE
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False)

    def get(self, event: str) -> Optional[EventConfig]:
        return self.events.get(event)

    def __contains__(self, event: object) -> bool:
        return event in self.events

    def __len__(self) -> int:
        return len(self.events)


def load_config(source: ConfigSource, sink: Any) -> LoggerConfig:
    if isinstance(source, Mapping):
        return parse_config(source, sink, MAPPING_SOURCE)
    path = Path(source).expanduser()
    raw = read_config_file(path)
    config = parse_config(raw, sink, str(source))
    LOGGER.debug("Loaded %s event definitions from %s", len(config), path)
    return config


def read_config_file(path: Union[str, os.PathLike]) -> dict[str, Any]:
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Logger config file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read logger config file at {path}") from exc

    if not content.strip():
        raise ConfigError(f"Logger config file at {path} is empty")

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Logger config file at {path} is not valid YAML") from exc
    else:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Logger config file at {path} is not valid JSON") from exc

    if not isinstance(data, dict):
        raise ConfigError("Logger config root must be a mapping of event names")

    return data


def parse_config(raw: Mapping[str, Any], sink: Any, source: str = MAPPING_SOURCE) -> LoggerConfig:
    events: dict[str, EventConfig] = {}
    for name, item in raw.items():
        if not isinstance(name, str) or not name:
            raise ConfigError(f"Invalid event name: {name!r}")
        events[name] = _parse_event(name, item, sink)
    return LoggerConfig(events=events, source=source, raw=dict(raw))


def require_diagnostic_levels(sink: Any) -> None:
    for severity in DIAGNOSTIC_LEVELS:
        if not supports(sink, severity):
            raise ConfigError(f"Sink does not provide the '{severity.value}' level")


def _parse_event(name: str, item: Any, sink: Any) -> EventConfig:
    if not isinstance(item, Mapping):
        raise ConfigError(f"Invalid config for event: {name}")

    template = item.get("format")
    level_name = item.get("log_level")
    if not isinstance(template, str) or not template or not level_name:
        raise ConfigError(f"Invalid config for event: {name}")

    severity = Severity.parse(level_name)
    if severity is None or not supports(sink, severity):
        raise ConfigError(f"Invalid log level '{level_name}' for event: {name}")

    required_fields = _parse_required_fields(item.get("required_fields"), name)
    return EventConfig(
        name=name,
        format=template,
        log_level=severity,
        required_fields=required_fields,
    )


def _parse_required_fields(raw: Any, name: str) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigError(f"required_fields for event {name} must be a list of strings")

    fields: list[str] = []
    for entry in raw:
        if not isinstance(entry, str) or not entry.strip():
            raise ConfigError(f"required_fields for event {name} must be a list of strings")
        cleaned = entry.strip()
        if cleaned not in fields:
            fields.append(cleaned)
    return tuple(fields)
