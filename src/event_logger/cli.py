"""CLI entry point: render JSON log lines from stdin as plain text.

Usage: <cmd> | event-log-format --format=plain --logger-config=./logger.config.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from event_logger.config import read_config_file
from event_logger.exceptions import ConfigError, UsageError
from event_logger.logging_setup import configure_logging
from event_logger.render import render_stream

LOGGER = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("plain",)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    try:
        validate_args(args)
        config = read_config_file(args.logger_config)
    except (UsageError, ConfigError, OSError) as exc:
        LOGGER.debug("Startup failed", exc_info=True)
        print(exc, file=sys.stderr)
        sys.exit(1)

    for rendered in render_stream(config, sys.stdin):
        print(rendered, flush=True)


def validate_args(args: argparse.Namespace) -> None:
    if not args.format:
        raise UsageError("Format is required")
    if not args.logger_config:
        raise UsageError("Logger config is required")
    if not Path(args.logger_config).expanduser().exists():
        raise UsageError(f"Logger config file not found: {args.logger_config}")
    if args.format not in SUPPORTED_FORMATS:
        raise UsageError(f"Unknown format: {args.format}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="event-log-format",
        description="Format JSON log entries read from stdin for human consumption",
    )
    parser.add_argument("--format", help="Output format (supported: plain)")
    parser.add_argument("--logger-config", help="Path to the event logger config file")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g. INFO, DEBUG)")
    return parser
