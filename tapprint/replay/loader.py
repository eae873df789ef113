"""
Event log loader.

This module provides the public API for loading recorded event logs
from disk or YAML strings and replaying them through a TapPrinter.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..reporting import TapPrinter
from .parser import EventLog, EventLogParser
from .validation import EventLogValidator, ValidationResult

logger = logging.getLogger(__name__)


def load_event_log(path: str | Path) -> tuple[EventLog | None, ValidationResult]:
    """
    Load and validate an event log from a YAML file.

    Args:
        path: Path to the YAML event log

    Returns:
        Tuple of (EventLog or None, ValidationResult)
        If validation fails, EventLog will be None.

    Example:
        log, result = load_event_log("runs/nightly.yaml")
        if not result.is_valid:
            print(result)
            sys.exit(1)
        replay(log, TapPrinter(banner=log.banner))
    """
    path = Path(path)

    if not path.exists():
        result = ValidationResult()
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error(
            str(path),
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result

    return _validate_and_parse(str(path), data)


def parse_event_log_yaml(yaml_string: str) -> tuple[EventLog | None, ValidationResult]:
    """
    Validate and parse an event log from a YAML string.

    Args:
        yaml_string: YAML content as a string

    Returns:
        Tuple of (EventLog or None, ValidationResult)
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error("yaml", f"Invalid YAML syntax: {e}")
        return None, result

    return _validate_and_parse("yaml", data)


def replay(log: EventLog, printer: TapPrinter) -> None:
    """
    Feed every event of a log through a printer.

    Args:
        log: A parsed event log
        printer: Printer that writes the resulting TAP stream
    """
    logger.debug(f"Replaying {len(log.events)} event(s), {log.test_count} test(s)")
    for event in log.events:
        printer.handle(event)


def _validate_and_parse(source: str, data: Any) -> tuple[EventLog | None, ValidationResult]:
    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(
            source,
            "Event log must be a YAML object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    validator = EventLogValidator(data)
    result = validator.validate()

    if not result.is_valid:
        return None, result

    parser = EventLogParser(data)
    return parser.parse(), result
