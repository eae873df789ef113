"""
Event Log Replay

This package loads recorded runs (YAML event logs), validates them and
replays them through a TapPrinter.

Usage:
    from tapprint.replay import load_event_log, replay
    from tapprint.reporting import TapPrinter

    log, result = load_event_log("runs/nightly.yaml")
    if not result.is_valid:
        print(result)
    else:
        replay(log, TapPrinter(banner=log.banner))

Event log format:
    banner: "unittest (Python 3.12.4)"
    events:
      - event: suite_start
        suite: tests
      - event: test_start
        test: tests.test_math.test_add
      - event: failure
        message: values differ
        got: 3
        expected: 2
      - event: test_end
        output: "debug line"
      - event: test_start
        test:
          name: tests.test_math.test_sub
          description: subtracts numbers
          output: "captured while running"
      - event: test_end
      - event: suite_end

Captured output may be given on the test mapping or on the test_end
event; the test_end value wins when both are present.
"""

# Public API
from .loader import load_event_log, parse_event_log_yaml, replay

# Models
from .parser import EventLog, EventLogParser

# Validation
from .validation import EventLogValidator, ValidationError, ValidationResult

__all__ = [
    # Loader functions
    "load_event_log",
    "parse_event_log_yaml",
    "replay",
    # Models
    "EventLog",
    "EventLogParser",
    # Validation
    "EventLogValidator",
    "ValidationError",
    "ValidationResult",
]
