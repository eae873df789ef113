"""
Lifecycle Events

This package defines the events a test runner emits while executing a
suite, and the value types attached to them.

Usage:
    from tapprint.events import CaseInfo, Event, Failure

    test = CaseInfo("tests.test_math.test_add", "adds two numbers")
    events = [
        Event.suite_started("tests"),
        Event.test_started(test),
        Event.failed(test, Failure("1 + 1 is not 3")),
        Event.test_finished(test),
        Event.suite_finished("tests"),
    ]
"""

from .models import (
    OUTCOME_EVENTS,
    SUITE_EVENTS,
    CaseInfo,
    Comparison,
    Event,
    EventKind,
    ExpectationFailed,
    Failure,
)

__all__ = [
    "OUTCOME_EVENTS",
    "SUITE_EVENTS",
    "CaseInfo",
    "Comparison",
    "Event",
    "EventKind",
    "ExpectationFailed",
    "Failure",
]
