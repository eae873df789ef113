"""
Lifecycle event models for TAP reporting.

This module defines the closed set of events a test runner can emit
and the value types they carry: test identity, failures and
actual-vs-expected comparisons.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────

class EventKind(str, Enum):
    """Kind of lifecycle event emitted by a test runner."""
    SUITE_START = "suite_start"
    SUITE_END = "suite_end"
    TEST_START = "test_start"
    TEST_END = "test_end"
    ERROR = "error"
    WARNING = "warning"
    FAILURE = "failure"
    INCOMPLETE = "incomplete"
    RISKY = "risky"
    SKIPPED = "skipped"


SUITE_EVENTS = frozenset({EventKind.SUITE_START, EventKind.SUITE_END})

# Events that may only occur between a test's start and end
OUTCOME_EVENTS = frozenset({
    EventKind.ERROR,
    EventKind.WARNING,
    EventKind.FAILURE,
    EventKind.INCOMPLETE,
    EventKind.RISKY,
    EventKind.SKIPPED,
})


# ─────────────────────────────────────────────────────────────────────────────
# Test identity and failures
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class CaseInfo:
    """
    Identity of a single test as seen by the reporter.

    Attributes:
        name: Stable identifier of the test (e.g. "pkg.module.Class.test_x")
        description: Human-readable description; falls back to name
        output: Optional capability returning the text the test printed.
            None for test kinds that do not support output capture.
    """
    name: str
    description: str = ""
    output: Callable[[], str] | None = None

    def describe(self) -> str:
        return self.description or self.name

    @property
    def supports_output(self) -> bool:
        return self.output is not None

    def captured_output(self) -> str | None:
        """Return the captured text, or None if capture is unsupported."""
        if self.output is None:
            return None
        return self.output()


@dataclass
class Comparison:
    """Structured actual-vs-expected values of a failed assertion."""
    actual: Any
    expected: Any


class ExpectationFailed(AssertionError):
    """
    Assertion error that carries an actual-vs-expected comparison.

    Raise it from test code to get a ``data`` section with ``got`` and
    ``expected`` in the TAP diagnostic block.
    """

    def __init__(self, message: str, actual: Any, expected: Any):
        super().__init__(message)
        self.comparison = Comparison(actual=actual, expected=expected)


@dataclass
class Failure:
    """
    A failure, error or warning reported for a test.

    Attributes:
        message: Human-readable description (may span several lines)
        comparison: Actual-vs-expected values, when the failure has them
    """
    message: str
    comparison: Comparison | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> Failure:
        """Build a Failure from a raised exception."""
        message = str(exc).strip() or type(exc).__name__
        comparison = getattr(exc, "comparison", None)
        if not isinstance(comparison, Comparison):
            comparison = None
        return cls(message=message, comparison=comparison)


# ─────────────────────────────────────────────────────────────────────────────
# Events
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class Event:
    """
    A single lifecycle event.

    Only the fields relevant to the kind are set: suite events carry
    ``suite``, test-scoped events carry ``test``, failure-class events
    carry ``failure`` and risky/skipped events carry ``message``.
    """
    kind: EventKind
    test: CaseInfo | None = None
    suite: str | None = None
    failure: Failure | None = None
    message: str = ""

    @property
    def is_outcome(self) -> bool:
        return self.kind in OUTCOME_EVENTS

    @classmethod
    def suite_started(cls, suite: str | None = None) -> Event:
        return cls(EventKind.SUITE_START, suite=suite)

    @classmethod
    def suite_finished(cls, suite: str | None = None) -> Event:
        return cls(EventKind.SUITE_END, suite=suite)

    @classmethod
    def test_started(cls, test: CaseInfo) -> Event:
        return cls(EventKind.TEST_START, test=test)

    @classmethod
    def test_finished(cls, test: CaseInfo) -> Event:
        return cls(EventKind.TEST_END, test=test)

    @classmethod
    def errored(cls, test: CaseInfo, failure: Failure) -> Event:
        return cls(EventKind.ERROR, test=test, failure=failure)

    @classmethod
    def warned(cls, test: CaseInfo, failure: Failure) -> Event:
        return cls(EventKind.WARNING, test=test, failure=failure)

    @classmethod
    def failed(cls, test: CaseInfo, failure: Failure) -> Event:
        return cls(EventKind.FAILURE, test=test, failure=failure)

    @classmethod
    def incomplete(cls, test: CaseInfo, message: str = "") -> Event:
        return cls(EventKind.INCOMPLETE, test=test, message=message)

    @classmethod
    def risky(cls, test: CaseInfo, message: str = "") -> Event:
        return cls(EventKind.RISKY, test=test, message=message)

    @classmethod
    def skipped(cls, test: CaseInfo, message: str = "") -> Event:
        return cls(EventKind.SKIPPED, test=test, message=message)
