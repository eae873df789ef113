"""
Event log parser.

This module converts validated YAML data into typed Event values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..events import CaseInfo, Comparison, Event, EventKind, Failure


@dataclass
class EventLog:
    """A recorded run: its events and the banner of the framework that ran it."""
    events: list[Event] = field(default_factory=list)
    banner: str | None = None

    @property
    def test_count(self) -> int:
        return sum(1 for e in self.events if e.kind == EventKind.TEST_START)


class EventLogParser:
    """Parses and converts validated YAML to a typed EventLog."""

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self._current: CaseInfo | None = None

    def parse(self) -> EventLog:
        """Convert validated data to a typed EventLog."""
        self._current = None
        return EventLog(
            events=[self._parse_event(event) for event in self.data["events"]],
            banner=self.data.get("banner"),
        )

    def _parse_event(self, event: dict[str, Any]) -> Event:
        kind = EventKind(event["event"])

        if kind in (EventKind.SUITE_START, EventKind.SUITE_END):
            return Event(kind, suite=event.get("suite"))

        if kind == EventKind.TEST_START:
            self._current = self._parse_test(event["test"])
            return Event.test_started(self._current)

        test = self._test_for(event)

        if kind == EventKind.TEST_END:
            if "output" in event:
                self._set_output(test, event["output"])
            return Event.test_finished(test)

        message = event.get("message", "")

        if kind in (EventKind.ERROR, EventKind.WARNING, EventKind.FAILURE):
            return Event(kind, test=test, failure=self._parse_failure(event, message))

        return Event(kind, test=test, message=message)

    def _parse_failure(self, event: dict[str, Any], message: str) -> Failure:
        comparison = None
        if "got" in event or "expected" in event:
            comparison = Comparison(
                actual=event.get("got"),
                expected=event.get("expected"),
            )
        return Failure(message=message, comparison=comparison)

    def _test_for(self, event: dict[str, Any]) -> CaseInfo:
        """Use the test named on the event, or the one currently running."""
        if "test" in event:
            return self._parse_test(event["test"])
        if self._current is None:
            raise ValueError(f"'{event['event']}' event outside of a running test")
        return self._current

    def _parse_test(self, test: str | dict[str, Any]) -> CaseInfo:
        if isinstance(test, str):
            return CaseInfo(name=test)
        case = CaseInfo(
            name=test["name"],
            description=test.get("description", ""),
        )
        if "output" in test:
            self._set_output(case, test["output"])
        return case

    @staticmethod
    def _set_output(case: CaseInfo, output: str) -> None:
        case.output = lambda: output
