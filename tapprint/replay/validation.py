"""
Validation for recorded event logs.

This module checks raw parsed YAML against the event log schema and
against the nesting rules a runner guarantees, reporting every problem
with its location and a hint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..events import OUTCOME_EVENTS, EventKind


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "events[3].test.name"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"❌ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of event log validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Event log validation passed"
        lines = [f"Event log validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Event Log Validator
# ─────────────────────────────────────────────────────────────────────────────

class EventLogValidator:
    """Validates raw parsed YAML against the event log schema."""

    REQUIRED_TOP_LEVEL = {"events"}
    OPTIONAL_TOP_LEVEL = {"banner"}
    VALID_EVENT_KINDS = {k.value for k in EventKind}

    COMMON_KEYS = {"event"}
    KEYS_BY_KIND: dict[EventKind, set[str]] = {
        EventKind.SUITE_START: {"suite"},
        EventKind.SUITE_END: {"suite"},
        EventKind.TEST_START: {"test"},
        EventKind.TEST_END: {"test", "output"},
        EventKind.ERROR: {"test", "message"},
        EventKind.WARNING: {"test", "message"},
        EventKind.FAILURE: {"test", "message", "got", "expected"},
        EventKind.INCOMPLETE: {"test", "message"},
        EventKind.RISKY: {"test", "message"},
        EventKind.SKIPPED: {"test", "message"},
    }
    VALID_TEST_KEYS = {"name", "description", "output"}

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_top_level()
        if not self.result.is_valid:
            return self.result

        self._validate_banner()
        self._validate_events()
        if not self.result.is_valid:
            return self.result

        self._validate_nesting()
        return self.result

    def _validate_top_level(self) -> None:
        """Check required and unknown top-level keys."""
        keys = set(self.data.keys())
        missing = self.REQUIRED_TOP_LEVEL - keys
        unknown = keys - self.REQUIRED_TOP_LEVEL - self.OPTIONAL_TOP_LEVEL

        for key in sorted(missing):
            self.result.add_error(
                key,
                f"Required field '{key}' is missing",
                suggestion=f"Add '{key}:' to your event log"
            )

        for key in sorted(unknown, key=str):
            self.result.add_error(
                str(key),
                f"Unknown top-level field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.REQUIRED_TOP_LEVEL | self.OPTIONAL_TOP_LEVEL))}"
            )

    def _validate_banner(self) -> None:
        if "banner" not in self.data:
            return
        banner = self.data["banner"]
        if not isinstance(banner, str):
            self.result.add_error(
                "banner",
                "Must be a string",
                value=banner
            )

    def _validate_events(self) -> None:
        events = self.data.get("events")
        if not isinstance(events, list):
            self.result.add_error(
                "events",
                "Must be a list",
                value=events
            )
            return

        if not events:
            self.result.add_error(
                "events",
                "Must contain at least one event",
                suggestion="Start with '- event: suite_start'"
            )
            return

        for i, event in enumerate(events):
            self._validate_event(f"events[{i}]", event)

    def _validate_event(self, path: str, event: Any) -> None:
        if not isinstance(event, dict):
            self.result.add_error(
                path,
                "Must be an object",
                value=event
            )
            return

        kind_value = event.get("event")
        if kind_value not in self.VALID_EVENT_KINDS:
            self.result.add_error(
                f"{path}.event",
                "Invalid event type",
                value=kind_value,
                suggestion=f"Valid events: {', '.join(sorted(self.VALID_EVENT_KINDS))}"
            )
            return

        kind = EventKind(kind_value)
        allowed = self.COMMON_KEYS | self.KEYS_BY_KIND[kind]
        for key in sorted(set(event.keys()) - allowed, key=str):
            self.result.add_error(
                f"{path}.{key}",
                f"Unknown field for '{kind.value}' event",
                suggestion=f"Valid fields are: {', '.join(sorted(allowed))}"
            )

        if kind == EventKind.TEST_START and "test" not in event:
            self.result.add_error(
                f"{path}.test",
                "Required for 'test_start' events",
                suggestion="Add 'test: <test name>'"
            )

        if "test" in event:
            self._validate_test(f"{path}.test", event["test"])

        for key in ("suite", "message", "output"):
            if key in event and not isinstance(event[key], str):
                self.result.add_error(
                    f"{path}.{key}",
                    "Must be a string",
                    value=event[key]
                )

    def _validate_test(self, path: str, test: Any) -> None:
        if isinstance(test, str):
            if not test.strip():
                self.result.add_error(path, "Cannot be empty")
            return

        if not isinstance(test, dict):
            self.result.add_error(
                path,
                "Must be a test name or an object with 'name'",
                value=test
            )
            return

        for key in sorted(set(test.keys()) - self.VALID_TEST_KEYS, key=str):
            self.result.add_error(
                f"{path}.{key}",
                "Unknown test field",
                suggestion=f"Valid fields are: {', '.join(sorted(self.VALID_TEST_KEYS))}"
            )

        name = test.get("name")
        if not isinstance(name, str) or not name.strip():
            self.result.add_error(
                f"{path}.name",
                "Must be a non-empty string",
                value=name
            )

        for key in ("description", "output"):
            value = test.get(key)
            if value is not None and not isinstance(value, str):
                self.result.add_error(
                    f"{path}.{key}",
                    "Must be a string",
                    value=value
                )

    def _validate_nesting(self) -> None:
        """Replay the event order and check suites and tests nest properly."""
        depth = 0
        in_test = False

        for i, event in enumerate(self.data["events"]):
            path = f"events[{i}]"
            kind = EventKind(event["event"])

            if kind == EventKind.SUITE_START:
                if in_test:
                    self.result.add_error(path, "Suite started inside a running test")
                depth += 1

            elif kind == EventKind.SUITE_END:
                if depth == 0:
                    self.result.add_error(
                        path,
                        "Suite end without a matching suite start",
                        suggestion="Add a 'suite_start' event before it"
                    )
                    continue
                if in_test:
                    self.result.add_error(path, "Suite ended inside a running test")
                depth -= 1

            elif kind == EventKind.TEST_START:
                if in_test:
                    self.result.add_error(
                        path,
                        "Test started before the previous test ended",
                        suggestion="Add a 'test_end' event for the previous test"
                    )
                if depth == 0:
                    self.result.add_error(
                        path,
                        "Test started outside of any suite",
                        suggestion="Wrap tests in 'suite_start' / 'suite_end' events"
                    )
                in_test = True

            elif kind == EventKind.TEST_END:
                if not in_test:
                    self.result.add_error(path, "Test end without a matching test start")
                in_test = False

            elif kind in OUTCOME_EVENTS and not in_test:
                self.result.add_error(
                    path,
                    f"'{kind.value}' event outside of a running test",
                    suggestion="Place it between 'test_start' and 'test_end'"
                )

        if in_test:
            self.result.add_error("events", "Last test never ended")
        if depth > 0:
            self.result.add_error(
                "events",
                f"{depth} suite(s) never ended",
                suggestion="Add matching 'suite_end' events"
            )
