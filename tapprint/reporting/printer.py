"""
TAP printer that turns lifecycle events into a TAP version 13 stream.

This module provides the TapPrinter class, a stateful event sink that
numbers tests, writes result lines as outcomes are reported and closes
the stream with a plan line when the outermost suite ends.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from ..events import CaseInfo, Event, EventKind, Failure
from .diagnostics import render_diagnostic
from .models import TAP_VERSION_HEADER, ReporterState

logger = logging.getLogger(__name__)


class TapPrinter:
    """
    Writes a TAP stream for the lifecycle events of a test run.

    Result lines for errors, warnings, failures, skips and risky tests
    are written as soon as the event arrives. A plain ``ok`` line is only
    written at test end, for tests that received none of those events.

    Example:
        printer = TapPrinter(banner=version_banner())
        test = CaseInfo("tests.test_math.test_add")

        printer.on_suite_start()
        printer.on_test_start(test)
        printer.on_test_end(test)
        printer.on_suite_end()

        # TAP version 13
        # ok 1 - tests.test_math.test_add
        # 1..1
    """

    def __init__(self, out: TextIO | None = None, banner: str | None = None):
        """
        Initialize the printer and write the TAP version header.

        Args:
            out: Stream the TAP text is written to (defaults to sys.stdout)
            banner: Version banner of the host test framework. A line equal
                to it is written as a comment instead of a bare line.
        """
        self.out = out if out is not None else sys.stdout
        self.banner = banner.rstrip("\n") if banner is not None else None
        self.state = ReporterState()
        self.write(TAP_VERSION_HEADER)

    # ─────────────────────────────────────────────────────────────────────
    # Dispatch
    # ─────────────────────────────────────────────────────────────────────

    def handle(self, event: Event) -> None:
        """Apply a single lifecycle event."""
        kind = event.kind
        if kind == EventKind.SUITE_START:
            self.on_suite_start(event.suite)
        elif kind == EventKind.SUITE_END:
            self.on_suite_end(event.suite)
        elif kind == EventKind.TEST_START:
            self.on_test_start(event.test)
        elif kind == EventKind.TEST_END:
            self.on_test_end(event.test)
        elif kind == EventKind.ERROR:
            self.on_error(event.test, event.failure)
        elif kind == EventKind.WARNING:
            self.on_warning(event.test, event.failure)
        elif kind == EventKind.FAILURE:
            self.on_failure(event.test, event.failure)
        elif kind == EventKind.INCOMPLETE:
            self.on_incomplete(event.test, event.message)
        elif kind == EventKind.RISKY:
            self.on_risky(event.test, event.message)
        elif kind == EventKind.SKIPPED:
            self.on_skipped(event.test, event.message)
        else:
            raise ValueError(f"Unsupported event kind: {kind}")

    # ─────────────────────────────────────────────────────────────────────
    # Suites
    # ─────────────────────────────────────────────────────────────────────

    def on_suite_start(self, suite: str | None = None) -> None:
        self.state.open_suite()
        logger.debug(f"Suite started: {suite} (depth {self.state.suite_depth})")

    def on_suite_end(self, suite: str | None = None) -> None:
        assert self.state.suite_depth > 0, "suite end without a matching suite start"

        outermost = self.state.close_suite()
        logger.debug(f"Suite ended: {suite} (depth {self.state.suite_depth})")

        if outermost:
            logger.info(f"Run complete: {self.state.test_number} test(s)")
            self.write(self.state.plan_line())

    # ─────────────────────────────────────────────────────────────────────
    # Tests
    # ─────────────────────────────────────────────────────────────────────

    def on_test_start(self, test: CaseInfo) -> None:
        number = self.state.begin_test()
        logger.debug(f"Test {number} started: {test.name}")

    def on_test_end(self, test: CaseInfo) -> None:
        assert self.state.test_in_progress, "test end without a matching test start"

        if self.state.test_successful:
            self.write(f"ok {self.state.test_number} - {test.describe()}")

        self._write_output(test)
        self.state.end_test()

    def on_error(self, test: CaseInfo, failure: Failure | None = None) -> None:
        self._log_failure("Error", failure)
        self._write_not_ok(test, prefix="Error")

    def on_warning(self, test: CaseInfo, failure: Failure | None = None) -> None:
        self._log_failure("Warning", failure)
        self._write_not_ok(test, prefix="Warning")

    def on_failure(self, test: CaseInfo, failure: Failure) -> None:
        """Write a not-ok line followed by the YAML diagnostic block."""
        self._log_failure("Failure", failure)
        self._write_not_ok(test)
        for line in render_diagnostic(failure):
            self.write(line)

    def on_incomplete(self, test: CaseInfo, message: str = "") -> None:
        self._write_not_ok(test, directive="TODO Incomplete Test")

    def on_risky(self, test: CaseInfo, message: str = "") -> None:
        self._write_ok_with_directive(test, "RISKY", message)

    def on_skipped(self, test: CaseInfo, message: str = "") -> None:
        self._write_ok_with_directive(test, "SKIP", message)

    # ─────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────

    def write(self, line: str) -> None:
        """
        Write one line to the output stream.

        A line equal to the host framework banner is turned into a
        comment so it cannot break the TAP stream.
        """
        if self.banner is not None and line == self.banner:
            line = "# " + line
        self.out.write(line + "\n")

    def _write_not_ok(
        self,
        test: CaseInfo,
        prefix: str = "",
        directive: str = "",
    ) -> None:
        self._require_test()
        self.write(
            "not ok {} - {}{}{}".format(
                self.state.test_number,
                f"{prefix}: " if prefix else "",
                test.describe(),
                f" # {directive}" if directive else "",
            )
        )
        self.state.mark_unsuccessful()

    def _write_ok_with_directive(self, test: CaseInfo, directive: str, message: str) -> None:
        self._require_test()
        self.write(
            "ok {} - {} # {}{}".format(
                self.state.test_number,
                test.describe(),
                directive,
                f" {message}" if message else "",
            )
        )
        self.state.mark_unsuccessful()

    def _write_output(self, test: CaseInfo) -> None:
        """Write the text a test printed as TAP comments."""
        if not test.supports_output:
            return

        output = (test.captured_output() or "").strip()
        if not output:
            return

        for line in output.splitlines():
            self.write(f"# {line}")

    def _require_test(self) -> None:
        assert self.state.test_in_progress, "outcome reported outside of a running test"

    def _log_failure(self, label: str, failure: Failure | None) -> None:
        if failure is not None:
            logger.debug(f"{label} in test {self.state.test_number}: {failure.message}")
