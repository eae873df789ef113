"""
unittest result class that reports through a TapPrinter.

TapTestResult receives the standard unittest callbacks, keeps the usual
bookkeeping of unittest.TestResult and translates every callback into a
lifecycle event handled by the printer.
"""

from __future__ import annotations

import io
import logging
import unittest
import warnings
from contextlib import ExitStack, redirect_stderr, redirect_stdout
from typing import Any, Callable

from ..events import CaseInfo, Event, Failure
from ..reporting import TapPrinter

logger = logging.getLogger(__name__)

ExcInfo = tuple[type[BaseException], BaseException, Any]

UNEXPECTED_SUCCESS = "Unexpected success"


class TapTestResult(unittest.TestResult):
    """
    Test result that streams TAP while unittest runs.

    Args:
        printer: Printer receiving the translated events
        capture_output: Redirect sys.stdout and sys.stderr per test and
            write what the test printed as TAP comments after its result
            line
        record_warnings: Report warnings raised inside a test that
            otherwise passed as a TAP warning
    """

    def __init__(
        self,
        printer: TapPrinter,
        capture_output: bool = True,
        record_warnings: bool = True,
    ):
        super().__init__()
        self.printer = printer
        self.capture_output = capture_output
        self.record_warnings = record_warnings

        self._current_test: unittest.TestCase | None = None
        self._current_case: CaseInfo | None = None
        self._outcome_reported = False
        self._output: io.StringIO | None = None
        self._capture: ExitStack | None = None
        self._recorded_warnings: list[warnings.WarningMessage] = []

    # ─────────────────────────────────────────────────────────────────────
    # Run and test boundaries
    # ─────────────────────────────────────────────────────────────────────

    def startTestRun(self) -> None:
        super().startTestRun()
        self.printer.handle(Event.suite_started("unittest"))

    def stopTestRun(self) -> None:
        super().stopTestRun()
        self.printer.handle(Event.suite_finished("unittest"))

    def startTest(self, test: unittest.TestCase) -> None:
        super().startTest(test)
        self._current_test = test
        self._current_case = self._case_info(test)
        self._outcome_reported = False
        self._start_capture()
        self.printer.handle(Event.test_started(self._current_case))

    def stopTest(self, test: unittest.TestCase) -> None:
        self._stop_capture()
        case = self._current_case or self._case_info(test)

        if self._recorded_warnings and not self._outcome_reported:
            first = self._recorded_warnings[0]
            logger.info(f"{case.name}: {len(self._recorded_warnings)} warning(s) recorded")
            self.printer.handle(Event.warned(case, Failure(str(first.message))))
        self._recorded_warnings = []

        self.printer.handle(Event.test_finished(case))
        self._current_test = None
        self._current_case = None
        super().stopTest(test)

    # ─────────────────────────────────────────────────────────────────────
    # Outcomes
    # ─────────────────────────────────────────────────────────────────────

    def addError(self, test: unittest.TestCase, err: ExcInfo) -> None:
        super().addError(test, err)
        self._report(test, lambda case: Event.errored(case, Failure.from_exception(err[1])))

    def addFailure(self, test: unittest.TestCase, err: ExcInfo) -> None:
        super().addFailure(test, err)
        self._report(test, lambda case: Event.failed(case, Failure.from_exception(err[1])))

    def addSkip(self, test: unittest.TestCase, reason: str) -> None:
        super().addSkip(test, reason)
        self._report(test, lambda case: Event.skipped(case, reason))

    def addExpectedFailure(self, test: unittest.TestCase, err: ExcInfo) -> None:
        super().addExpectedFailure(test, err)
        self._report(test, lambda case: Event.incomplete(case, str(err[1])))

    def addUnexpectedSuccess(self, test: unittest.TestCase) -> None:
        super().addUnexpectedSuccess(test)
        self._report(test, lambda case: Event.risky(case, UNEXPECTED_SUCCESS))

    def addSubTest(
        self,
        test: unittest.TestCase,
        subtest: unittest.TestCase,
        err: ExcInfo | None,
    ) -> None:
        super().addSubTest(test, subtest, err)
        if err is None:
            return

        failure = Failure.from_exception(err[1])
        if issubclass(err[0], test.failureException):
            self._report(test, lambda case: Event.failed(case, failure))
        else:
            self._report(test, lambda case: Event.errored(case, failure))

    # ─────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────

    def _report(self, test: Any, make_event: Callable[[CaseInfo], Event]) -> None:
        """
        Hand an outcome event to the printer.

        Fixture errors and skips (setUpClass, setUpModule, ...) arrive for
        objects that were never started; they are wrapped in their own
        test start/end so they get a number of their own.

        A test gets one result line. Outcomes that follow the first one
        (further failing subtests, a tearDown error after a failure) are
        written as comments below it.
        """
        if test is self._current_test and self._current_case is not None:
            event = make_event(self._current_case)
            if self._outcome_reported:
                self._write_additional(event)
                return
            self._outcome_reported = True
            self.printer.handle(event)
            return

        case = CaseInfo(name=test.id())
        logger.debug(f"Reporting outcome outside of a running test: {case.name}")
        self.printer.handle(Event.test_started(case))
        self.printer.handle(make_event(case))
        self.printer.handle(Event.test_finished(case))

    def _write_additional(self, event: Event) -> None:
        detail = event.failure.message if event.failure is not None else event.message
        first_line = detail.split("\n", 1)[0]
        logger.debug(f"{event.test.name}: additional {event.kind.value} written as comment")
        self.printer.write(f"# {event.kind.value.capitalize()}: {first_line}".rstrip())

    def _case_info(self, test: unittest.TestCase) -> CaseInfo:
        output = self._read_output if self.capture_output else None
        return CaseInfo(name=test.id(), output=output)

    def _read_output(self) -> str:
        return self._output.getvalue() if self._output is not None else ""

    def _start_capture(self) -> None:
        # Held open from startTest to stopTest
        self._capture = ExitStack()

        if self.capture_output:
            self._output = io.StringIO()
            self._capture.enter_context(redirect_stdout(self._output))
            self._capture.enter_context(redirect_stderr(self._output))

        if self.record_warnings:
            self._recorded_warnings = self._capture.enter_context(
                warnings.catch_warnings(record=True)
            )
            warnings.simplefilter("always")

    def _stop_capture(self) -> None:
        if self._capture is not None:
            self._capture.close()
            self._capture = None
