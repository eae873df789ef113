"""
unittest runner that writes TAP instead of the usual text report.
"""

from __future__ import annotations

import logging
import sys
import unittest
from typing import TextIO

from ..reporting import TapPrinter
from .result import TapTestResult

logger = logging.getLogger(__name__)


class TapTestRunner:
    """
    Runs a unittest suite and streams its results as TAP.

    Drop-in replacement for unittest.TextTestRunner:

        suite = unittest.defaultTestLoader.discover("tests")
        result = TapTestRunner(banner=version_banner()).run(suite)
        sys.exit(0 if result.wasSuccessful() else 1)

    Args:
        stream: Where the TAP stream goes (defaults to sys.stdout at run time)
        banner: Host framework banner. It is announced through the
            printer before the run starts and so ends up as a comment.
        capture_output: Write what each test printed as TAP comments
        record_warnings: Report warnings raised by passing tests
        failfast: Stop on the first error or failure
    """

    resultclass = TapTestResult

    def __init__(
        self,
        stream: TextIO | None = None,
        banner: str | None = None,
        capture_output: bool = True,
        record_warnings: bool = True,
        failfast: bool = False,
    ):
        self.stream = stream
        self.banner = banner
        self.capture_output = capture_output
        self.record_warnings = record_warnings
        self.failfast = failfast

    def run(self, test: unittest.TestSuite | unittest.TestCase) -> TapTestResult:
        """Run the given test case or suite and return the result."""
        stream = self.stream if self.stream is not None else sys.stdout
        printer = TapPrinter(stream, banner=self.banner)

        if self.banner:
            printer.write(self.banner)

        result = self.resultclass(
            printer,
            capture_output=self.capture_output,
            record_warnings=self.record_warnings,
        )
        result.failfast = self.failfast

        logger.debug(f"Running {test.countTestCases()} test(s)")
        result.startTestRun()
        try:
            test(result)
        finally:
            result.stopTestRun()

        logger.info(
            f"Ran {result.testsRun} test(s): {len(result.failures)} failure(s), "
            f"{len(result.errors)} error(s), {len(result.skipped)} skipped"
        )
        return result
