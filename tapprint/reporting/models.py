"""
Reporter state for a single TAP run.
"""

from __future__ import annotations

from dataclasses import dataclass


TAP_VERSION_HEADER = "TAP version 13"


@dataclass
class ReporterState:
    """
    Mutable counters and flags owned by one TapPrinter.

    Attributes:
        test_number: Number of the current/most recent test (1-based)
        suite_depth: Number of currently open nested suites
        test_successful: Whether the current test is still a plain pass
        test_in_progress: Whether a test has started and not yet ended
    """
    test_number: int = 0
    suite_depth: int = 0
    test_successful: bool = True
    test_in_progress: bool = False

    def open_suite(self) -> None:
        self.suite_depth += 1

    def close_suite(self) -> bool:
        """Close the innermost suite; return True when it was the outermost."""
        self.suite_depth -= 1
        return self.suite_depth == 0

    def begin_test(self) -> int:
        self.test_number += 1
        self.test_successful = True
        self.test_in_progress = True
        return self.test_number

    def end_test(self) -> None:
        self.test_in_progress = False

    def mark_unsuccessful(self) -> None:
        self.test_successful = False

    def plan_line(self) -> str:
        return f"1..{self.test_number}"
