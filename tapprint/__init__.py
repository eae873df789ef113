"""
tapprint - TAP (Test Anything Protocol) reporter for test runs

This package turns the lifecycle events of a running test suite into a
TAP version 13 stream, numbered and ordered as the events arrive.

Subpackages:
    - events: Lifecycle event and test identity models
    - reporting: The TAP printer and YAML diagnostic blocks
    - runner: unittest result/runner classes that report as TAP
    - replay: Load recorded event logs and replay them as TAP

Usage:
    from tapprint import CaseInfo, Failure, TapPrinter, version_banner

    printer = TapPrinter(banner=version_banner())
    test = CaseInfo("tests.test_math.test_add")

    printer.on_suite_start()
    printer.on_test_start(test)
    printer.on_failure(test, Failure("values differ"))
    printer.on_test_end(test)
    printer.on_suite_end()
"""

__version__ = "0.1.0"

from .banner import version_banner

# Re-export events for convenience
from .events import (
    CaseInfo,
    Comparison,
    Event,
    EventKind,
    ExpectationFailed,
    Failure,
)

# Re-export reporting for convenience
from .reporting import (
    TAP_VERSION_HEADER,
    ReporterState,
    TapPrinter,
    render_diagnostic,
)

# Re-export runner for convenience
from .runner import TapTestResult, TapTestRunner

# Re-export replay for convenience
from .replay import (
    EventLog,
    ValidationResult,
    load_event_log,
    parse_event_log_yaml,
    replay,
)

__all__ = [
    # Package info
    "__version__",
    # Banner
    "version_banner",
    # Events
    "CaseInfo",
    "Comparison",
    "Event",
    "EventKind",
    "ExpectationFailed",
    "Failure",
    # Reporting
    "TAP_VERSION_HEADER",
    "ReporterState",
    "TapPrinter",
    "render_diagnostic",
    # Runner
    "TapTestResult",
    "TapTestRunner",
    # Replay
    "EventLog",
    "ValidationResult",
    "load_event_log",
    "parse_event_log_yaml",
    "replay",
]
