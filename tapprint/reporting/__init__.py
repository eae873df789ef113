"""
TAP Reporting

This package turns test lifecycle events into a TAP version 13 stream.

Features:
    - Sequential test numbering and a closing plan line
    - Immediate not-ok / skip / risky result lines
    - YAML diagnostic blocks for failures
    - Captured test output written as comments
    - Host framework banner demoted to a comment

Usage:
    from tapprint.events import CaseInfo, Failure
    from tapprint.reporting import TapPrinter

    printer = TapPrinter()
    test = CaseInfo("tests.test_math.test_add")

    printer.on_suite_start()
    printer.on_test_start(test)
    printer.on_failure(test, Failure("values differ"))
    printer.on_test_end(test)
    printer.on_suite_end()
"""

# Models
from .models import TAP_VERSION_HEADER, ReporterState

# Diagnostics
from .diagnostics import build_diagnostic, dump_yaml, render_diagnostic

# Printer
from .printer import TapPrinter

__all__ = [
    # Models
    "TAP_VERSION_HEADER",
    "ReporterState",
    # Diagnostics
    "build_diagnostic",
    "dump_yaml",
    "render_diagnostic",
    # Printer
    "TapPrinter",
]
