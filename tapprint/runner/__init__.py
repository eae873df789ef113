"""
unittest Integration

This package drives a TapPrinter from the standard library unittest
machinery, so any unittest suite can report as TAP.

Usage:
    import unittest
    from tapprint.banner import version_banner
    from tapprint.runner import TapTestRunner

    suite = unittest.defaultTestLoader.discover("tests")
    result = TapTestRunner(banner=version_banner()).run(suite)
"""

from .result import UNEXPECTED_SUCCESS, TapTestResult
from .runner import TapTestRunner

__all__ = [
    "UNEXPECTED_SUCCESS",
    "TapTestResult",
    "TapTestRunner",
]
