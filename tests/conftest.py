"""Shared fixtures for tapprint tests."""

import io

import pytest

from tapprint.events import CaseInfo
from tapprint.reporting import TapPrinter


BANNER = "unittest (Python 3.99.0)"


@pytest.fixture
def out() -> io.StringIO:
    """Sink the printer writes TAP text to."""
    return io.StringIO()


@pytest.fixture
def printer(out: io.StringIO) -> TapPrinter:
    return TapPrinter(out, banner=BANNER)


@pytest.fixture
def case() -> CaseInfo:
    return CaseInfo("tests.test_math.MathTest.test_add")


def tap_lines(out: io.StringIO) -> list[str]:
    return out.getvalue().splitlines()
