"""
Host framework version banner.

The banner is computed once by the process entry point and handed to
TapPrinter, which demotes any line equal to it to a TAP comment.
"""

from __future__ import annotations

import platform
from importlib import metadata


def version_banner(distribution: str | None = None) -> str:
    """
    Return the version banner of the host test framework.

    Args:
        distribution: Installed distribution name of the framework
            (e.g. "pytest"). When omitted, the banner describes the
            standard library unittest runner.

    Returns:
        "<name> <version>", or "unittest (Python <version>)"

    Raises:
        importlib.metadata.PackageNotFoundError: If the distribution
            is not installed
    """
    if distribution is None:
        return f"unittest (Python {platform.python_version()})"

    return f"{distribution} {metadata.version(distribution)}"
