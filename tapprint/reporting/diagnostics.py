"""
YAML diagnostic blocks for failed tests.

A failure is followed by an indented YAML document between ``  ---``
and ``  ...`` markers carrying the failure message and, when
available, the actual and expected values.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

import yaml

from ..events import Failure


BLOCK_START = "  ---"
BLOCK_END = "  ..."
BLOCK_INDENT = "  "
SEVERITY_FAIL = "fail"


class DiagnosticDumper(yaml.SafeDumper):
    """
    SafeDumper that renders values it has no representer for.

    Anchors and aliases are never written. A container that contains
    itself is written as its ``repr`` at the point it recurs.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._open: set[int] = set()

    def ignore_aliases(self, data: Any) -> bool:
        # got/expected often share objects; repeat them instead of anchoring
        return True

    def represent_data(self, data: Any) -> yaml.Node:
        key = id(data)
        if key in self._open:
            return self.represent_str(repr(data))

        self._open.add(key)
        try:
            return super().represent_data(data)
        finally:
            self._open.discard(key)


def _represent_fallback(dumper: DiagnosticDumper, data: Any) -> yaml.Node:
    if isinstance(data, Enum):
        return dumper.represent_data(data.value)
    if isinstance(data, Mapping):
        return dumper.represent_dict(dict(data))
    if isinstance(data, (frozenset, range)):
        return dumper.represent_list(list(data))
    return dumper.represent_str(repr(data))


DiagnosticDumper.add_representer(None, _represent_fallback)


def build_diagnostic(failure: Failure) -> dict[str, Any]:
    """
    Build the diagnostic record for a failure.

    Args:
        failure: The failure to describe

    Returns:
        Mapping with ``message``, ``severity`` and, only when the failure
        carries a comparison, ``data`` with ``got`` and ``expected``
    """
    diagnostic: dict[str, Any] = {
        "message": failure.message.split("\n", 1)[0],
        "severity": SEVERITY_FAIL,
    }

    if failure.comparison is not None:
        diagnostic["data"] = {
            "got": failure.comparison.actual,
            "expected": failure.comparison.expected,
        }

    return diagnostic


def dump_yaml(data: Mapping[str, Any]) -> str:
    """Serialize a mapping as a block-style YAML document."""
    return yaml.dump(
        data,
        Dumper=DiagnosticDumper,
        indent=2,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )


def render_diagnostic(failure: Failure) -> list[str]:
    """
    Render the full diagnostic block for a failure, one line per item.

    Example:
        >>> render_diagnostic(Failure("values differ"))
        ['  ---', '  message: values differ', '  severity: fail', '  ...']
    """
    document = dump_yaml(build_diagnostic(failure))
    lines = [BLOCK_START]
    lines.extend(BLOCK_INDENT + line for line in document.splitlines())
    lines.append(BLOCK_END)
    return lines
