#!/usr/bin/env python3
"""
tapprint CLI - TAP output for test runs

Usage:
    tapprint run [START_DIR] [OPTIONS]
    tapprint replay <events.yaml>
    tapprint validate <events.yaml>
    tapprint --version
"""

import logging
import sys
import unittest
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .banner import version_banner
from .events import EventKind
from .replay import load_event_log, replay as replay_log
from .reporting import TapPrinter
from .runner import TapTestRunner

app = typer.Typer(
    name="tapprint",
    help="TAP (Test Anything Protocol) output for test runs",
    add_completion=False,
)
# stdout carries the TAP stream; everything meant for humans goes to stderr
console = Console(stderr=True)


def version_callback(value: bool):
    if value:
        console.print(f"tapprint v{__version__}")
        raise typer.Exit()


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level", "-l",
        help="Log level for diagnostics on stderr (DEBUG, INFO, WARNING, ...)"
    ),
):
    """
    tapprint - TAP output for test runs

    Run unittest suites or replay recorded event logs as TAP version 13.
    """
    setup_logging(log_level)


@app.command()
def run(
    start_dir: Path = typer.Argument(
        Path("."),
        help="Directory to discover tests in",
        exists=True,
        file_okay=False,
    ),
    pattern: str = typer.Option(
        "test*.py", "--pattern", "-p",
        help="Pattern test files must match"
    ),
    top_level_dir: Optional[Path] = typer.Option(
        None, "--top-level-dir", "-t",
        help="Top level directory of the project (defaults to START_DIR)"
    ),
    banner: bool = typer.Option(
        True, "--banner/--no-banner",
        help="Announce the test framework version as a TAP comment"
    ),
    capture: bool = typer.Option(
        True, "--capture/--no-capture",
        help="Write what tests print as TAP comments"
    ),
    failfast: bool = typer.Option(
        False, "--failfast", "-f",
        help="Stop on the first error or failure"
    ),
):
    """
    Discover and run unittest tests, writing TAP to stdout.
    """
    # Fresh loader: discover() remembers the top level dir of earlier calls
    suite = unittest.TestLoader().discover(
        str(start_dir),
        pattern=pattern,
        top_level_dir=str(top_level_dir) if top_level_dir else None,
    )

    runner = TapTestRunner(
        stream=sys.stdout,
        banner=version_banner() if banner else None,
        capture_output=capture,
        failfast=failfast,
    )
    result = runner.run(suite)

    raise typer.Exit(code=0 if result.wasSuccessful() else 1)


@app.command()
def replay(
    events_file: Path = typer.Argument(
        ...,
        help="Path to the event log YAML file",
        exists=True,
        readable=True,
    ),
):
    """
    Replay a recorded event log as TAP on stdout.
    """
    log, validation = load_event_log(events_file)

    if not validation.is_valid:
        console.print(f"\n[red]❌ Validation failed:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)

    printer = TapPrinter(sys.stdout, banner=log.banner)
    if log.banner:
        printer.write(log.banner)
    replay_log(log, printer)


@app.command()
def validate(
    events_file: Path = typer.Argument(
        ...,
        help="Path to the event log YAML file",
        exists=True,
        readable=True,
    ),
):
    """
    Validate an event log without replaying it.
    """
    console.print(f"\n📄 Validating: {events_file}")

    log, validation = load_event_log(events_file)

    if not validation.is_valid:
        console.print(f"\n[red]❌ Validation failed:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)

    console.print(f"\n[green]✅ Valid event log:[/green] {len(log.events)} events")
    console.print(f"   Tests: {log.test_count}")
    if log.banner:
        console.print(f"   Banner: {log.banner}")

    table = Table(title="Events")
    table.add_column("#", style="dim")
    table.add_column("Event", style="magenta")
    table.add_column("Details")

    for i, event in enumerate(log.events):
        if event.kind in (EventKind.SUITE_START, EventKind.SUITE_END):
            details = event.suite or ""
        elif event.failure is not None:
            details = event.failure.message.split("\n", 1)[0]
        elif event.message:
            details = event.message
        else:
            details = event.test.describe() if event.test else ""
        table.add_row(str(i), event.kind.value, details)

    console.print()
    console.print(table)


@app.command()
def info():
    """
    Show information about tapprint.
    """
    console.print(f"""
[bold]tapprint[/bold] v{__version__}

TAP (Test Anything Protocol) output for test runs

[bold]Features:[/bold]
  • TAP version 13 streams with sequential numbering and a plan line
  • YAML diagnostic blocks with got/expected values for failures
  • Captured test output written as TAP comments
  • unittest runner integration
  • Replay of recorded YAML event logs

[bold]Quick Start:[/bold]
  tapprint run tests
  tapprint replay runs/nightly.yaml
""")


if __name__ == "__main__":
    app()
