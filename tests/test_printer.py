"""Tests for tapprint.reporting.printer."""

import io

import pytest

from tapprint.events import CaseInfo, Comparison, Event, EventKind, Failure
from tapprint.reporting import TAP_VERSION_HEADER, TapPrinter

from .conftest import BANNER, tap_lines


def run_tests(printer: TapPrinter, count: int) -> None:
    for i in range(count):
        test = CaseInfo(f"test_{i}")
        printer.on_test_start(test)
        printer.on_test_end(test)


class TestHeaderAndPlan:
    def test_header_written_on_construction(self, out):
        TapPrinter(out)

        assert out.getvalue() == "TAP version 13\n"

    def test_defaults_to_stdout(self, capsys):
        TapPrinter()

        assert capsys.readouterr().out == f"{TAP_VERSION_HEADER}\n"

    def test_single_passing_test_transcript(self, printer, out, case):
        printer.on_suite_start()
        printer.on_test_start(case)
        printer.on_test_end(case)
        printer.on_suite_end()

        assert out.getvalue() == (
            "TAP version 13\n"
            "ok 1 - tests.test_math.MathTest.test_add\n"
            "1..1\n"
        )

    @pytest.mark.parametrize("count", [0, 1, 7])
    def test_plan_reports_number_of_started_tests(self, printer, out, count):
        printer.on_suite_start()
        run_tests(printer, count)
        printer.on_suite_end()

        assert tap_lines(out)[-1] == f"1..{count}"

    def test_nested_suites_write_one_plan_at_outermost_end(self, printer, out):
        printer.on_suite_start("outer")
        printer.on_suite_start("inner")
        run_tests(printer, 3)
        printer.on_suite_end("inner")

        assert not any(line.startswith("1..") for line in tap_lines(out))

        printer.on_suite_end("outer")

        plans = [line for line in tap_lines(out) if line.startswith("1..")]
        assert plans == ["1..3"]
        assert tap_lines(out)[-1] == "1..3"

    def test_suite_end_without_start_is_rejected(self, printer):
        with pytest.raises(AssertionError):
            printer.on_suite_end()


class TestNumbering:
    def test_numbers_are_sequential_from_one(self, printer, out):
        printer.on_suite_start()
        run_tests(printer, 4)
        printer.on_suite_end()

        assert tap_lines(out)[1:] == [
            "ok 1 - test_0",
            "ok 2 - test_1",
            "ok 3 - test_2",
            "ok 4 - test_3",
            "1..4",
        ]

    def test_numbering_continues_across_outcomes(self, printer, out):
        a, b, c = CaseInfo("a"), CaseInfo("b"), CaseInfo("c")

        printer.on_suite_start()
        printer.on_test_start(a)
        printer.on_error(a, Failure("boom"))
        printer.on_test_end(a)
        printer.on_test_start(b)
        printer.on_skipped(b)
        printer.on_test_end(b)
        printer.on_test_start(c)
        printer.on_test_end(c)
        printer.on_suite_end()

        assert tap_lines(out)[1:] == [
            "not ok 1 - Error: a",
            "ok 2 - b # SKIP",
            "ok 3 - c",
            "1..3",
        ]

    def test_description_is_used_when_present(self, printer, out):
        test = CaseInfo("tests.test_math.test_add", description="adds two numbers")
        printer.on_test_start(test)
        printer.on_test_end(test)

        assert tap_lines(out)[-1] == "ok 1 - adds two numbers"


class TestOutcomes:
    def test_error_line(self, printer, out, case):
        printer.on_test_start(case)
        printer.on_error(case, Failure("ZeroDivisionError"))
        printer.on_test_end(case)

        assert tap_lines(out)[1:] == [f"not ok 1 - Error: {case.name}"]

    def test_warning_line(self, printer, out, case):
        printer.on_test_start(case)
        printer.on_warning(case, Failure("deprecated"))
        printer.on_test_end(case)

        assert tap_lines(out)[1:] == [f"not ok 1 - Warning: {case.name}"]

    def test_incomplete_line_has_todo_directive(self, printer, out, case):
        printer.on_test_start(case)
        printer.on_incomplete(case, "not finished")
        printer.on_test_end(case)

        assert tap_lines(out)[1:] == [f"not ok 1 - {case.name} # TODO Incomplete Test"]

    def test_failure_writes_not_ok_and_diagnostic_block(self, printer, out, case):
        printer.on_test_start(case)
        printer.on_failure(case, Failure("values differ\nsecond line"))
        printer.on_test_end(case)

        assert tap_lines(out)[1:] == [
            f"not ok 1 - {case.name}",
            "  ---",
            "  message: values differ",
            "  severity: fail",
            "  ...",
        ]

    def test_failure_with_comparison_includes_data(self, printer, out, case):
        printer.on_test_start(case)
        printer.on_failure(case, Failure("values differ", Comparison(actual=3, expected=2)))
        printer.on_test_end(case)

        assert tap_lines(out)[1:] == [
            f"not ok 1 - {case.name}",
            "  ---",
            "  message: values differ",
            "  severity: fail",
            "  data:",
            "    got: 3",
            "    expected: 2",
            "  ...",
        ]

    def test_failure_with_self_referencing_value(self, printer, out, case):
        looped = []
        looped.append(looped)

        printer.on_test_start(case)
        printer.on_failure(case, Failure("values differ", Comparison(actual=looped, expected=[])))
        printer.on_test_end(case)

        assert tap_lines(out)[1:] == [
            f"not ok 1 - {case.name}",
            "  ---",
            "  message: values differ",
            "  severity: fail",
            "  data:",
            "    got:",
            "    - '[[...]]'",
            "    expected: []",
            "  ...",
        ]

    def test_failure_suppresses_ok_line(self, printer, out, case):
        printer.on_test_start(case)
        printer.on_failure(case, Failure("values differ"))
        printer.on_test_end(case)

        assert not any(line.startswith("ok 1") for line in tap_lines(out))

    def test_skipped_is_written_immediately(self, printer, out, case):
        printer.on_test_start(case)
        printer.on_skipped(case, "no network")

        assert tap_lines(out)[-1] == f"ok 1 - {case.name} # SKIP no network"

        printer.on_test_end(case)

        assert tap_lines(out)[1:] == [f"ok 1 - {case.name} # SKIP no network"]

    def test_risky_without_message(self, printer, out, case):
        printer.on_test_start(case)
        printer.on_risky(case)
        printer.on_test_end(case)

        assert tap_lines(out)[1:] == [f"ok 1 - {case.name} # RISKY"]

    def test_risky_with_message(self, printer, out, case):
        printer.on_test_start(case)
        printer.on_risky(case, "no assertions")
        printer.on_test_end(case)

        assert tap_lines(out)[1:] == [f"ok 1 - {case.name} # RISKY no assertions"]

    def test_outcome_resets_for_next_test(self, printer, out):
        first, second = CaseInfo("first"), CaseInfo("second")

        printer.on_test_start(first)
        printer.on_warning(first)
        printer.on_test_end(first)
        printer.on_test_start(second)
        printer.on_test_end(second)

        assert tap_lines(out)[1:] == ["not ok 1 - Warning: first", "ok 2 - second"]

    def test_outcome_outside_test_is_rejected(self, printer, case):
        with pytest.raises(AssertionError):
            printer.on_skipped(case)

    def test_test_end_without_start_is_rejected(self, printer, case):
        with pytest.raises(AssertionError):
            printer.on_test_end(case)


class TestCapturedOutput:
    def test_output_written_as_comments_after_result(self, printer, out):
        test = CaseInfo("noisy", output=lambda: "\n  first\nsecond  \n\n")
        printer.on_test_start(test)
        printer.on_test_end(test)

        assert tap_lines(out)[1:] == ["ok 1 - noisy", "# first", "# second"]

    def test_output_follows_failure_block(self, printer, out):
        test = CaseInfo("noisy", output=lambda: "debug")
        printer.on_test_start(test)
        printer.on_failure(test, Failure("bad"))
        printer.on_test_end(test)

        assert tap_lines(out)[-2:] == ["  ...", "# debug"]

    def test_blank_output_writes_nothing(self, printer, out):
        test = CaseInfo("quiet", output=lambda: "   \n")
        printer.on_test_start(test)
        printer.on_test_end(test)

        assert tap_lines(out)[1:] == ["ok 1 - quiet"]

    def test_tests_without_capture_support_are_skipped(self, printer, out, case):
        assert not case.supports_output

        printer.on_test_start(case)
        printer.on_test_end(case)

        assert tap_lines(out)[1:] == [f"ok 1 - {case.name}"]


class TestBannerDemotion:
    def test_banner_line_becomes_comment(self, printer, out):
        printer.write(BANNER)

        assert tap_lines(out)[-1] == f"# {BANNER}"

    def test_other_lines_pass_through(self, printer, out):
        printer.write(BANNER + " extra")
        printer.write("ok 1 - something")

        assert tap_lines(out)[1:] == [BANNER + " extra", "ok 1 - something"]

    def test_trailing_newline_on_banner_is_ignored(self, out):
        printer = TapPrinter(out, banner=BANNER + "\n")
        printer.write(BANNER)

        assert tap_lines(out)[-1] == f"# {BANNER}"

    def test_no_banner_means_no_demotion(self, out):
        printer = TapPrinter(out)
        printer.write(BANNER)

        assert tap_lines(out)[-1] == BANNER


class TestHandle:
    def test_dispatches_every_kind(self, printer, out):
        test = CaseInfo("t")
        events = [
            Event.suite_started("all"),
            Event.test_started(test),
            Event.failed(test, Failure("bad", Comparison("abc", "abd"))),
            Event.test_finished(test),
            Event.test_started(test),
            Event.errored(test, Failure("boom")),
            Event.test_finished(test),
            Event.test_started(test),
            Event.warned(test, Failure("careful")),
            Event.test_finished(test),
            Event.test_started(test),
            Event.incomplete(test),
            Event.test_finished(test),
            Event.test_started(test),
            Event.risky(test, "slow"),
            Event.test_finished(test),
            Event.test_started(test),
            Event.skipped(test, "later"),
            Event.test_finished(test),
            Event.suite_finished("all"),
        ]

        for event in events:
            printer.handle(event)

        assert {e.kind for e in events} == set(EventKind)
        assert tap_lines(out) == [
            "TAP version 13",
            "not ok 1 - t",
            "  ---",
            "  message: bad",
            "  severity: fail",
            "  data:",
            "    got: abc",
            "    expected: abd",
            "  ...",
            "not ok 2 - Error: t",
            "not ok 3 - Warning: t",
            "not ok 4 - t # TODO Incomplete Test",
            "ok 5 - t # RISKY slow",
            "ok 6 - t # SKIP later",
            "1..6",
        ]

    def test_state_tracks_run(self, printer):
        test = CaseInfo("t")
        printer.handle(Event.suite_started())
        printer.handle(Event.test_started(test))

        assert printer.state.test_number == 1
        assert printer.state.suite_depth == 1
        assert printer.state.test_in_progress

        printer.handle(Event.skipped(test))

        assert not printer.state.test_successful


def test_writes_go_to_injected_stream_only(capsys):
    sink = io.StringIO()
    printer = TapPrinter(sink)
    printer.write("# hello")

    assert capsys.readouterr().out == ""
    assert sink.getvalue().endswith("# hello\n")
