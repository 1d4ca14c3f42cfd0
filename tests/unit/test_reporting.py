# tests/unit/test_reporting.py
"""Tests for trace and search result rendering."""

from typing import Any

from statecheck.contracts import SETUP_VAR, Command, SearchResult, Specification, SymbolicVar
from statecheck.engine.property import failure_of, run_specification
from statecheck.engine.runner import real_initial_state, run_commands
from statecheck.reporting import format_command, format_search_result, trace_lines
from tests.fixtures.queue import BrokenCountQueue, entry, make_queue_spec


class TestFormatCommand:
    """Commands render with their symbolic arguments."""

    def test_setup_and_literal_arguments(self) -> None:
        spec = make_queue_spec()
        assert format_command(entry(spec, 0, "push", SETUP_VAR, 1)) == "#0 = push(#setup, 1)"

    def test_reference_to_earlier_result(self) -> None:
        spec = make_queue_spec()
        assert format_command(entry(spec, 3, "push", SETUP_VAR, SymbolicVar(1))) == "#3 = push(#setup, #1)"


class TestTraceLines:
    """Trace rendering stops at the failure."""

    def test_passing_trace(self) -> None:
        spec = make_queue_spec()
        initial = real_initial_state(spec)
        trace = run_commands(spec, initial, (entry(spec, 0, "push", SETUP_VAR, 1), entry(spec, 1, "count", SETUP_VAR)))

        assert trace_lines(initial, trace) == [
            "  #0 = push(#setup, 1)\t=> None",
            "  #1 = count(#setup)\t=> 1",
        ]

    def test_failed_postcondition_marked(self) -> None:
        spec = make_queue_spec(queue_factory=BrokenCountQueue)
        commands = (
            entry(spec, 0, "push", SETUP_VAR, 1),
            entry(spec, 1, "count", SETUP_VAR),
            entry(spec, 2, "push", SETUP_VAR, 2),
        )
        initial = real_initial_state(spec)
        trace = run_commands(spec, initial, commands)

        lines = trace_lines(initial, trace)

        assert lines == [
            "  #0 = push(#setup, 1)\t=> None",
            "  #1 = count(#setup)\t=> 0",
            "!! postcondition failed !!",
        ]

    def test_known_failure_used_without_replay(self) -> None:
        """A supplied failure is rendered without calling the postcondition again."""
        judged: list[Any] = []

        def postcondition(prev: Any, state: Any, args: tuple[Any, ...], result: Any) -> bool:
            judged.append(result)
            return False

        spec = Specification(
            commands={"echo": Command(args=lambda _: (7,), command=lambda n: n, postcondition=postcondition)},
        )
        failure = failure_of(spec, (entry(spec, 0, "echo", 7), entry(spec, 1, "echo", 8)))
        assert failure is not None
        judged.clear()

        lines = trace_lines(failure.initial, failure.trace, failure.error)
        report = format_search_result(SearchResult(passed=False, seed=4, num_tests=1, shrunk=failure))

        assert judged == []
        assert lines == ["  #0 = echo(7)\t=> 7", "!! postcondition failed !!"]
        assert "!! postcondition failed !!" in report

    def test_exception_marked(self) -> None:
        spec = make_queue_spec(full=True)
        initial = real_initial_state(spec)
        trace = run_commands(spec, initial, (entry(spec, 0, "pop", SETUP_VAR),))

        lines = trace_lines(initial, trace)

        assert len(lines) == 1
        assert lines[0].startswith("!! exception thrown: Command pop (#0) raised IndexError")
        assert lines[0].endswith(" !!")


class TestFormatSearchResult:
    """Whole-result reports."""

    def test_passed(self) -> None:
        assert format_search_result(SearchResult(passed=True, seed=5, num_tests=100)) == "Passed 100 tests (seed: 5)"

    def test_failed_report_sections(self) -> None:
        spec = make_queue_spec(queue_factory=BrokenCountQueue)

        report = format_search_result(run_specification(spec, {"num_tests": 50, "max_size": 30, "seed": 1234}))

        assert report.startswith("First failing test case:")
        assert "Shrunk:" in report
        assert "!! postcondition failed !!" in report
        assert "Seed: 1234" in report
        assert "Visited: " in report

    def test_error_only_report(self) -> None:
        result = SearchResult(passed=False, seed=1, num_tests=3, error=ValueError("bad generator"))

        report = format_search_result(result)

        assert "Error: ValueError: bad generator" in report
        assert "Shrunk:" not in report

    def test_shrunk_only_report(self) -> None:
        spec = make_queue_spec(queue_factory=BrokenCountQueue)
        failure = failure_of(spec, (entry(spec, 0, "push", SETUP_VAR, 1), entry(spec, 1, "count", SETUP_VAR)))

        report = format_search_result(SearchResult(passed=False, seed=2, num_tests=1, shrunk=failure))

        assert report.split("\n")[:3] == ["Shrunk:", "  #0 = push(#setup, 1)\t=> None", "  #1 = count(#setup)\t=> 0"]
