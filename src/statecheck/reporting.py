# src/statecheck/reporting.py
"""Plain-text rendering of traces and search results.

Nothing here prints or re-executes commands: traces already hold every
result and a snapshot of it. A failure the caller already has (such as
SpecificationFailure.error) is used as is; only a bare trace is re-judged by
replaying it against the model.

Example output:
    #0 = push(#setup, 1)	=> None
    #1 = count(#setup)	=> 0
    !! postcondition failed !!
"""

from statecheck.contracts.errors import PostconditionFailure
from statecheck.contracts.results import SearchResult
from statecheck.contracts.specification import CommandEntry
from statecheck.contracts.trace import Fail, InitialState, PostconditionCheck, Trace
from statecheck.engine.validator import first_failure


def format_command(entry: CommandEntry) -> str:
    """Render a command entry as `#var = name(args...)`, arguments as generated."""
    args = ", ".join(repr(arg) for arg in entry.args)
    return f"{entry.var!r} = {entry.name}({args})"


def trace_lines(initial: InitialState, trace: Trace, failure: BaseException | None = None) -> list[str]:
    """Render each executed command with its result, stopping at the failure.

    Args:
        initial: Initial state the trace was produced from
        trace: Trace to render
        failure: Failure already found for this trace (e.g. SpecificationFailure.error).
            When omitted the trace is validated here, which re-runs the model's
            transitions and postconditions.
    """
    if failure is None:
        failure = first_failure(initial, trace)
    failed_at = failure.position if isinstance(failure, PostconditionFailure) else None
    lines: list[str] = []
    for position, current in enumerate(trace):
        match current:
            case PostconditionCheck(current=command, result_repr=result_repr):
                lines.append(f"  {format_command(command.entry)}\t=> {result_repr}")
                if position == failed_at:
                    lines.append("!! postcondition failed !!")
                    break
            case Fail(error=error):
                lines.append(f"!! exception thrown: {error} !!")
            case _:
                pass
    return lines


def format_search_result(result: SearchResult) -> str:
    """Render a search result: first failing case, shrunk case, seed and effort."""
    if result.passed:
        return f"Passed {result.num_tests} tests (seed: {result.seed})"
    lines: list[str] = []
    if result.first_failure is not None:
        first = result.first_failure
        lines.append("First failing test case:")
        lines.extend(trace_lines(first.initial, first.trace, first.error))
    if result.shrunk is not None:
        shrunk = result.shrunk
        lines.append("Shrunk:")
        lines.extend(trace_lines(shrunk.initial, shrunk.trace, shrunk.error))
    if result.error is not None:
        lines.append(f"Error: {type(result.error).__name__}: {result.error}")
    lines.append(f"Seed: {result.seed}")
    lines.append(f"Visited: {result.shrink_nodes_visited}")
    return "\n".join(lines)
