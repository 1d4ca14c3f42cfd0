# src/statecheck/engine/validator.py
"""Trace validation.

Replays a recorded trace against the model, independently of the runner:
every NextState step recomputes the model transition from the recorded
result, and every PostconditionCheck step evaluates the command's
postcondition against (previous state, new state, args, result).

Validation never executes the real subject, so a trace can be validated,
re-validated and reported as often as needed.
"""

from typing import Any

from statecheck.contracts.errors import (
    IncompleteTraceError,
    PostconditionFailure,
    TransitionError,
)
from statecheck.contracts.trace import (
    Done,
    Fail,
    InitialState,
    NextCommand,
    NextState,
    PostconditionCheck,
    RunCommand,
    Trace,
)


def first_failure(initial: InitialState, trace: Trace) -> BaseException | None:
    """Find the first reason a trace does not pass.

    Short-circuits at the first failing postcondition, so later commands are
    never judged.

    Args:
        initial: Initial state the trace was produced from
        trace: Trace recorded by run_commands

    Returns:
        None if the trace passed, otherwise the error describing the failure:
        PostconditionFailure, TransitionError, the error carried by a Fail
        step, or IncompleteTraceError for a trace without terminal step
    """
    state: Any = initial.state
    prev_state: Any = initial.state
    for position, current in enumerate(trace):
        match current:
            case NextState(current=command, result=result):
                try:
                    state, prev_state = command.command.make_next_state(state, command.args, result), state
                except Exception as e:
                    return TransitionError(command.entry, e)

            case PostconditionCheck(current=command, result=result):
                try:
                    holds = command.command.check_postcondition(prev_state, state, command.args, result)
                except Exception as e:
                    return PostconditionFailure(command.entry, command.args, result, position, cause=e)
                if not holds:
                    return PostconditionFailure(command.entry, command.args, result, position)

            case Fail(error=error):
                return error

            case Done():
                return None

            case NextCommand() | RunCommand():
                pass
    return IncompleteTraceError(len(trace))


def passed(initial: InitialState, trace: Trace) -> bool:
    """Whether a trace represents a successfully completed, correct execution."""
    return first_failure(initial, trace) is None


def extract_exception(trace: Trace) -> BaseException | None:
    """Return the error that ended a run, if it ended in Fail."""
    if trace and isinstance(trace[-1], Fail):
        return trace[-1].error
    return None
