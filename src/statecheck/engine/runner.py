# src/statecheck/engine/runner.py
"""Command runner: executes a concrete command sequence against a live subject.

The runner is a small state machine over the RunnerStep union:

    NextCommand ──> RunCommand ──> NextState ──> PostconditionCheck ──┐
        │  ▲            │              │                              │
        │  └────────────┼──────────────┼──────────────────────────────┘
        ▼               ▼              ▼
      Done            Fail           Fail

step() performs one transition. It returns the (possibly advanced)
execution-side model state together with the next step, or None after a
terminal step, which is where the specification's cleanup runs.

The runner does not evaluate postconditions. PostconditionCheck only
records the result and a snapshot of it; the validator replays the trace
and judges it. This keeps execution and verification separately
replayable: one trace can be validated or reported any number of times
without touching the real subject.
"""

from typing import Any

import structlog

from statecheck.contracts.errors import RealCommandError, TransitionError, UnresolvedReferenceError
from statecheck.contracts.specification import CommandSequence, Specification
from statecheck.contracts.symbolic import SETUP_VAR
from statecheck.contracts.trace import (
    TERMINAL_STEPS,
    Done,
    Fail,
    InitialState,
    NextCommand,
    NextState,
    PostconditionCheck,
    ResolvedCommand,
    RunCommand,
    RunnerStep,
    Trace,
)
from statecheck.engine.resolver import resolve

logger = structlog.get_logger(__name__)

# Longest result snapshot kept in a trace
SNAPSHOT_LIMIT = 200


def snapshot(value: Any) -> str:
    """Representation of a result at the moment it was produced.

    Never raises: a failing __repr__ is reported instead of ending the run.
    """
    try:
        text = repr(value)
    except Exception as e:
        return f"<unrepresentable {type(value).__name__}: {e}>"
    if len(text) > SNAPSHOT_LIMIT:
        return text[: SNAPSHOT_LIMIT - 3] + "..."
    return text


def run_cleanup(spec: Specification, subject: Any) -> None:
    """Run the specification's cleanup hook, best effort.

    Cleanup errors are logged and swallowed so they never mask the outcome
    of the run being cleaned up.
    """
    if spec.cleanup is None:
        return
    try:
        spec.cleanup(subject)
    except Exception as e:
        logger.warning("Specification cleanup failed", error=str(e), error_type=type(e).__name__)


def real_initial_state(spec: Specification) -> InitialState:
    """Build a fresh real subject and the execution-side initial model state.

    The subject is bound to SETUP_VAR so symbolic references to it resolve
    during execution.
    """
    if spec.setup is None:
        return InitialState(state=spec.make_initial_state(None), results={})
    subject = spec.setup()
    try:
        state = spec.make_initial_state(subject)
    except Exception:
        run_cleanup(spec, subject)
        raise
    return InitialState(state=state, results={SETUP_VAR: subject})


def step(spec: Specification, state: Any, current: RunnerStep, subject: Any = None) -> tuple[Any, RunnerStep | None]:
    """Advance the runner by one step.

    Args:
        spec: Specification being checked (used for cleanup)
        state: Execution-side model state
        current: The step to perform
        subject: Setup subject handed to cleanup on terminal steps

    Returns:
        Tuple of (model state, next step or None when current was terminal)
    """
    match current:
        case NextCommand(remaining=remaining, results=results):
            if not remaining:
                return state, Done()
            entry, rest = remaining[0], remaining[1:]
            try:
                args = resolve(entry.args, results)
            except UnresolvedReferenceError as e:
                return state, Fail(e)
            return state, RunCommand(ResolvedCommand(entry, args), rest, results)

        case RunCommand(current=command, remaining=remaining, results=results):
            try:
                result = command.command.run(command.args)
            except Exception as e:
                logger.debug("Real command raised", command=command.entry.name, var=repr(command.entry.var), error=str(e))
                return state, Fail(RealCommandError(command.entry, e))
            return state, NextState(command, remaining, {**results, command.entry.var: result}, result)

        case NextState(current=command, remaining=remaining, results=results, result=result):
            try:
                next_state = command.command.make_next_state(state, command.args, result)
            except Exception as e:
                logger.debug("Model transition raised", command=command.entry.name, error=str(e))
                # State is not advanced past a failed transition
                return state, Fail(TransitionError(command.entry, e))
            return next_state, PostconditionCheck(command, remaining, results, result, snapshot(result))

        case PostconditionCheck(remaining=remaining, results=results):
            return state, NextCommand(remaining, results)

        case Done() | Fail():
            run_cleanup(spec, subject)
            return state, None


def run_commands(spec: Specification, initial: InitialState, commands: CommandSequence) -> Trace:
    """Execute commands against the subject bound in initial, recording every step.

    The trace starts with NextCommand and ends with exactly one Done or Fail.
    An exception escaping a step is recorded as Fail. Cleanup runs exactly
    once per call, including when a BaseException (SystemExit, a test
    framework's skip or fail) aborts the run; such exceptions are re-raised
    after cleanup.

    Args:
        spec: Specification the commands came from
        initial: Real initial state (see real_initial_state)
        commands: Concrete sequence, arguments possibly symbolic

    Returns:
        The full trace of runner steps
    """
    state = initial.state
    current: RunnerStep = NextCommand(commands, initial.results)
    trace: list[RunnerStep] = [current]
    try:
        while True:
            state, following = step(spec, state, current, initial.subject)
            if following is None:
                break
            trace.append(following)
            current = following
    except Exception as e:
        logger.error("Command runner crashed", step=current.kind.value, error=str(e), error_type=type(e).__name__)
        if not isinstance(current, TERMINAL_STEPS):
            trace.append(Fail(e))
    finally:
        # A terminal step has already attempted cleanup
        if not isinstance(current, TERMINAL_STEPS):
            run_cleanup(spec, initial.subject)
    return tuple(trace)
