"""Command runner states and execution traces.

Uses the discriminated union pattern: every runner state is a frozen
dataclass carrying only the data that state needs, and RunnerStep is the
closed union of them. The runner and validator dispatch with exhaustive
match statements.

A Trace is the ordered tuple of every state the runner entered, starting
with the initial NextCommand and ending with exactly one Done or Fail.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from statecheck.contracts.specification import Command, CommandEntry, CommandSequence
from statecheck.contracts.symbolic import SETUP_VAR, ResultMap


class StepKind(StrEnum):
    """Discriminator for runner states (used in logs and reports)."""

    NEXT_COMMAND = "next_command"
    RUN_COMMAND = "run_command"
    NEXT_STATE = "next_state"
    POSTCONDITION_CHECK = "postcondition_check"
    DONE = "done"
    FAIL = "fail"


@dataclass(frozen=True)
class InitialState:
    """Where a run starts: the model state and the already-bound results.

    For real execution, results binds SETUP_VAR to the live subject.
    """

    state: Any
    results: ResultMap = field(default_factory=dict)

    @property
    def subject(self) -> Any:
        """The setup subject, or None when the specification has no setup."""
        return self.results.get(SETUP_VAR)


@dataclass(frozen=True)
class ResolvedCommand:
    """A command entry together with its arguments after symbolic resolution."""

    entry: CommandEntry
    args: tuple[Any, ...]

    @property
    def command(self) -> Command:
        return self.entry.command


@dataclass(frozen=True)
class NextCommand:
    """Pick the next entry off the remaining list (or finish)."""

    remaining: CommandSequence
    results: ResultMap
    kind: StepKind = field(default=StepKind.NEXT_COMMAND, repr=False)


@dataclass(frozen=True)
class RunCommand:
    """Invoke the real command with resolved arguments."""

    current: ResolvedCommand
    remaining: CommandSequence
    results: ResultMap
    kind: StepKind = field(default=StepKind.RUN_COMMAND, repr=False)


@dataclass(frozen=True)
class NextState:
    """Advance the execution-side model state with the real result.

    results already includes the entry's variable bound to result.
    """

    current: ResolvedCommand
    remaining: CommandSequence
    results: ResultMap
    result: Any
    kind: StepKind = field(default=StepKind.NEXT_STATE, repr=False)


@dataclass(frozen=True)
class PostconditionCheck:
    """Record the command's outcome for the validator.

    result_repr is a snapshot taken right after the command ran, since
    result may be a live object that later commands mutate.
    """

    current: ResolvedCommand
    remaining: CommandSequence
    results: ResultMap
    result: Any
    result_repr: str
    kind: StepKind = field(default=StepKind.POSTCONDITION_CHECK, repr=False)


@dataclass(frozen=True)
class Done:
    """Terminal: every command ran."""

    kind: StepKind = field(default=StepKind.DONE, repr=False)


@dataclass(frozen=True)
class Fail:
    """Terminal: the run stopped because of error."""

    error: BaseException
    kind: StepKind = field(default=StepKind.FAIL, repr=False)


# Discriminated union type - exhaustive pattern matching possible
RunnerStep = NextCommand | RunCommand | NextState | PostconditionCheck | Done | Fail

TERMINAL_STEPS = (Done, Fail)

Trace = tuple[RunnerStep, ...]
