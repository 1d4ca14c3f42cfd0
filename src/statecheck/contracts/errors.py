"""Error types raised or recorded while checking a specification.

The runner never lets these escape a run. UnresolvedReferenceError,
RealCommandError and TransitionError end a run as a terminal Fail step;
PostconditionFailure is produced only by the validator. The property driver
wraps whichever error ended a failing run in SpecificationFailure so the
search loop can shrink it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from statecheck.contracts.specification import CommandEntry, CommandSequence
    from statecheck.contracts.symbolic import SymbolicVar
    from statecheck.contracts.trace import InitialState, Trace


class StatecheckError(Exception):
    """Base class for every error defined by statecheck."""


class UnresolvedReferenceError(StatecheckError):
    """Raised when a symbolic variable has no entry in the result map.

    This is a sequencing defect: a command refers to a result that was
    never produced (its command was removed or has not run yet).
    """

    def __init__(self, var: SymbolicVar) -> None:
        self.var = var
        super().__init__(f"Symbolic variable {var!r} has no recorded result")


class UnknownCommandError(StatecheckError):
    """Raised when the command selection policy names a command the specification lacks."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        super().__init__(f"Command {name!r} not found in commands (known: {', '.join(known)})")


class RealCommandError(StatecheckError):
    """The real command raised while executing.

    Attributes:
        entry: Command entry that was executing
        cause: The exception raised by the real command
    """

    def __init__(self, entry: CommandEntry, cause: BaseException) -> None:
        self.entry = entry
        self.cause = cause
        super().__init__(f"Command {entry.name} ({entry.var!r}) raised {type(cause).__name__}: {cause}")


class TransitionError(StatecheckError):
    """The command's model transition (next_state) raised."""

    def __init__(self, entry: CommandEntry, cause: BaseException) -> None:
        self.entry = entry
        self.cause = cause
        super().__init__(f"next_state of {entry.name} ({entry.var!r}) raised {type(cause).__name__}: {cause}")


class PostconditionFailure(StatecheckError):
    """A postcondition returned False (or raised) during validation.

    Attributes:
        entry: Command entry whose postcondition failed
        args: Resolved arguments the command ran with
        result: Real result the command returned
        position: Index of the PostconditionCheck step in the trace
        cause: Exception raised by the postcondition, if it raised
    """

    def __init__(
        self,
        entry: CommandEntry,
        args: tuple[Any, ...],
        result: Any,
        position: int,
        cause: BaseException | None = None,
    ) -> None:
        self.entry = entry
        self.args = args
        self.result = result
        self.position = position
        self.cause = cause
        detail = f" (raised {type(cause).__name__}: {cause})" if cause is not None else ""
        super().__init__(f"Postcondition of {entry.name} ({entry.var!r}) failed for result {result!r}{detail}")


class IncompleteTraceError(StatecheckError):
    """A trace ended without a Done or Fail step."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"Trace of {length} steps has no terminal step")


class SpecificationFailure(StatecheckError):
    """Raised by the property when a generated sequence fails against the real subject.

    Carries everything needed to report or re-validate the failing run
    without executing the subject again.

    Attributes:
        commands: The generated command sequence
        initial: Initial model state and result map of the failing run
        trace: Full runner trace of the failing run
        error: The error that ended the run or failed validation
        attempt: Which of the configured tries failed (1-based)
    """

    def __init__(
        self,
        commands: CommandSequence,
        initial: InitialState,
        trace: Trace,
        error: BaseException,
        *,
        attempt: int = 1,
    ) -> None:
        self.commands = commands
        self.initial = initial
        self.trace = trace
        self.error = error
        self.attempt = attempt
        super().__init__(
            f"Generative test failed after {len(commands)} commands (attempt {attempt}): {error}",
        )
