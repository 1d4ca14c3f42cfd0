"""Command and specification contracts.

A Specification describes a stateful subject as a set of named Commands.
Each Command bundles:

- how to generate its arguments from the current model state (args),
- when it may be chosen (requires, before argument generation) and whether
  the generated arguments are acceptable (precondition),
- how the model changes when it runs (next_state),
- what the real call is (command) and how to judge its result
  (postcondition).

next_state is called twice per command: once during generation with a
SymbolicVar standing in for the result, and once during execution and
validation with the real result. It must therefore be pure.

Example:
    push = Command(
        args=lambda state: (state["queue"], st.integers(min_value=0)),
        command=lambda queue, value: queue.push(value),
        next_state=lambda state, args, _: {**state, "elements": [*state["elements"], args[1]]},
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from statecheck.contracts.errors import UnknownCommandError
from statecheck.contracts.symbolic import SETUP_VAR, SymbolicVar


def _as_args_strategy(args: SearchStrategy[Any] | Iterable[Any]) -> SearchStrategy[tuple[Any, ...]]:
    """Normalise an argument description to a strategy of tuples.

    Accepts a strategy (its values are converted to tuples) or an iterable
    whose items are strategies or literal values (literals, including
    symbolic variables, are used as-is).
    """
    if isinstance(args, SearchStrategy):
        return args.map(tuple)
    return st.tuples(*(arg if isinstance(arg, SearchStrategy) else st.just(arg) for arg in args))


@dataclass(frozen=True)
class Command:
    """One operation of a stateful subject.

    Only args and command are required. Omitted hooks default to: always
    allowed (requires, precondition), model unchanged (next_state), and
    always correct (postcondition).
    """

    args: Callable[[Any], SearchStrategy[Any] | Iterable[Any]]
    command: Callable[..., Any]
    requires: Callable[[Any], Any] | None = None
    precondition: Callable[[Any, tuple[Any, ...]], Any] | None = None
    next_state: Callable[[Any, tuple[Any, ...], Any], Any] | None = None
    postcondition: Callable[[Any, Any, tuple[Any, ...], Any], Any] | None = None

    def args_strategy(self, state: Any) -> SearchStrategy[tuple[Any, ...]]:
        return _as_args_strategy(self.args(state))

    def check_requires(self, state: Any) -> bool:
        if self.requires is None:
            return True
        return bool(self.requires(state))

    def check_precondition(self, state: Any, args: tuple[Any, ...]) -> bool:
        if self.precondition is None:
            return True
        return bool(self.precondition(state, args))

    def make_next_state(self, state: Any, args: tuple[Any, ...], result: Any) -> Any:
        if self.next_state is None:
            return state
        return self.next_state(state, args, result)

    def check_postcondition(self, prev_state: Any, next_state: Any, args: tuple[Any, ...], result: Any) -> bool:
        if self.postcondition is None:
            return True
        return bool(self.postcondition(prev_state, next_state, args, result))

    def run(self, args: tuple[Any, ...]) -> Any:
        return self.command(*args)


@dataclass(frozen=True)
class Specification:
    """A full description of a stateful subject under test.

    Attributes:
        commands: Commands keyed by a name unique within this specification
        initial_state: Builds the model's initial state. Called with the
            setup subject when setup is given (symbolic during generation,
            real during execution), otherwise with no arguments. Defaults to
            a None model state.
        setup: Creates a fresh real subject for every executed sequence
        cleanup: Releases the subject. Runs exactly once per executed
            sequence, receiving the setup subject (None without setup)
        generate_command: Selection policy returning a strategy of command
            names for a model state. Defaults to any command name.
    """

    commands: Mapping[str, Command]
    initial_state: Callable[..., Any] | None = None
    setup: Callable[[], Any] | None = None
    cleanup: Callable[[Any], Any] | None = None
    generate_command: Callable[[Any], SearchStrategy[str]] | None = None

    def __post_init__(self) -> None:
        if not self.commands:
            raise ValueError("Specification requires at least one command")

    def command_names(self, state: Any) -> SearchStrategy[str]:
        if self.generate_command is None:
            return st.sampled_from(sorted(self.commands))
        return self.generate_command(state)

    def command(self, name: str) -> Command:
        if name not in self.commands:
            raise UnknownCommandError(name, sorted(self.commands))
        return self.commands[name]

    def make_initial_state(self, subject: Any) -> Any:
        if self.initial_state is None:
            return None
        if self.setup is None:
            return self.initial_state()
        return self.initial_state(subject)

    def model_initial_state(self) -> tuple[Any, frozenset[SymbolicVar]]:
        """Initial model state for generation, plus the variables already bound.

        The setup subject is represented by SETUP_VAR; nothing real is built.
        """
        if self.setup is None:
            return self.make_initial_state(None), frozenset()
        return self.make_initial_state(SETUP_VAR), frozenset({SETUP_VAR})


@dataclass(frozen=True)
class CommandEntry:
    """One generated command: its variable, the chosen command and its raw arguments.

    args may contain SymbolicVar placeholders referring to earlier entries.
    """

    var: SymbolicVar
    name: str
    command: Command = field(repr=False, compare=False)
    args: tuple[Any, ...]


CommandSequence = tuple[CommandEntry, ...]
