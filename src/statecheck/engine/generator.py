# src/statecheck/engine/generator.py
"""Command-sequence generation.

Sequences are generated against the model only. Each step chooses a
command, checks it against the evolving model state, generates arguments,
mints a SymbolicVar for the command's result and advances the model with
that placeholder standing in for the real result:

    state_0 --push(#setup, 3)--> state_1 --pop(#setup)--> state_2 ...

Randomness, sizing and shrinking come from Hypothesis. The generation
budget is drawn once per sequence and decremented per command; the
variable counter is threaded explicitly through the loop. Because
Hypothesis shrinks by re-running this generator, every candidate it tries
satisfies the same checks as the example being shrunk.

valid_commands() repeats the checks for a concrete sequence. It guards
candidates that did not come from the generator, such as sequences with
commands removed by the structural shrink search.
"""

from typing import Any, Final

import structlog
from hypothesis import reject
from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from statecheck.contracts.specification import CommandEntry, CommandSequence, Specification
from statecheck.contracts.symbolic import SymbolicVar
from statecheck.engine.resolver import symbolic_vars

logger = structlog.get_logger(__name__)

# Attempts at finding a command whose requires/precondition hold before the
# example is rejected. Hypothesis reports Unsatisfiable if this keeps happening.
MAX_COMMAND_ATTEMPTS: Final[int] = 100


@st.composite
def _next_command(
    draw: st.DrawFn,
    spec: Specification,
    state: Any,
    count: int,
) -> tuple[CommandEntry, Any]:
    """Draw one valid command entry and the model state after it.

    Failed requires/precondition checks retry without consuming budget.
    """
    for _ in range(MAX_COMMAND_ATTEMPTS):
        name = draw(spec.command_names(state))
        command = spec.command(name)
        if not command.check_requires(state):
            continue
        args = draw(command.args_strategy(state))
        if not command.check_precondition(state, args):
            continue
        var = SymbolicVar(count)
        next_state = command.make_next_state(state, args, var)
        return CommandEntry(var=var, name=name, command=command, args=args), next_state
    logger.debug("No valid command found", attempts=MAX_COMMAND_ATTEMPTS, position=count)
    reject()


@st.composite
def command_sequences(
    draw: st.DrawFn,
    spec: Specification,
    initial_state: Any,
    max_size: int,
) -> CommandSequence:
    """Strategy producing command sequences that are valid against the model.

    Continues with weight size against 1 for stopping, where size is the
    remaining budget. Drawing 0 stops, which is also the value Hypothesis
    shrinks toward, so shrinking shortens sequences.

    Args:
        spec: Specification to draw commands from
        initial_state: Model state the sequence starts from
        max_size: Upper bound of the generation budget
    """
    size = draw(st.integers(min_value=0, max_value=max_size))
    state = initial_state
    entries: list[CommandEntry] = []
    count = 0
    while draw(st.integers(min_value=0, max_value=size)) != 0:
        entry, state = draw(_next_command(spec, state, count))
        entries.append(entry)
        size -= 1
        count += 1
    return tuple(entries)


def valid_commands(spec: Specification, commands: CommandSequence) -> bool:
    """Check a concrete sequence against a fresh model.

    At each position the command's requires must hold, every symbolic
    variable in its arguments must be bound by an earlier position (or be
    the setup subject), and its precondition must hold.
    """
    state, bound = spec.model_initial_state()
    known = set(bound)
    for entry in commands:
        command = entry.command
        if not command.check_requires(state):
            return False
        if not symbolic_vars(entry.args) <= known:
            return False
        if not command.check_precondition(state, entry.args):
            return False
        state = command.make_next_state(state, entry.args, entry.var)
        known.add(entry.var)
    return True


def valid_command_sequences(spec: Specification, max_size: int) -> SearchStrategy[CommandSequence]:
    """Generated sequences, filtered through valid_commands against a fresh model."""
    initial_state, _ = spec.model_initial_state()
    return command_sequences(spec, initial_state, max_size).filter(lambda commands: valid_commands(spec, commands))
