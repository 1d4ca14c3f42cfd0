"""Symbolic variables: placeholders for command results not yet known.

A SymbolicVar is minted for every generated command, numbered by its
position in the generated sequence. Later commands may carry the variable
inside their arguments; the runner swaps it for the real result once the
originating command has executed.

SETUP_VAR is the one variable not tied to a command. It stands for the
subject returned by Specification.setup, so the model's initial state can
refer to the subject during generation, before any subject exists.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

# Position reserved for the setup subject (never a real command index)
SETUP_POSITION: Final[int] = -1


@dataclass(frozen=True, slots=True)
class SymbolicVar:
    """Opaque, hashable placeholder for one command's result.

    Never mutated after creation. Used purely as a key into the result map.
    """

    position: int

    @property
    def is_setup(self) -> bool:
        return self.position == SETUP_POSITION

    def __repr__(self) -> str:
        if self.is_setup:
            return "#setup"
        return f"#{self.position}"


SETUP_VAR: Final[SymbolicVar] = SymbolicVar(SETUP_POSITION)

# Maps each executed command's variable to the value it produced
ResultMap = Mapping[SymbolicVar, Any]
