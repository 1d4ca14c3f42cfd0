"""Shared contracts for statecheck.

All dataclasses, enums and exceptions that cross module boundaries are
defined here. This package is a LEAF: it must not import from
statecheck.core or statecheck.engine.

Import patterns:
    from statecheck.contracts import Command, Specification, SymbolicVar
    from statecheck.contracts import Trace, NextState, PostconditionCheck
"""

from statecheck.contracts.errors import (
    IncompleteTraceError,
    PostconditionFailure,
    RealCommandError,
    SpecificationFailure,
    StatecheckError,
    TransitionError,
    UnknownCommandError,
    UnresolvedReferenceError,
)
from statecheck.contracts.results import SearchResult
from statecheck.contracts.specification import (
    Command,
    CommandEntry,
    CommandSequence,
    Specification,
)
from statecheck.contracts.symbolic import SETUP_VAR, ResultMap, SymbolicVar
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
    StepKind,
    Trace,
)

__all__ = [
    "SETUP_VAR",
    "TERMINAL_STEPS",
    "Command",
    "CommandEntry",
    "CommandSequence",
    "Done",
    "Fail",
    "IncompleteTraceError",
    "InitialState",
    "NextCommand",
    "NextState",
    "PostconditionCheck",
    "PostconditionFailure",
    "RealCommandError",
    "ResolvedCommand",
    "ResultMap",
    "RunCommand",
    "RunnerStep",
    "SearchResult",
    "Specification",
    "SpecificationFailure",
    "StatecheckError",
    "StepKind",
    "SymbolicVar",
    "Trace",
    "TransitionError",
    "UnknownCommandError",
    "UnresolvedReferenceError",
]
