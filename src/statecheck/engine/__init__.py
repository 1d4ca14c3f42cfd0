"""Generation, execution, validation and shrinking of command sequences.

Modules, leaves first:
- resolver: symbolic value resolution
- generator: command-sequence strategy and validity checks
- shrink: shrink trees and the structural shrink search
- runner: command runner state machine
- validator: trace validation
- property: Hypothesis property and search driver
"""

from statecheck.engine.generator import command_sequences, valid_command_sequences, valid_commands
from statecheck.engine.property import (
    check_commands,
    run_specification,
    spec_to_property,
    specification_correct,
)
from statecheck.engine.resolver import resolve, symbolic_vars
from statecheck.engine.runner import real_initial_state, run_commands, step
from statecheck.engine.shrink import ShrinkTree, sequence_shrink_tree, shrink_search
from statecheck.engine.validator import extract_exception, first_failure, passed

__all__ = [
    "ShrinkTree",
    "check_commands",
    "command_sequences",
    "extract_exception",
    "first_failure",
    "passed",
    "real_initial_state",
    "resolve",
    "run_commands",
    "run_specification",
    "sequence_shrink_tree",
    "shrink_search",
    "spec_to_property",
    "specification_correct",
    "step",
    "symbolic_vars",
    "valid_command_sequences",
    "valid_commands",
]
