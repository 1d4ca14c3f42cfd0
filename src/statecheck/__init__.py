"""
statecheck: model-based stateful generative testing.

Describe a stateful subject as a set of commands with a model, and
statecheck generates valid command sequences, runs them against the real
subject, checks every result against the model and shrinks failures to a
minimal sequence.
"""

from statecheck.contracts import (
    SETUP_VAR,
    Command,
    SearchResult,
    Specification,
    SpecificationFailure,
    SymbolicVar,
)
from statecheck.core.config import RunSettings
from statecheck.engine import run_specification, spec_to_property, specification_correct

__version__ = "0.1.0"

__all__ = [
    "SETUP_VAR",
    "Command",
    "RunSettings",
    "SearchResult",
    "Specification",
    "SpecificationFailure",
    "SymbolicVar",
    "__version__",
    "run_specification",
    "spec_to_property",
    "specification_correct",
]
