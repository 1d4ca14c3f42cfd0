"""Outcome of running a specification through the search loop."""

from __future__ import annotations

from dataclasses import dataclass

from statecheck.contracts.errors import SpecificationFailure


@dataclass(frozen=True)
class SearchResult:
    """What run_specification found.

    Fields:
        passed: True when every generated sequence passed
        seed: Seed the search ran with (pass it back to reproduce)
        num_tests: Property evaluations before the first failure (or in total)
        first_failure: The first failing case found, before any shrinking
        shrunk: The minimal failing case after shrinking
        shrink_nodes_visited: Property evaluations spent shrinking
        error: Error that failed the property outside a run (e.g. in generation)
    """

    passed: bool
    seed: int
    num_tests: int
    first_failure: SpecificationFailure | None = None
    shrunk: SpecificationFailure | None = None
    shrink_nodes_visited: int = 0
    error: BaseException | None = None
