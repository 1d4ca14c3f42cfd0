# src/statecheck/engine/property.py
"""Property driver: turns a specification into a Hypothesis property.

One property evaluation:
1. Hypothesis draws a valid command sequence (generator + valid_commands).
2. The sequence runs against a fresh real subject, up to `tries` times.
3. Every trace is validated; the first failing one raises
   SpecificationFailure carrying the initial state and full trace.

Hypothesis then shrinks the failing sequence by replaying the generator.
run_specification() follows that with the structural shrink search on the
concrete minimal sequence and returns everything in a SearchResult.

Usage:
    # As a pytest test
    test_queue = spec_to_property(queue_spec, {"num_tests": 200})

    # Programmatically
    result = run_specification(queue_spec, {"seed": 1234})
    if not result.passed:
        print(format_search_result(result))
"""

import random
from collections.abc import Callable, Mapping
from typing import Any

import structlog
from hypothesis import Verbosity, given, seed
from hypothesis import settings as hypothesis_settings
from hypothesis.errors import Flaky, HypothesisException

from statecheck.contracts.errors import SpecificationFailure
from statecheck.contracts.results import SearchResult
from statecheck.contracts.specification import CommandSequence, Specification
from statecheck.core.config import RunSettings, load_run_settings
from statecheck.engine.generator import valid_command_sequences, valid_commands
from statecheck.engine.runner import real_initial_state, run_commands
from statecheck.engine.shrink import sequence_shrink_tree, shrink_search
from statecheck.engine.validator import first_failure
from statecheck.reporting import format_search_result

logger = structlog.get_logger(__name__)


def check_commands(spec: Specification, commands: CommandSequence, tries: int = 1) -> None:
    """Execute and validate a sequence `tries` times, each against a fresh subject.

    Raises:
        SpecificationFailure: On the first execution that does not pass
    """
    for attempt in range(1, tries + 1):
        initial = real_initial_state(spec)
        trace = run_commands(spec, initial, commands)
        error = first_failure(initial, trace)
        if error is not None:
            raise SpecificationFailure(commands, initial, trace, error, attempt=attempt) from error


def failure_of(spec: Specification, commands: CommandSequence, tries: int = 1) -> SpecificationFailure | None:
    """Like check_commands, but returns the failure instead of raising it."""
    try:
        check_commands(spec, commands, tries)
    except SpecificationFailure as failure:
        return failure
    return None


def spec_to_property(
    spec: Specification,
    options: RunSettings | Mapping[str, Any] | None = None,
) -> Callable[[], None]:
    """Turn a specification into a Hypothesis test function.

    The returned function takes no arguments and raises SpecificationFailure
    (after Hypothesis shrinking) when the specification does not hold. Bind
    it to a test_* name to run it under pytest.
    """
    run_settings = load_run_settings(options)

    @given(valid_command_sequences(spec, run_settings.max_size))
    def run_generated_commands(commands: CommandSequence) -> None:
        check_commands(spec, commands, run_settings.tries)

    test = run_settings.to_hypothesis()(run_generated_commands)
    if run_settings.seed is not None:
        test = seed(run_settings.seed)(test)
    return test


class _SearchRecorder:
    """Wraps check_commands to count evaluations and keep failures Hypothesis discards."""

    def __init__(self, spec: Specification, tries: int) -> None:
        self._spec = spec
        self._tries = tries
        self.calls = 0
        self.calls_until_failure: int | None = None
        self.first_failure: SpecificationFailure | None = None
        self.last_failure: SpecificationFailure | None = None

    def __call__(self, commands: CommandSequence) -> None:
        self.calls += 1
        try:
            check_commands(self._spec, commands, self._tries)
        except SpecificationFailure as failure:
            if self.first_failure is None:
                self.first_failure = failure
                self.calls_until_failure = self.calls
            self.last_failure = failure
            raise


def run_specification(
    spec: Specification,
    options: RunSettings | Mapping[str, Any] | None = None,
) -> SearchResult:
    """Search for a failing command sequence and shrink it.

    Args:
        spec: Specification to check
        options: RunSettings, or a mapping with num_tests (100), max_size
            (200), seed (random when omitted) and tries (1)

    Returns:
        SearchResult with the seed used and, on failure, the first and the
        minimal failing cases

    Raises:
        pydantic.ValidationError: If options are invalid
        hypothesis.errors.HypothesisException: On search usage errors, e.g.
            Unsatisfiable when no valid sequence can be generated
    """
    run_settings = load_run_settings(options)
    seed_value = run_settings.seed if run_settings.seed is not None else random.getrandbits(64)
    # Every event of this search, down to the runner's, carries the seed
    with structlog.contextvars.bound_contextvars(
        seed=seed_value,
        num_tests=run_settings.num_tests,
        max_size=run_settings.max_size,
    ):
        return _search_and_shrink(spec, run_settings, seed_value)


def _search_and_shrink(spec: Specification, run_settings: RunSettings, seed_value: int) -> SearchResult:
    recorder = _SearchRecorder(spec, run_settings.tries)

    @given(valid_command_sequences(spec, run_settings.max_size))
    def search(commands: CommandSequence) -> None:
        recorder(commands)

    search = hypothesis_settings(run_settings.to_hypothesis(), verbosity=Verbosity.quiet)(search)
    search = seed(seed_value)(search)

    shrunk: SpecificationFailure | None = None
    error: BaseException | None = None
    try:
        search()
    except SpecificationFailure as failure:
        shrunk = failure
    except Flaky as e:
        # Failed once, passed on replay: a nondeterministic subject
        logger.warning("Failure did not reproduce", error=str(e))
        shrunk = recorder.last_failure
        error = e
    except HypothesisException:
        raise
    except Exception as e:
        logger.warning("Property raised outside a run", error=str(e), error_type=type(e).__name__)
        error = e

    if shrunk is None and error is None:
        logger.info("Specification passed", tests_run=recorder.calls)
        return SearchResult(passed=True, seed=seed_value, num_tests=recorder.calls)

    shrink_nodes = recorder.calls - (recorder.calls_until_failure or recorder.calls)
    if shrunk is not None:
        outcome = shrink_search(
            sequence_shrink_tree(shrunk.commands),
            lambda commands: failure_of(spec, commands, run_settings.tries),
            is_valid=lambda commands: valid_commands(spec, commands),
            initial_failure=shrunk,
        )
        shrunk = outcome.failure
        shrink_nodes += outcome.nodes_visited

    logger.info(
        "Specification failed",
        tests_run=recorder.calls_until_failure,
        shrunk_length=len(shrunk.commands) if shrunk is not None else None,
        shrink_nodes_visited=shrink_nodes,
    )
    return SearchResult(
        passed=False,
        seed=seed_value,
        num_tests=recorder.calls_until_failure or recorder.calls,
        first_failure=recorder.first_failure,
        shrunk=shrunk,
        shrink_nodes_visited=shrink_nodes,
        error=error,
    )


def specification_correct(
    spec: Specification,
    options: RunSettings | Mapping[str, Any] | None = None,
) -> bool:
    """Run the specification and report whether it held; logs a report on failure."""
    result = run_specification(spec, options)
    if not result.passed:
        logger.warning(
            "Specification is not correct",
            seed=result.seed,
            failure=result.shrunk,
            report=format_search_result(result),
        )
    return result.passed
