# src/statecheck/core/config.py
"""
Run settings for checking a specification.

Uses Pydantic for validation. Settings are frozen (immutable) after
construction. Callers may pass a RunSettings instance or a plain mapping
(e.g. {"num_tests": 500, "seed": 42}); mappings are validated here, at the
trust boundary, before any generation starts.
"""

from collections.abc import Mapping
from typing import Any

from hypothesis import HealthCheck, Phase
from hypothesis import settings as hypothesis_settings
from pydantic import BaseModel, Field

# Defaults for the search loop
DEFAULT_NUM_TESTS = 100
DEFAULT_MAX_SIZE = 200

# Sequences are long and filtered; these checks would abort legitimate runs
_SUPPRESSED_HEALTH_CHECKS = (
    HealthCheck.too_slow,
    HealthCheck.filter_too_much,
    HealthCheck.data_too_large,
    HealthCheck.large_base_example,
)


class RunSettings(BaseModel):
    """How many sequences to try, how long they may be, and how to seed the search."""

    model_config = {"frozen": True, "extra": "forbid"}

    num_tests: int = Field(
        default=DEFAULT_NUM_TESTS,
        gt=0,
        description="Number of generated sequences to check",
    )
    max_size: int = Field(
        default=DEFAULT_MAX_SIZE,
        ge=0,
        description="Upper bound of the generation budget (maximum commands per sequence)",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the search loop; random (and reported) when omitted",
    )
    tries: int = Field(
        default=1,
        gt=0,
        description="Times each sequence is executed; every execution must pass",
    )

    def to_hypothesis(self) -> hypothesis_settings:
        """Hypothesis settings for one search.

        The example database is disabled so a run is reproduced by its seed
        alone, and the deadline is disabled because real commands may block.
        """
        return hypothesis_settings(
            max_examples=self.num_tests,
            database=None,
            deadline=None,
            derandomize=False,
            report_multiple_bugs=False,
            phases=[Phase.explicit, Phase.generate, Phase.shrink],
            suppress_health_check=_SUPPRESSED_HEALTH_CHECKS,
        )


def load_run_settings(options: RunSettings | Mapping[str, Any] | None) -> RunSettings:
    """Coerce caller options to RunSettings.

    Raises:
        pydantic.ValidationError: If a mapping holds invalid or unknown values
    """
    if options is None:
        return RunSettings()
    if isinstance(options, RunSettings):
        return options
    return RunSettings.model_validate(dict(options))
