# tests/unit/core/test_config.py
"""Tests for run settings validation and loading."""

import pytest
from hypothesis import HealthCheck, Phase
from pydantic import ValidationError

from statecheck.core.config import DEFAULT_MAX_SIZE, DEFAULT_NUM_TESTS, RunSettings, load_run_settings


class TestRunSettings:
    """RunSettings validation."""

    def test_defaults(self) -> None:
        settings = RunSettings()
        assert settings.num_tests == DEFAULT_NUM_TESTS == 100
        assert settings.max_size == DEFAULT_MAX_SIZE == 200
        assert settings.seed is None
        assert settings.tries == 1

    def test_num_tests_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            RunSettings(num_tests=0)

    def test_max_size_may_be_zero(self) -> None:
        """A zero budget only ever generates the empty sequence."""
        assert RunSettings(max_size=0).max_size == 0

    def test_max_size_not_negative(self) -> None:
        with pytest.raises(ValidationError):
            RunSettings(max_size=-1)

    def test_tries_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            RunSettings(tries=0)

    def test_unknown_option_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RunSettings.model_validate({"num_test": 10})

    def test_settings_are_frozen(self) -> None:
        settings = RunSettings()
        with pytest.raises(ValidationError):
            settings.num_tests = 5  # type: ignore[misc]


class TestToHypothesis:
    """Translation to Hypothesis settings."""

    def test_search_settings(self) -> None:
        settings = RunSettings(num_tests=42).to_hypothesis()

        assert settings.max_examples == 42
        assert settings.database is None
        assert settings.deadline is None
        assert settings.report_multiple_bugs is False

    def test_no_reuse_phase(self) -> None:
        """Runs are reproduced from the seed, not from stored examples."""
        phases = RunSettings().to_hypothesis().phases
        assert Phase.reuse not in phases
        assert Phase.shrink in phases

    def test_filter_health_check_suppressed(self) -> None:
        suppressed = RunSettings().to_hypothesis().suppress_health_check
        assert HealthCheck.filter_too_much in suppressed
        assert HealthCheck.too_slow in suppressed


class TestLoadRunSettings:
    """Coercion of caller options."""

    def test_none_gives_defaults(self) -> None:
        assert load_run_settings(None) == RunSettings()

    def test_instance_passed_through(self) -> None:
        settings = RunSettings(seed=9)
        assert load_run_settings(settings) is settings

    def test_mapping_validated(self) -> None:
        settings = load_run_settings({"num_tests": 7, "seed": 11, "tries": 2})
        assert settings.num_tests == 7
        assert settings.seed == 11
        assert settings.tries == 2

    def test_invalid_mapping_rejected(self) -> None:
        with pytest.raises(ValidationError):
            load_run_settings({"max_size": "lots"})
