"""Shared test fixtures: validated configs, seeded states, session outcomes."""

from __future__ import annotations

from typing import Callable

import pytest

from progression_engine.models.progression_state import ProgressionState, seed_state
from progression_engine.models.session import SessionOutcome
from progression_engine.models.strategy_config import ValidatedConfig
from progression_engine.validation import validate_config_or_raise


@pytest.fixture
def none_config() -> ValidatedConfig:
    return validate_config_or_raise({"type": "none"})


@pytest.fixture
def linear_config() -> ValidatedConfig:
    """+5 per success, deload 10% after 3 straight failures."""
    return validate_config_or_raise(
        {
            "type": "linear",
            "weightIncrement": 5,
            "deloadThreshold": 3,
            "deloadPercent": 0.1,
        }
    )


@pytest.fixture
def double_config() -> ValidatedConfig:
    """8-12 reps, +5 when 12 reps are hit on every set."""
    return validate_config_or_raise(
        {"type": "double_progression", "repRange": [8, 12], "weightIncrement": 5}
    )


@pytest.fixture
def rpe_config() -> ValidatedConfig:
    """Target RPE 8 within 7-9, 5 per RPE point outside the range."""
    return validate_config_or_raise(
        {
            "type": "rpe_based",
            "targetRpe": 8,
            "rpeRange": [7, 9],
            "adjustmentPerUnit": 5,
        }
    )


@pytest.fixture
def percentage_config() -> ValidatedConfig:
    """+2.5% a week on working weight."""
    return validate_config_or_raise(
        {"type": "percentage", "weeklyIncrease": 0.025, "basedOn": "working_weight"}
    )


@pytest.fixture
def wave_config() -> ValidatedConfig:
    """Four-week 70/75/80/60% wave."""
    return validate_config_or_raise(
        {
            "type": "wave",
            "waves": [
                {"weekIndex": 1, "intensityPercent": 70, "sets": 4, "reps": 10},
                {"weekIndex": 2, "intensityPercent": 75, "sets": 4, "reps": 8},
                {"weekIndex": 3, "intensityPercent": 80, "sets": 4, "reps": 6},
                {"weekIndex": 4, "intensityPercent": 60, "sets": 3, "reps": 12},
            ],
        }
    )


@pytest.fixture
def linear_state(linear_config: ValidatedConfig) -> ProgressionState:
    return seed_state(linear_config, 100.0)


@pytest.fixture
def double_state(double_config: ValidatedConfig) -> ProgressionState:
    """100 lb at the bottom of the 8-12 range."""
    return seed_state(double_config, 100.0)


@pytest.fixture
def wave_state(wave_config: ValidatedConfig) -> ProgressionState:
    """Baseline 200 lb (tested 1RM), cursor on the first wave."""
    return seed_state(wave_config, 150.0, one_rep_max=200.0)


@pytest.fixture
def outcome_factory() -> Callable[..., SessionOutcome]:
    """Factory fixture for SessionOutcome instances.

    Usage:
        success = outcome_factory()
        failure = outcome_factory(met=False)
        hard = outcome_factory(rpe=9.5)
    """

    def factory(
        met: bool = True,
        rpe: float | None = None,
        weight: float = 100.0,
        reps: int = 8,
        sets: int = 4,
    ) -> SessionOutcome:
        achieved = (reps,) * sets if met else (reps,) * (sets - 1) + (reps - 2,)
        return SessionOutcome(
            prescribed_weight=weight,
            prescribed_reps=reps,
            prescribed_sets=sets,
            all_sets_met=met,
            achieved_reps=achieved,
            reported_rpe=rpe,
        )

    return factory
