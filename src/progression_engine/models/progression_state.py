"""Per-(athlete, exercise) progression state.

The engine never mutates a state in place. Every evaluation returns a new
frozen copy which the caller persists in place of the old one.
"""

from __future__ import annotations

from dataclasses import dataclass

from progression_engine.models.enums import (
    DEFAULT_REPS,
    DEFAULT_SETS,
    ESTIMATED_ONE_REP_MAX_FACTOR,
    BasedOn,
    StrategyKind,
)
from progression_engine.models.strategy_config import (
    DoubleProgression,
    PercentageProgression,
    ValidatedConfig,
    WaveProgression,
)


@dataclass(frozen=True)
class ProgressionState:
    """Where one exercise currently stands under its strategy.

    ``current_weight`` is kept unrounded so compounding strategies do not
    accumulate rounding drift; prescriptions round on the way out.
    """

    kind: StrategyKind
    current_weight: float
    current_reps: int = DEFAULT_REPS
    sets: int = DEFAULT_SETS

    # linear
    consecutive_failures: int = 0

    # wave
    wave_cursor: int = 0
    baseline_weight: float | None = None

    # percentage
    periods_elapsed: int = 0


def seed_state(
    config: ValidatedConfig,
    working_weight: float,
    *,
    one_rep_max: float | None = None,
    reps: int = DEFAULT_REPS,
    sets: int = DEFAULT_SETS,
) -> ProgressionState:
    """Create the first state for an exercise newly assigned under *config*.

    Args:
        config: Validated strategy the exercise is assigned under.
        working_weight: Weight the athlete currently trains with.
        one_rep_max: Estimated or tested 1RM, if the athlete has one on record.
        reps: Assigned reps (ignored by double progression and wave).
        sets: Assigned sets (ignored by wave).

    Returns:
        A ProgressionState of the config's kind with all counters at zero.
    """
    if working_weight < 0:
        raise ValueError(f"working_weight must be non-negative, got {working_weight}")
    if one_rep_max is not None and one_rep_max < 0:
        raise ValueError(f"one_rep_max must be non-negative, got {one_rep_max}")

    strategy = config.config
    weight = float(working_weight)

    if isinstance(strategy, DoubleProgression):
        reps = strategy.min_reps

    if isinstance(strategy, PercentageProgression) and strategy.based_on == BasedOn.ONE_REP_MAX:
        if one_rep_max is not None:
            weight = float(one_rep_max)

    baseline = None
    if isinstance(strategy, WaveProgression):
        if one_rep_max is not None:
            baseline = float(one_rep_max)
        else:
            baseline = weight * ESTIMATED_ONE_REP_MAX_FACTOR
        first = strategy.waves[0]
        reps = first.reps
        sets = first.sets

    return ProgressionState(
        kind=config.kind,
        current_weight=weight,
        current_reps=reps,
        sets=sets,
        baseline_weight=baseline,
    )
