"""Forward projector — what a strategy would prescribe over the coming weeks.

The projection runs the real evaluator against a throwaway state under an
idealized athlete: every set is met, and every reported RPE equals the
target. It answers "what do the assigned targets look like", not "what
will happen", and it never reads or writes persisted state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np
import pandas as pd

from progression_engine.evaluator import apply_outcome, initial_prescription
from progression_engine.models.enums import (
    DEFAULT_REPS,
    DEFAULT_SETS,
    DEFAULT_WEIGHT_GRANULARITY,
)
from progression_engine.models.progression_state import ProgressionState, seed_state
from progression_engine.models.session import Prescription, SessionOutcome
from progression_engine.models.strategy_config import (
    RpeProgression,
    ValidatedConfig,
    WaveProgression,
)


@dataclass(frozen=True)
class Projection:
    """Lazy, restartable sequence of weekly prescriptions.

    Each iteration replays the simulation from the seed, so iterating twice
    yields identical prescriptions.
    """

    config: ValidatedConfig
    seed_weight: float
    horizon_weeks: int
    reps: int = DEFAULT_REPS
    sets: int = DEFAULT_SETS
    granularity: float = DEFAULT_WEIGHT_GRANULARITY

    def __len__(self) -> int:
        return max(0, self.horizon_weeks)

    def __iter__(self) -> Iterator[Prescription]:
        if self.horizon_weeks <= 0:
            return

        state = self._seed()
        yield initial_prescription(self.config, state, granularity=self.granularity)

        for _ in range(self.horizon_weeks - 1):
            outcome = self._idealized_outcome(state)
            state, prescription, _ = apply_outcome(
                self.config, state, outcome, granularity=self.granularity
            )
            yield prescription

    def _seed(self) -> ProgressionState:
        # The seed weight is the wave baseline, not an estimate derived from it.
        one_rep_max = (
            self.seed_weight if isinstance(self.config.config, WaveProgression) else None
        )
        return seed_state(
            self.config,
            self.seed_weight,
            one_rep_max=one_rep_max,
            reps=self.reps,
            sets=self.sets,
        )

    def _idealized_outcome(self, state: ProgressionState) -> SessionOutcome:
        strategy = self.config.config
        rpe = strategy.target_rpe if isinstance(strategy, RpeProgression) else None
        return SessionOutcome(
            prescribed_weight=state.current_weight,
            prescribed_reps=state.current_reps,
            prescribed_sets=state.sets,
            all_sets_met=True,
            achieved_reps=(state.current_reps,) * state.sets,
            reported_rpe=rpe,
        )


def project(
    config: ValidatedConfig,
    seed_weight: float,
    horizon_weeks: int,
    *,
    reps: int = DEFAULT_REPS,
    sets: int = DEFAULT_SETS,
    granularity: float = DEFAULT_WEIGHT_GRANULARITY,
) -> Projection:
    """Build a lazy projection of *config* from *seed_weight*.

    A horizon of zero or less gives an empty projection.

    Raises:
        TypeError: If *config* did not come from validate_config().
        ValueError: If *seed_weight* is negative or *granularity* not positive.
    """
    if not isinstance(config, ValidatedConfig):
        raise TypeError(
            f"expected a ValidatedConfig, got {type(config).__name__}; "
            "run validate_config() first"
        )
    if seed_weight < 0:
        raise ValueError(f"seed_weight must be non-negative, got {seed_weight}")
    if granularity <= 0:
        raise ValueError(f"granularity must be positive, got {granularity}")
    return Projection(
        config=config,
        seed_weight=float(seed_weight),
        horizon_weeks=horizon_weeks,
        reps=reps,
        sets=sets,
        granularity=granularity,
    )


def project_preview(
    config: ValidatedConfig,
    seed_weight: float,
    weeks: int,
    *,
    reps: int = DEFAULT_REPS,
    sets: int = DEFAULT_SETS,
    granularity: float = DEFAULT_WEIGHT_GRANULARITY,
) -> list[Prescription]:
    """Materialize a projection as a list, one prescription per week."""
    return list(
        project(config, seed_weight, weeks, reps=reps, sets=sets, granularity=granularity)
    )


def projection_frame(prescriptions: Projection | list[Prescription]) -> pd.DataFrame:
    """Tabulate a projection for display.

    Columns: week (1-indexed), weight, reps, sets, target_rpe, volume_load.
    """
    rows = list(prescriptions)
    weights = np.array([p.weight for p in rows], dtype=np.float64)
    reps = np.array([p.reps for p in rows], dtype=np.int64)
    sets = np.array([p.sets for p in rows], dtype=np.int64)

    return pd.DataFrame(
        {
            "week": np.arange(1, len(rows) + 1, dtype=np.int64),
            "weight": weights,
            "reps": reps,
            "sets": sets,
            "target_rpe": [p.target_rpe for p in rows],
            "volume_load": weights * reps * sets,
        }
    )
