"""Strategy evaluator — advances one exercise's state by one logged session.

``apply_outcome`` is pure and deterministic. It has no notion of sessions
already processed: the caller invokes it exactly once per finalized session
and persists the returned state (see ``progression_engine.service``).
"""

from __future__ import annotations

import dataclasses

from progression_engine.exceptions import StateMismatchError
from progression_engine.math.rounding import round_to_increment
from progression_engine.models.enums import (
    DEFAULT_WEIGHT_GRANULARITY,
    STRATEGY_KIND_KEYS,
    DiagnosticCode,
)
from progression_engine.models.progression_state import ProgressionState
from progression_engine.models.session import Diagnostic, Prescription, SessionOutcome
from progression_engine.models.strategy_config import (
    DoubleProgression,
    LinearProgression,
    NoProgression,
    PercentageProgression,
    RpeProgression,
    StrategyConfig,
    ValidatedConfig,
    WaveProgression,
)

Evaluation = tuple[ProgressionState, Prescription, tuple[Diagnostic, ...]]


def apply_outcome(
    config: ValidatedConfig,
    state: ProgressionState,
    outcome: SessionOutcome,
    *,
    granularity: float = DEFAULT_WEIGHT_GRANULARITY,
) -> Evaluation:
    """Apply one session outcome and prescribe the next session.

    Args:
        config: Validated strategy for the exercise.
        state: The exercise's current state; must be of the config's kind.
        outcome: The session that was just finalized.
        granularity: Plate increment the prescribed weight is rounded to.

    Returns:
        A tuple of (new state, next prescription, diagnostics). Diagnostics
        are non-fatal; the state transition has already happened.

    Raises:
        TypeError: If *config* did not come from validate_config().
        StateMismatchError: If *state* does not belong to *config*.
        ValueError: If *granularity* is not positive.
    """
    _check_preconditions(config, state, granularity)
    strategy = config.config
    diagnostics: list[Diagnostic] = []

    if isinstance(strategy, NoProgression):
        new_state = state
    elif isinstance(strategy, LinearProgression):
        new_state = _apply_linear(strategy, state, outcome)
    elif isinstance(strategy, DoubleProgression):
        new_state = _apply_double(strategy, state, outcome)
    elif isinstance(strategy, RpeProgression):
        new_state = _apply_rpe(strategy, state, outcome, diagnostics)
    elif isinstance(strategy, PercentageProgression):
        new_state = _apply_percentage(strategy, state)
    elif isinstance(strategy, WaveProgression):
        new_state = _apply_wave(strategy, state)
    else:
        raise TypeError(f"Unhandled strategy {type(strategy).__name__}")

    prescription = _render(strategy, new_state, granularity)
    return new_state, prescription, tuple(diagnostics)


def initial_prescription(
    config: ValidatedConfig,
    state: ProgressionState,
    *,
    granularity: float = DEFAULT_WEIGHT_GRANULARITY,
) -> Prescription:
    """Prescription for *state* as it stands, before any session is applied."""
    _check_preconditions(config, state, granularity)
    return _render(config.config, state, granularity)


# ---------------------------------------------------------------------------
# Per-strategy transitions
# ---------------------------------------------------------------------------


def _apply_linear(
    strategy: LinearProgression, state: ProgressionState, outcome: SessionOutcome
) -> ProgressionState:
    if outcome.all_sets_met:
        return dataclasses.replace(
            state,
            current_weight=state.current_weight + strategy.weight_increment,
            consecutive_failures=0,
        )

    failures = state.consecutive_failures + 1
    if failures >= strategy.deload_threshold:
        return dataclasses.replace(
            state,
            current_weight=max(0.0, state.current_weight * (1.0 - strategy.deload_percent)),
            consecutive_failures=0,
        )
    return dataclasses.replace(state, consecutive_failures=failures)


def _apply_double(
    strategy: DoubleProgression, state: ProgressionState, outcome: SessionOutcome
) -> ProgressionState:
    # A failed session holds both reps and weight; deloads are left to the coach.
    if not outcome.all_sets_met:
        return state

    if state.current_reps >= strategy.max_reps:
        return dataclasses.replace(
            state,
            current_weight=state.current_weight + strategy.weight_increment,
            current_reps=strategy.min_reps,
        )
    return dataclasses.replace(
        state, current_reps=min(state.current_reps + 1, strategy.max_reps)
    )


def _apply_rpe(
    strategy: RpeProgression,
    state: ProgressionState,
    outcome: SessionOutcome,
    diagnostics: list[Diagnostic],
) -> ProgressionState:
    rpe = outcome.reported_rpe
    if rpe is None:
        diagnostics.append(
            Diagnostic(
                code=DiagnosticCode.MISSING_REQUIRED_FIELD,
                field="reportedRpe",
                message="RPE-based progression needs a reported RPE; weight held.",
            )
        )
        return state

    low, high = strategy.rpe_range
    delta = 0.0
    if rpe < low:
        delta = strategy.adjustment_per_unit * (low - rpe)
    elif rpe > high:
        delta = -strategy.adjustment_per_unit * (rpe - high)

    return dataclasses.replace(
        state, current_weight=max(0.0, state.current_weight + delta)
    )


def _apply_percentage(
    strategy: PercentageProgression, state: ProgressionState
) -> ProgressionState:
    return dataclasses.replace(
        state,
        current_weight=max(0.0, state.current_weight * (1.0 + strategy.weekly_increase)),
        periods_elapsed=state.periods_elapsed + 1,
    )


def _apply_wave(strategy: WaveProgression, state: ProgressionState) -> ProgressionState:
    cursor = (state.wave_cursor + 1) % len(strategy.waves)
    step = strategy.waves[cursor]
    return dataclasses.replace(
        state, wave_cursor=cursor, current_reps=step.reps, sets=step.sets
    )


# ---------------------------------------------------------------------------
# Rendering and preconditions
# ---------------------------------------------------------------------------


def _render(
    strategy: StrategyConfig, state: ProgressionState, granularity: float
) -> Prescription:
    """Turn a state into the prescription the athlete sees."""
    if isinstance(strategy, WaveProgression):
        step = strategy.waves[state.wave_cursor]
        raw_weight = state.baseline_weight * step.intensity_percent / 100.0
        return Prescription(
            weight=round_to_increment(raw_weight, granularity),
            reps=step.reps,
            sets=step.sets,
        )

    target_rpe = strategy.target_rpe if isinstance(strategy, RpeProgression) else None
    return Prescription(
        weight=round_to_increment(state.current_weight, granularity),
        reps=state.current_reps,
        sets=state.sets,
        target_rpe=target_rpe,
    )


def _check_preconditions(
    config: ValidatedConfig, state: ProgressionState, granularity: float
) -> None:
    if not isinstance(config, ValidatedConfig):
        raise TypeError(
            f"expected a ValidatedConfig, got {type(config).__name__}; "
            "run validate_config() first"
        )
    if granularity <= 0:
        raise ValueError(f"granularity must be positive, got {granularity}")

    if state.kind != config.kind:
        raise StateMismatchError(
            f"{STRATEGY_KIND_KEYS[state.kind]} state applied against a "
            f"{STRATEGY_KIND_KEYS[config.kind]} config"
        )
    if state.current_weight < 0:
        raise StateMismatchError(f"current_weight is negative ({state.current_weight})")

    strategy = config.config
    if isinstance(strategy, DoubleProgression):
        if not strategy.min_reps <= state.current_reps <= strategy.max_reps:
            raise StateMismatchError(
                f"current_reps {state.current_reps} outside rep range "
                f"{strategy.rep_range}"
            )
    elif isinstance(strategy, WaveProgression):
        if state.baseline_weight is None or state.baseline_weight < 0:
            raise StateMismatchError("wave state has no baseline weight")
        if not 0 <= state.wave_cursor < len(strategy.waves):
            raise StateMismatchError(
                f"wave_cursor {state.wave_cursor} out of range for "
                f"{len(strategy.waves)} waves"
            )
