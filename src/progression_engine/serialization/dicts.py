"""JSON-friendly dict conversion for configs, states and prescriptions.

Keys are camelCase to match what the surrounding application stores.
All functions are pure (no I/O).
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from progression_engine.exceptions import MalformedInputError
from progression_engine.models.enums import (
    BASED_ON_KEYS,
    STRATEGY_KIND_KEYS,
    STRATEGY_KINDS_BY_KEY,
)
from progression_engine.models.progression_state import ProgressionState
from progression_engine.models.session import Prescription
from progression_engine.models.strategy_config import (
    DoubleProgression,
    LinearProgression,
    PercentageProgression,
    RpeProgression,
    StrategyConfig,
    ValidatedConfig,
    WaveProgression,
)


def config_to_dict(config: StrategyConfig | ValidatedConfig) -> dict:
    """Convert a strategy config to its stored mapping form."""
    if isinstance(config, ValidatedConfig):
        config = config.config

    result: dict[str, Any] = {"type": STRATEGY_KIND_KEYS[config.kind]}

    if isinstance(config, LinearProgression):
        result["weightIncrement"] = config.weight_increment
        result["deloadThreshold"] = config.deload_threshold
        result["deloadPercent"] = config.deload_percent
    elif isinstance(config, DoubleProgression):
        result["repRange"] = _as_list(config.rep_range)
        result["weightIncrement"] = config.weight_increment
    elif isinstance(config, RpeProgression):
        result["targetRpe"] = config.target_rpe
        result["rpeRange"] = _as_list(config.rpe_range)
        result["adjustmentPerUnit"] = config.adjustment_per_unit
    elif isinstance(config, PercentageProgression):
        result["weeklyIncrease"] = config.weekly_increase
        result["basedOn"] = BASED_ON_KEYS.get(config.based_on, config.based_on)
    elif isinstance(config, WaveProgression):
        result["waves"] = [
            {
                "weekIndex": step.week_index,
                "intensityPercent": step.intensity_percent,
                "sets": step.sets,
                "reps": step.reps,
            }
            for step in config.waves
        ]
    return result


def config_to_json_string(config: StrategyConfig | ValidatedConfig, indent: int = 2) -> str:
    """Convert a strategy config to a JSON string."""
    return json.dumps(config_to_dict(config), indent=indent)


def state_to_dict(state: ProgressionState) -> dict:
    """Convert a ProgressionState to a dict the caller can persist."""
    return {
        "kind": STRATEGY_KIND_KEYS[state.kind],
        "currentWeight": state.current_weight,
        "currentReps": state.current_reps,
        "sets": state.sets,
        "consecutiveFailures": state.consecutive_failures,
        "waveCursor": state.wave_cursor,
        "baselineWeight": state.baseline_weight,
        "periodsElapsed": state.periods_elapsed,
    }


def state_from_dict(data: Mapping[str, Any]) -> ProgressionState:
    """Rebuild a ProgressionState from state_to_dict() output.

    Raises:
        MalformedInputError: If the mapping is missing fields or has the
            wrong types.
    """
    kind_key = data.get("kind")
    if not isinstance(kind_key, str) or kind_key not in STRATEGY_KINDS_BY_KEY:
        raise MalformedInputError("kind", f"unknown strategy kind {kind_key!r}")

    try:
        baseline = data.get("baselineWeight")
        return ProgressionState(
            kind=STRATEGY_KINDS_BY_KEY[kind_key],
            current_weight=float(data["currentWeight"]),
            current_reps=int(data["currentReps"]),
            sets=int(data["sets"]),
            consecutive_failures=int(data.get("consecutiveFailures", 0)),
            wave_cursor=int(data.get("waveCursor", 0)),
            baseline_weight=float(baseline) if baseline is not None else None,
            periods_elapsed=int(data.get("periodsElapsed", 0)),
        )
    except KeyError as exc:
        raise MalformedInputError(str(exc.args[0]), "missing required field") from exc
    except (TypeError, ValueError) as exc:
        raise MalformedInputError("", f"bad state value: {exc}") from exc


def prescription_to_dict(prescription: Prescription) -> dict:
    """Convert a Prescription to the dict surfaced to the athlete's app."""
    result: dict[str, Any] = {
        "weight": prescription.weight,
        "reps": prescription.reps,
        "sets": prescription.sets,
    }
    if prescription.target_rpe is not None:
        result["targetRpe"] = prescription.target_rpe
    return result


def _as_list(value: Any) -> Any:
    if isinstance(value, (tuple, list)):
        return list(value)
    return value
