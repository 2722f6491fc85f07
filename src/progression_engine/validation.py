"""Strategy config validation — the only way to obtain a ValidatedConfig.

Two failure modes:

* Structural problems (no ``type``, a string where a number belongs, a
  range that is not a pair) raise MalformedInputError.
* Semantic problems (negative increment, min reps ≥ max reps, ...) are
  collected, every one of them, and returned as ConfigError records the
  authoring screen can attach to the offending field.

All functions are pure.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Mapping

from progression_engine.exceptions import ConfigValidationError, MalformedInputError
from progression_engine.models.enums import (
    BASED_ON_BY_KEY,
    RPE_SCALE_MAX,
    RPE_SCALE_MIN,
    STRATEGY_KINDS_BY_KEY,
    BasedOn,
    StrategyKind,
)
from progression_engine.models.strategy_config import (
    _VALIDATION_TOKEN,
    STRATEGY_CLASSES,
    DoubleProgression,
    LinearProgression,
    NoProgression,
    PercentageProgression,
    RpeProgression,
    StrategyConfig,
    ValidatedConfig,
    WaveProgression,
    WaveStep,
)
from progression_engine.serialization.dicts import config_to_dict


@dataclass(frozen=True)
class ConfigError:
    """One field-level violation in a strategy config."""

    path: str
    reason: str


def validate_config(raw: Any) -> ValidatedConfig | list[ConfigError]:
    """Validate a stored config mapping or a StrategyConfig dataclass.

    Args:
        raw: Either the JSON-style mapping the application stores (camelCase
            keys, ``type`` discriminant) or one of the StrategyConfig
            dataclasses. An already validated config is returned as-is.

    Returns:
        A ValidatedConfig, or the non-empty list of every ConfigError found.

    Raises:
        MalformedInputError: If *raw* is structurally unusable.
    """
    if isinstance(raw, ValidatedConfig):
        return raw
    if isinstance(raw, tuple(STRATEGY_CLASSES.values())):
        raw = config_to_dict(raw)
    if not isinstance(raw, Mapping):
        raise MalformedInputError(
            "", f"expected a mapping or StrategyConfig, got {type(raw).__name__}"
        )

    config = parse_config(raw)
    errors = _CHECKS[config.kind](config)
    if errors:
        return errors
    return ValidatedConfig(_normalize(config), _token=_VALIDATION_TOKEN)


def validate_config_or_raise(raw: Any) -> ValidatedConfig:
    """Like validate_config() but raises ConfigValidationError on violations."""
    result = validate_config(raw)
    if isinstance(result, ValidatedConfig):
        return result
    raise ConfigValidationError(result)


def parse_config(raw: Mapping[str, Any]) -> StrategyConfig:
    """Build an unvalidated StrategyConfig from a stored mapping.

    Only structure is checked here; value ranges are left to the checks.
    """
    kind_key = raw.get("type")
    if kind_key is None:
        raise MalformedInputError("type", "missing strategy discriminant")
    if not isinstance(kind_key, str) or kind_key not in STRATEGY_KINDS_BY_KEY:
        raise MalformedInputError("type", f"unknown strategy type {kind_key!r}")

    kind = STRATEGY_KINDS_BY_KEY[kind_key]

    if kind == StrategyKind.NONE:
        return NoProgression()

    if kind == StrategyKind.LINEAR:
        return LinearProgression(
            weight_increment=_number(raw, "weightIncrement"),
            deload_threshold=_number(raw, "deloadThreshold"),
            deload_percent=_number(raw, "deloadPercent"),
        )

    if kind == StrategyKind.DOUBLE_PROGRESSION:
        return DoubleProgression(
            rep_range=_pair(raw, "repRange"),
            weight_increment=_number(raw, "weightIncrement"),
        )

    if kind == StrategyKind.RPE_BASED:
        adjustment_key = "adjustmentPerUnit"
        if adjustment_key not in raw and "adjustmentPerPoint" in raw:
            adjustment_key = "adjustmentPerPoint"
        return RpeProgression(
            target_rpe=_number(raw, "targetRpe"),
            rpe_range=_pair(raw, "rpeRange"),
            adjustment_per_unit=_number(raw, adjustment_key),
        )

    if kind == StrategyKind.PERCENTAGE:
        based_on_key = raw.get("basedOn", "working_weight")
        if not isinstance(based_on_key, str):
            raise MalformedInputError("basedOn", "must be a string")
        # unknown keys are kept as strings for _check_percentage to report
        return PercentageProgression(
            weekly_increase=_number(raw, "weeklyIncrease"),
            based_on=BASED_ON_BY_KEY.get(based_on_key, based_on_key),
        )

    waves = raw.get("waves")
    if waves is None:
        raise MalformedInputError("waves", "missing required field")
    if isinstance(waves, (str, bytes, Mapping)) or not isinstance(waves, (list, tuple)):
        raise MalformedInputError("waves", "must be a list")
    return WaveProgression(
        waves=tuple(_wave_step(entry, i) for i, entry in enumerate(waves))
    )


# ---------------------------------------------------------------------------
# Structural helpers
# ---------------------------------------------------------------------------


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _number(raw: Mapping[str, Any], key: str, path: str | None = None) -> Any:
    path = path or key
    if key not in raw:
        raise MalformedInputError(path, "missing required field")
    value = raw[key]
    if not _is_number(value):
        raise MalformedInputError(path, f"must be a number, got {type(value).__name__}")
    return value


def _pair(raw: Mapping[str, Any], key: str) -> tuple[Any, Any]:
    if key not in raw:
        raise MalformedInputError(key, "missing required field")
    value = raw[key]
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise MalformedInputError(key, "must be a [low, high] pair")
    for i, item in enumerate(value):
        if not _is_number(item):
            raise MalformedInputError(f"{key}[{i}]", "must be a number")
    return (value[0], value[1])


def _wave_step(entry: Any, index: int) -> WaveStep:
    path = f"waves[{index}]"
    if not isinstance(entry, Mapping):
        raise MalformedInputError(path, "must be a mapping")
    week_key = "weekIndex" if "weekIndex" in entry else "week"
    if week_key in entry:
        week_index = _number(entry, week_key, f"{path}.{week_key}")
    else:
        week_index = index + 1
    return WaveStep(
        week_index=week_index,
        intensity_percent=_number(entry, "intensityPercent", f"{path}.intensityPercent"),
        sets=_number(entry, "sets", f"{path}.sets"),
        reps=_number(entry, "reps", f"{path}.reps"),
    )


# ---------------------------------------------------------------------------
# Semantic checks: each returns every violation it finds
# ---------------------------------------------------------------------------


def _finite(value: float, path: str, errors: list[ConfigError]) -> bool:
    if not math.isfinite(value):
        errors.append(ConfigError(path, "must be a finite number"))
        return False
    return True


def _whole(value: float, path: str, errors: list[ConfigError]) -> bool:
    if not _finite(value, path, errors):
        return False
    if value != int(value):
        errors.append(ConfigError(path, "must be a whole number"))
        return False
    return True


def _check_increment(value: float, path: str, errors: list[ConfigError]) -> None:
    if _finite(value, path, errors) and value < 0:
        errors.append(ConfigError(path, "must not be negative"))


def _check_none(config: NoProgression) -> list[ConfigError]:
    return []


def _check_linear(config: LinearProgression) -> list[ConfigError]:
    errors: list[ConfigError] = []
    _check_increment(config.weight_increment, "weightIncrement", errors)

    if _whole(config.deload_threshold, "deloadThreshold", errors):
        if config.deload_threshold < 1:
            errors.append(ConfigError("deloadThreshold", "must be at least 1"))

    if _finite(config.deload_percent, "deloadPercent", errors):
        if not 0 < config.deload_percent < 1:
            errors.append(
                ConfigError("deloadPercent", "must be between 0 and 1, exclusive")
            )
    return errors


def _check_double(config: DoubleProgression) -> list[ConfigError]:
    errors: list[ConfigError] = []
    low, high = config.rep_range
    low_ok = _whole(low, "repRange[0]", errors)
    high_ok = _whole(high, "repRange[1]", errors)
    if low_ok and low < 1:
        errors.append(ConfigError("repRange[0]", "must be at least 1"))
    if low_ok and high_ok and low >= high:
        errors.append(
            ConfigError("repRange", f"minimum reps ({low}) must be below maximum ({high})")
        )
    _check_increment(config.weight_increment, "weightIncrement", errors)
    return errors


def _check_rpe(config: RpeProgression) -> list[ConfigError]:
    errors: list[ConfigError] = []
    low, high = config.rpe_range
    values_ok = True
    checked = (("targetRpe", config.target_rpe), ("rpeRange[0]", low), ("rpeRange[1]", high))
    scale = f"{RPE_SCALE_MIN:g}-{RPE_SCALE_MAX:g}"
    for path, value in checked:
        if not _finite(value, path, errors):
            values_ok = False
        elif not RPE_SCALE_MIN <= value <= RPE_SCALE_MAX:
            errors.append(ConfigError(path, f"must be on the {scale} RPE scale"))
    if values_ok:
        if low > high:
            errors.append(ConfigError("rpeRange", f"low ({low}) must not exceed high ({high})"))
        elif not low <= config.target_rpe <= high:
            errors.append(
                ConfigError("targetRpe", f"must lie within rpeRange [{low}, {high}]")
            )
    _check_increment(config.adjustment_per_unit, "adjustmentPerUnit", errors)
    return errors


def _check_percentage(config: PercentageProgression) -> list[ConfigError]:
    errors: list[ConfigError] = []
    if _finite(config.weekly_increase, "weeklyIncrease", errors):
        if config.weekly_increase <= -1:
            errors.append(ConfigError("weeklyIncrease", "must be greater than -1"))
    if not isinstance(config.based_on, BasedOn):
        errors.append(ConfigError("basedOn", f"unknown reference {config.based_on!r}"))
    return errors


def _check_wave(config: WaveProgression) -> list[ConfigError]:
    errors: list[ConfigError] = []
    if not config.waves:
        errors.append(ConfigError("waves", "must contain at least one wave"))
        return errors

    for i, step in enumerate(config.waves):
        path = f"waves[{i}]"
        if _whole(step.week_index, f"{path}.weekIndex", errors) and step.week_index < 1:
            errors.append(ConfigError(f"{path}.weekIndex", "must be at least 1"))
        if _finite(step.intensity_percent, f"{path}.intensityPercent", errors):
            if step.intensity_percent <= 0:
                errors.append(ConfigError(f"{path}.intensityPercent", "must be positive"))
        if _whole(step.sets, f"{path}.sets", errors) and step.sets < 1:
            errors.append(ConfigError(f"{path}.sets", "must be at least 1"))
        if _whole(step.reps, f"{path}.reps", errors) and step.reps < 1:
            errors.append(ConfigError(f"{path}.reps", "must be at least 1"))
    return errors


_CHECKS = {
    StrategyKind.NONE: _check_none,
    StrategyKind.LINEAR: _check_linear,
    StrategyKind.DOUBLE_PROGRESSION: _check_double,
    StrategyKind.RPE_BASED: _check_rpe,
    StrategyKind.PERCENTAGE: _check_percentage,
    StrategyKind.WAVE: _check_wave,
}


def _normalize(config: StrategyConfig) -> StrategyConfig:
    """Coerce whole-number fields to int and the rest to float."""
    if isinstance(config, LinearProgression):
        return LinearProgression(
            weight_increment=float(config.weight_increment),
            deload_threshold=int(config.deload_threshold),
            deload_percent=float(config.deload_percent),
        )
    if isinstance(config, DoubleProgression):
        return DoubleProgression(
            rep_range=(int(config.rep_range[0]), int(config.rep_range[1])),
            weight_increment=float(config.weight_increment),
        )
    if isinstance(config, RpeProgression):
        return RpeProgression(
            target_rpe=float(config.target_rpe),
            rpe_range=(float(config.rpe_range[0]), float(config.rpe_range[1])),
            adjustment_per_unit=float(config.adjustment_per_unit),
        )
    if isinstance(config, PercentageProgression):
        return dataclasses.replace(config, weekly_increase=float(config.weekly_increase))
    if isinstance(config, WaveProgression):
        return WaveProgression(
            waves=tuple(
                WaveStep(
                    week_index=int(step.week_index),
                    intensity_percent=float(step.intensity_percent),
                    sets=int(step.sets),
                    reps=int(step.reps),
                )
                for step in config.waves
            )
        )
    return config
