"""Tests for strategy config validation."""

from __future__ import annotations

import math

import pytest

from progression_engine.exceptions import ConfigValidationError, MalformedInputError
from progression_engine.models.enums import BasedOn
from progression_engine.models.strategy_config import (
    DoubleProgression,
    LinearProgression,
    PercentageProgression,
    RpeProgression,
    ValidatedConfig,
    WaveProgression,
)
from progression_engine.validation import (
    ConfigError,
    validate_config,
    validate_config_or_raise,
)


def _linear(**overrides) -> dict:
    raw = {"type": "linear", "weightIncrement": 5, "deloadThreshold": 3, "deloadPercent": 0.1}
    raw.update(overrides)
    return raw


def _double(**overrides) -> dict:
    raw = {"type": "double_progression", "repRange": [8, 12], "weightIncrement": 5}
    raw.update(overrides)
    return raw


def _rpe(**overrides) -> dict:
    raw = {"type": "rpe_based", "targetRpe": 8, "rpeRange": [7, 9], "adjustmentPerUnit": 5}
    raw.update(overrides)
    return raw


def _wave(*waves: dict) -> dict:
    return {"type": "wave", "waves": list(waves)}


def _paths(result) -> set[str]:
    assert isinstance(result, list), f"expected errors, got {result!r}"
    assert all(isinstance(e, ConfigError) for e in result)
    return {e.path for e in result}


# ---------------------------------------------------------------------------
# Accepted configs
# ---------------------------------------------------------------------------


class TestAccepts:
    def test_none(self) -> None:
        assert isinstance(validate_config({"type": "none"}), ValidatedConfig)

    def test_linear_normalizes_types(self) -> None:
        result = validate_config(_linear(deloadThreshold=3.0))
        assert isinstance(result, ValidatedConfig)
        assert result.config == LinearProgression(5.0, 3, 0.1)
        assert isinstance(result.config.deload_threshold, int)

    def test_double(self) -> None:
        result = validate_config(_double())
        assert isinstance(result, ValidatedConfig)
        assert result.config == DoubleProgression(rep_range=(8, 12), weight_increment=5.0)

    def test_rpe_accepts_per_point_alias(self) -> None:
        raw = _rpe()
        del raw["adjustmentPerUnit"]
        raw["adjustmentPerPoint"] = 2.5
        result = validate_config(raw)
        assert isinstance(result, ValidatedConfig)
        assert isinstance(result.config, RpeProgression)
        assert result.config.adjustment_per_unit == 2.5

    def test_rpe_target_on_range_edge(self) -> None:
        assert isinstance(validate_config(_rpe(targetRpe=9)), ValidatedConfig)

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("working_weight", BasedOn.WORKING_WEIGHT),
            ("workingWeight", BasedOn.WORKING_WEIGHT),
            ("1rm", BasedOn.ONE_REP_MAX),
            ("oneRepMax", BasedOn.ONE_REP_MAX),
        ],
    )
    def test_percentage_based_on_spellings(self, key: str, expected: BasedOn) -> None:
        result = validate_config({"type": "percentage", "weeklyIncrease": 0.025, "basedOn": key})
        assert isinstance(result, ValidatedConfig)
        assert result.config.based_on == expected

    def test_percentage_based_on_defaults_to_working_weight(self) -> None:
        result = validate_config({"type": "percentage", "weeklyIncrease": 0.05})
        assert isinstance(result, ValidatedConfig)
        assert result.config == PercentageProgression(0.05, BasedOn.WORKING_WEIGHT)

    def test_wave_week_index_defaults_to_position(self) -> None:
        result = validate_config(
            _wave(
                {"intensityPercent": 70, "sets": 4, "reps": 10},
                {"week": 7, "intensityPercent": 80, "sets": 3, "reps": 5},
            )
        )
        assert isinstance(result, ValidatedConfig)
        assert isinstance(result.config, WaveProgression)
        assert [w.week_index for w in result.config.waves] == [1, 7]

    def test_wave_intensity_above_100_allowed(self) -> None:
        result = validate_config(_wave({"intensityPercent": 105, "sets": 1, "reps": 1}))
        assert isinstance(result, ValidatedConfig)

    def test_dataclass_input(self) -> None:
        config = LinearProgression(weight_increment=2.5, deload_threshold=2, deload_percent=0.2)
        result = validate_config(config)
        assert isinstance(result, ValidatedConfig)
        assert result.config == config

    def test_validated_config_passes_through(self, linear_config) -> None:
        assert validate_config(linear_config) is linear_config

    def test_unknown_keys_ignored(self) -> None:
        assert isinstance(validate_config(_linear(label="Squat LP")), ValidatedConfig)


# ---------------------------------------------------------------------------
# Semantic violations, returned as ConfigError lists
# ---------------------------------------------------------------------------


class TestRejects:
    def test_inverted_rep_range(self) -> None:
        assert _paths(validate_config(_double(repRange=[12, 8]))) == {"repRange"}

    def test_equal_rep_range(self) -> None:
        assert _paths(validate_config(_double(repRange=[10, 10]))) == {"repRange"}

    def test_rep_range_below_one(self) -> None:
        assert "repRange[0]" in _paths(validate_config(_double(repRange=[0, 5])))

    def test_fractional_reps(self) -> None:
        assert "repRange[1]" in _paths(validate_config(_double(repRange=[8, 12.5])))

    @pytest.mark.parametrize("percent", [0, 1, -0.1, 1.5])
    def test_deload_percent_out_of_bounds(self, percent: float) -> None:
        assert _paths(validate_config(_linear(deloadPercent=percent))) == {"deloadPercent"}

    @pytest.mark.parametrize("threshold", [0, -1, 2.5])
    def test_bad_deload_threshold(self, threshold: float) -> None:
        assert _paths(validate_config(_linear(deloadThreshold=threshold))) == {"deloadThreshold"}

    def test_negative_increment(self) -> None:
        assert _paths(validate_config(_linear(weightIncrement=-5))) == {"weightIncrement"}
        assert _paths(validate_config(_double(weightIncrement=-2.5))) == {"weightIncrement"}

    def test_all_violations_reported_together(self) -> None:
        result = validate_config(_linear(weightIncrement=-5, deloadThreshold=0, deloadPercent=1))
        assert _paths(result) == {"weightIncrement", "deloadThreshold", "deloadPercent"}

    @pytest.mark.parametrize("target", [6.5, 9.5])
    def test_target_rpe_outside_range(self, target: float) -> None:
        assert _paths(validate_config(_rpe(targetRpe=target))) == {"targetRpe"}

    def test_inverted_rpe_range(self) -> None:
        assert "rpeRange" in _paths(validate_config(_rpe(rpeRange=[9, 7])))

    def test_rpe_off_the_scale(self) -> None:
        assert "rpeRange[1]" in _paths(validate_config(_rpe(rpeRange=[7, 11])))

    def test_negative_rpe_adjustment(self) -> None:
        assert _paths(validate_config(_rpe(adjustmentPerUnit=-1))) == {"adjustmentPerUnit"}

    @pytest.mark.parametrize("increase", [-1, -1.5])
    def test_weekly_increase_at_or_below_minus_one(self, increase: float) -> None:
        result = validate_config({"type": "percentage", "weeklyIncrease": increase})
        assert _paths(result) == {"weeklyIncrease"}

    def test_unknown_based_on(self) -> None:
        result = validate_config({"type": "percentage", "weeklyIncrease": 0.02, "basedOn": "bogus"})
        assert _paths(result) == {"basedOn"}

    def test_unknown_based_on_reported_with_other_errors(self) -> None:
        result = validate_config({"type": "percentage", "weeklyIncrease": -2, "basedOn": "bogus"})
        assert _paths(result) == {"weeklyIncrease", "basedOn"}

    def test_empty_waves(self) -> None:
        assert _paths(validate_config(_wave())) == {"waves"}

    def test_bad_wave_entries_reported_by_index(self) -> None:
        result = validate_config(
            _wave(
                {"intensityPercent": 70, "sets": 4, "reps": 10},
                {"intensityPercent": 0, "sets": 0, "reps": 0},
            )
        )
        assert _paths(result) == {
            "waves[1].intensityPercent",
            "waves[1].sets",
            "waves[1].reps",
        }

    def test_wave_week_index_below_one(self) -> None:
        result = validate_config(_wave({"weekIndex": 0, "intensityPercent": 70, "sets": 4, "reps": 8}))
        assert _paths(result) == {"waves[0].weekIndex"}

    def test_non_finite_number(self) -> None:
        assert _paths(validate_config(_linear(weightIncrement=math.inf))) == {"weightIncrement"}
        assert _paths(validate_config(_linear(deloadPercent=math.nan))) == {"deloadPercent"}

    def test_invalid_dataclass_input(self) -> None:
        result = validate_config(DoubleProgression(rep_range=(12, 8), weight_increment=5))
        assert _paths(result) == {"repRange"}

    def test_or_raise_carries_errors(self) -> None:
        with pytest.raises(ConfigValidationError) as excinfo:
            validate_config_or_raise(_double(repRange=[12, 8]))
        assert [e.path for e in excinfo.value.errors] == ["repRange"]
        assert "repRange" in str(excinfo.value)


# ---------------------------------------------------------------------------
# Structural problems, raised
# ---------------------------------------------------------------------------


class TestMalformed:
    def test_missing_discriminant(self) -> None:
        with pytest.raises(MalformedInputError) as excinfo:
            validate_config({"weightIncrement": 5})
        assert excinfo.value.path == "type"

    def test_unknown_discriminant(self) -> None:
        with pytest.raises(MalformedInputError):
            validate_config({"type": "zigzag"})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(MalformedInputError):
            validate_config(["linear", 5])

    def test_missing_parameter(self) -> None:
        raw = _linear()
        del raw["deloadPercent"]
        with pytest.raises(MalformedInputError) as excinfo:
            validate_config(raw)
        assert excinfo.value.path == "deloadPercent"

    @pytest.mark.parametrize("value", ["5", None, True, [5]])
    def test_wrong_value_type(self, value) -> None:
        with pytest.raises(MalformedInputError):
            validate_config(_linear(weightIncrement=value))

    def test_range_not_a_pair(self) -> None:
        with pytest.raises(MalformedInputError):
            validate_config(_double(repRange=[8, 10, 12]))

    def test_waves_not_a_list(self) -> None:
        with pytest.raises(MalformedInputError):
            validate_config({"type": "wave", "waves": {"intensityPercent": 70}})

    def test_wave_entry_not_a_mapping(self) -> None:
        with pytest.raises(MalformedInputError) as excinfo:
            validate_config(_wave({"intensityPercent": 70, "sets": 4, "reps": 8}, 42))
        assert excinfo.value.path == "waves[1]"

    def test_based_on_not_a_string(self) -> None:
        with pytest.raises(MalformedInputError):
            validate_config({"type": "percentage", "weeklyIncrease": 0.02, "basedOn": 1})
