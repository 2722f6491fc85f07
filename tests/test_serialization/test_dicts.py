"""Tests for dict conversion of configs, states and prescriptions."""

from __future__ import annotations

import json

import pytest

from progression_engine.exceptions import MalformedInputError
from progression_engine.models.enums import BasedOn
from progression_engine.models.session import Prescription
from progression_engine.models.strategy_config import (
    DoubleProgression,
    PercentageProgression,
)
from progression_engine.serialization import (
    config_to_dict,
    config_to_json_string,
    prescription_to_dict,
    state_from_dict,
    state_to_dict,
)


class TestConfigToDict:
    def test_double_progression(self) -> None:
        config = DoubleProgression(rep_range=(8, 12), weight_increment=5.0)
        assert config_to_dict(config) == {
            "type": "double_progression",
            "repRange": [8, 12],
            "weightIncrement": 5.0,
        }

    def test_percentage_based_on_key(self) -> None:
        config = PercentageProgression(weekly_increase=0.02, based_on=BasedOn.ONE_REP_MAX)
        assert config_to_dict(config)["basedOn"] == "1rm"

    def test_validated_wave(self, wave_config) -> None:
        result = config_to_dict(wave_config)
        assert result["type"] == "wave"
        assert result["waves"][3] == {
            "weekIndex": 4,
            "intensityPercent": 60.0,
            "sets": 3,
            "reps": 12,
        }

    def test_json_string(self, linear_config) -> None:
        parsed = json.loads(config_to_json_string(linear_config))
        assert parsed == {
            "type": "linear",
            "weightIncrement": 5.0,
            "deloadThreshold": 3,
            "deloadPercent": 0.1,
        }


class TestStateDict:
    def test_wave_state_survives_storage(self, wave_state) -> None:
        data = json.loads(json.dumps(state_to_dict(wave_state)))
        assert state_from_dict(data) == wave_state

    def test_keys(self, linear_state) -> None:
        data = state_to_dict(linear_state)
        assert data["kind"] == "linear"
        assert data["currentWeight"] == 100.0
        assert data["baselineWeight"] is None

    def test_counters_default_to_zero(self) -> None:
        state = state_from_dict({"kind": "linear", "currentWeight": 60, "currentReps": 5, "sets": 5})
        assert state.consecutive_failures == 0
        assert state.current_weight == 60.0

    def test_unknown_kind(self) -> None:
        with pytest.raises(MalformedInputError):
            state_from_dict({"kind": "zigzag", "currentWeight": 60, "currentReps": 5, "sets": 5})

    def test_missing_field(self) -> None:
        with pytest.raises(MalformedInputError) as excinfo:
            state_from_dict({"kind": "linear", "currentReps": 5, "sets": 5})
        assert excinfo.value.path == "currentWeight"

    def test_bad_value(self) -> None:
        with pytest.raises(MalformedInputError):
            state_from_dict(
                {"kind": "linear", "currentWeight": "heavy", "currentReps": 5, "sets": 5}
            )


class TestPrescriptionToDict:
    def test_without_rpe(self) -> None:
        assert prescription_to_dict(Prescription(weight=100.0, reps=8, sets=4)) == {
            "weight": 100.0,
            "reps": 8,
            "sets": 4,
        }

    def test_with_rpe(self) -> None:
        result = prescription_to_dict(Prescription(weight=100.0, reps=8, sets=4, target_rpe=8.0))
        assert result["targetRpe"] == 8.0
