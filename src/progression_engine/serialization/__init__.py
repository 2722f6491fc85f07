"""Serialization module — configs, states and prescriptions as plain dicts."""

from progression_engine.serialization.dicts import (
    config_to_dict,
    config_to_json_string,
    prescription_to_dict,
    state_from_dict,
    state_to_dict,
)

__all__ = [
    "config_to_dict",
    "config_to_json_string",
    "prescription_to_dict",
    "state_from_dict",
    "state_to_dict",
]
