"""Training-load progression engine.

Three entry points for the surrounding application:

    validate_config(raw)                     -> ValidatedConfig | list[ConfigError]
    apply_outcome(config, state, outcome)    -> (state, prescription, diagnostics)
    project_preview(config, seed, weeks)     -> list[Prescription]
"""

from progression_engine.evaluator import apply_outcome, initial_prescription
from progression_engine.exceptions import (
    ConfigValidationError,
    MalformedInputError,
    ProgressionEngineError,
    StaleStateError,
    StateMismatchError,
)
from progression_engine.models import (
    Diagnostic,
    Prescription,
    ProgressionState,
    SessionOutcome,
    StrategyKind,
    ValidatedConfig,
    seed_state,
)
from progression_engine.projector import Projection, project, project_preview
from progression_engine.validation import (
    ConfigError,
    validate_config,
    validate_config_or_raise,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "Diagnostic",
    "MalformedInputError",
    "Prescription",
    "ProgressionEngineError",
    "ProgressionState",
    "Projection",
    "SessionOutcome",
    "StaleStateError",
    "StateMismatchError",
    "StrategyKind",
    "ValidatedConfig",
    "apply_outcome",
    "initial_prescription",
    "project",
    "project_preview",
    "seed_state",
    "validate_config",
    "validate_config_or_raise",
]
