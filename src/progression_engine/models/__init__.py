"""Data models for the progression engine."""

from progression_engine.models.enums import BasedOn, DiagnosticCode, StrategyKind
from progression_engine.models.progression_state import ProgressionState, seed_state
from progression_engine.models.session import (
    Diagnostic,
    LoggedSet,
    Prescription,
    SessionOutcome,
)
from progression_engine.models.strategy_config import (
    DEFAULT_CONFIGS,
    STRATEGY_CATALOG,
    DoubleProgression,
    LinearProgression,
    NoProgression,
    PercentageProgression,
    RpeProgression,
    StrategyConfig,
    StrategyInfo,
    ValidatedConfig,
    WaveProgression,
    WaveStep,
)

__all__ = [
    "BasedOn",
    "DEFAULT_CONFIGS",
    "Diagnostic",
    "DiagnosticCode",
    "DoubleProgression",
    "LinearProgression",
    "LoggedSet",
    "NoProgression",
    "PercentageProgression",
    "Prescription",
    "ProgressionState",
    "RpeProgression",
    "STRATEGY_CATALOG",
    "SessionOutcome",
    "StrategyConfig",
    "StrategyInfo",
    "StrategyKind",
    "ValidatedConfig",
    "WaveProgression",
    "WaveStep",
    "seed_state",
]
