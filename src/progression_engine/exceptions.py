"""Custom exception hierarchy for the progression engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from progression_engine.validation import ConfigError


class ProgressionEngineError(Exception):
    """Base exception for all progression_engine errors."""


class MalformedInputError(ProgressionEngineError):
    """Input is structurally unusable (missing discriminant, wrong JSON types)."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}" if path else reason)
        self.path = path
        self.reason = reason


class ConfigValidationError(ProgressionEngineError):
    """A strategy config failed validation; carries every violation found."""

    def __init__(self, errors: Sequence[ConfigError]) -> None:
        detail = "; ".join(f"{e.path}: {e.reason}" for e in errors)
        super().__init__(f"Invalid progression config ({detail})")
        self.errors = tuple(errors)


class StateMismatchError(ProgressionEngineError):
    """A ProgressionState does not fit the config it was applied against."""


class StaleStateError(ProgressionEngineError):
    """A state write lost an optimistic version check."""

    def __init__(self, message: str, expected_version: int, actual_version: int) -> None:
        super().__init__(message)
        self.expected_version = expected_version
        self.actual_version = actual_version
