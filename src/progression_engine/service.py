"""Progression service — serialises state updates per (athlete, exercise).

The evaluator trusts its caller to apply each session exactly once against
the latest state. This facade is that caller for in-process use: one lock
per key, plus an optimistic version check on every write.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Protocol

from progression_engine.evaluator import apply_outcome, initial_prescription
from progression_engine.exceptions import StaleStateError
from progression_engine.models.enums import DEFAULT_REPS, DEFAULT_SETS, STRATEGY_KIND_KEYS
from progression_engine.models.progression_state import ProgressionState, seed_state
from progression_engine.models.session import Diagnostic, Prescription, SessionOutcome
from progression_engine.models.strategy_config import LinearProgression, ValidatedConfig
from progression_engine.settings import WEIGHT_GRANULARITY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateKey:
    """Identifies one exercise of one athlete."""

    athlete_id: str
    exercise_id: str


@dataclass(frozen=True)
class VersionedState:
    """A stored state and the version it was written at."""

    state: ProgressionState
    version: int


class StateRepository(Protocol):
    """Storage port for progression states."""

    def get(self, key: StateKey) -> VersionedState | None: ...

    def save(self, key: StateKey, state: ProgressionState, expected_version: int) -> int: ...

    def delete(self, key: StateKey) -> None: ...


class InMemoryStateRepository:
    """Thread-safe dict-backed StateRepository.

    ``save`` succeeds only when *expected_version* matches the stored
    version (0 for a key that does not exist yet) and returns the new one.
    """

    def __init__(self) -> None:
        self._states: dict[StateKey, VersionedState] = {}
        self._lock = threading.Lock()

    def get(self, key: StateKey) -> VersionedState | None:
        with self._lock:
            return self._states.get(key)

    def save(self, key: StateKey, state: ProgressionState, expected_version: int) -> int:
        with self._lock:
            current = self._states.get(key)
            actual = current.version if current is not None else 0
            if actual != expected_version:
                raise StaleStateError(
                    f"State for {key} is at version {actual}, expected {expected_version}",
                    expected_version=expected_version,
                    actual_version=actual,
                )
            self._states[key] = VersionedState(state=state, version=actual + 1)
            return actual + 1

    def delete(self, key: StateKey) -> None:
        with self._lock:
            self._states.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)


class ProgressionService:
    """Assigns exercises to strategies and records finalized sessions.

    Usage:
        service = ProgressionService(InMemoryStateRepository())
        service.assign(key, config, working_weight=100.0)
        prescription, diagnostics = service.record_session(key, config, outcome)
    """

    def __init__(
        self,
        repository: StateRepository,
        granularity: float = WEIGHT_GRANULARITY,
    ) -> None:
        self.repository = repository
        self.granularity = granularity
        self._key_locks: dict[StateKey, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def assign(
        self,
        key: StateKey,
        config: ValidatedConfig,
        working_weight: float,
        *,
        one_rep_max: float | None = None,
        reps: int = DEFAULT_REPS,
        sets: int = DEFAULT_SETS,
    ) -> Prescription:
        """Create the state for a newly assigned exercise.

        Replaces any existing state for *key*. Returns the first prescription.
        """
        state = seed_state(config, working_weight, one_rep_max=one_rep_max, reps=reps, sets=sets)
        with self._lock_for(key):
            existing = self.repository.get(key)
            expected = existing.version if existing is not None else 0
            self.repository.save(key, state, expected_version=expected)
        logger.info(
            "Assigned %s/%s to %s progression at %.1f",
            key.athlete_id,
            key.exercise_id,
            STRATEGY_KIND_KEYS[config.kind],
            state.current_weight,
        )
        return initial_prescription(config, state, granularity=self.granularity)

    def record_session(
        self,
        key: StateKey,
        config: ValidatedConfig,
        outcome: SessionOutcome,
    ) -> tuple[Prescription, tuple[Diagnostic, ...]]:
        """Apply one finalized session and persist the advanced state.

        Call exactly once per session. Returns the next prescription and any
        evaluation diagnostics.

        Raises:
            KeyError: If *key* has no assigned state.
            StaleStateError: If the state changed underneath this call.
        """
        with self._lock_for(key):
            stored = self.repository.get(key)
            if stored is None:
                raise KeyError(f"No progression state assigned for {key}")

            new_state, prescription, diagnostics = apply_outcome(
                config, stored.state, outcome, granularity=self.granularity
            )
            self.repository.save(key, new_state, expected_version=stored.version)

        if _deloaded(config, outcome, new_state):
            logger.info(
                "Deload for %s/%s: %.1f -> %.1f",
                key.athlete_id,
                key.exercise_id,
                stored.state.current_weight,
                new_state.current_weight,
            )
        for diagnostic in diagnostics:
            logger.warning(
                "Diagnostic for %s/%s on %s: %s",
                key.athlete_id,
                key.exercise_id,
                diagnostic.field,
                diagnostic.message,
            )
        return prescription, diagnostics

    def current_prescription(self, key: StateKey, config: ValidatedConfig) -> Prescription | None:
        """Prescription for the stored state, or None if *key* is unassigned."""
        stored = self.repository.get(key)
        if stored is None:
            return None
        return initial_prescription(config, stored.state, granularity=self.granularity)

    def remove(self, key: StateKey) -> None:
        """Drop the state when the exercise assignment is removed.

        The key's lock stays registered so a caller already waiting on it
        still excludes any later caller for the same key.
        """
        with self._lock_for(key):
            self.repository.delete(key)
        logger.info("Removed progression state for %s/%s", key.athlete_id, key.exercise_id)

    def _lock_for(self, key: StateKey) -> threading.Lock:
        with self._registry_lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._key_locks[key] = lock
            return lock


def _deloaded(
    config: ValidatedConfig, outcome: SessionOutcome, after: ProgressionState
) -> bool:
    return (
        isinstance(config.config, LinearProgression)
        and not outcome.all_sets_met
        and after.consecutive_failures == 0
    )
