"""Session inputs and prescription outputs of the evaluator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from progression_engine.models.enums import DiagnosticCode


@dataclass(frozen=True)
class LoggedSet:
    """One set as recorded by the workout logger."""

    weight: float
    reps: int
    rpe: float | None = None
    is_warmup: bool = False


@dataclass(frozen=True)
class SessionOutcome:
    """What happened the last time the athlete performed the exercise.

    Supplied by the logging subsystem; the engine only reads it.
    """

    prescribed_weight: float
    prescribed_reps: int
    prescribed_sets: int
    all_sets_met: bool
    achieved_reps: tuple[int, ...] = field(default_factory=tuple)
    reported_rpe: float | None = None

    @classmethod
    def from_logged_sets(
        cls,
        sets: Iterable[LoggedSet],
        prescribed_weight: float,
        prescribed_reps: int,
        prescribed_sets: int,
    ) -> SessionOutcome:
        """Summarise logged sets into an outcome.

        Warm-up sets are ignored. The session counts as a success when at
        least ``prescribed_sets`` working sets reached ``prescribed_reps``.
        The reported RPE is the one logged on the last working set.
        """
        working = [s for s in sets if not s.is_warmup]
        achieved = tuple(s.reps for s in working)
        met = sum(1 for reps in achieved if reps >= prescribed_reps)

        rpe = None
        for s in reversed(working):
            if s.rpe is not None:
                rpe = s.rpe
                break

        return cls(
            prescribed_weight=prescribed_weight,
            prescribed_reps=prescribed_reps,
            prescribed_sets=prescribed_sets,
            all_sets_met=met >= prescribed_sets and len(working) > 0,
            achieved_reps=achieved,
            reported_rpe=rpe,
        )


@dataclass(frozen=True)
class Prescription:
    """Weight, reps and sets for the athlete's next session."""

    weight: float
    reps: int
    sets: int
    target_rpe: float | None = None

    @property
    def volume_load(self) -> float:
        """Tonnage for the session: weight × reps × sets."""
        return self.weight * self.reps * self.sets


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal note from an evaluation, surfaced for logging/telemetry."""

    code: DiagnosticCode
    field: str
    message: str
