"""Strategy configurations — how one exercise should progress.

A StrategyConfig is one of six frozen dataclasses. The set is closed: the
evaluator matches on every member, so a new strategy means touching the
validator, evaluator, and serializer together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

from progression_engine.models.enums import BasedOn, StrategyKind


@dataclass(frozen=True)
class NoProgression:
    """Weights and reps stay where the coach put them."""

    kind: ClassVar[StrategyKind] = StrategyKind.NONE


@dataclass(frozen=True)
class LinearProgression:
    """Add weight after every successful session; deload after a failure streak."""

    kind: ClassVar[StrategyKind] = StrategyKind.LINEAR

    weight_increment: float
    deload_threshold: int  # consecutive failures before a deload
    deload_percent: float  # fraction removed on deload, 0 < p < 1


@dataclass(frozen=True)
class DoubleProgression:
    """Climb reps to the top of the range, then add weight and reset reps."""

    kind: ClassVar[StrategyKind] = StrategyKind.DOUBLE_PROGRESSION

    rep_range: tuple[int, int]
    weight_increment: float

    @property
    def min_reps(self) -> int:
        return self.rep_range[0]

    @property
    def max_reps(self) -> int:
        return self.rep_range[1]


@dataclass(frozen=True)
class RpeProgression:
    """Auto-regulate load from the athlete's reported exertion."""

    kind: ClassVar[StrategyKind] = StrategyKind.RPE_BASED

    target_rpe: float
    rpe_range: tuple[float, float]
    adjustment_per_unit: float  # weight per RPE point outside the range


@dataclass(frozen=True)
class PercentageProgression:
    """Compound the working weight by a fixed fraction every period."""

    kind: ClassVar[StrategyKind] = StrategyKind.PERCENTAGE

    weekly_increase: float  # e.g. 0.025 for +2.5% a week
    based_on: BasedOn = BasedOn.WORKING_WEIGHT


@dataclass(frozen=True)
class WaveStep:
    """One entry of a wave schedule."""

    week_index: int
    intensity_percent: float  # of the baseline weight
    sets: int
    reps: int


@dataclass(frozen=True)
class WaveProgression:
    """Cycle through intensity/volume waves against a fixed baseline."""

    kind: ClassVar[StrategyKind] = StrategyKind.WAVE

    waves: tuple[WaveStep, ...] = field(default_factory=tuple)


StrategyConfig = Union[
    NoProgression,
    LinearProgression,
    DoubleProgression,
    RpeProgression,
    PercentageProgression,
    WaveProgression,
]

STRATEGY_CLASSES: dict[StrategyKind, type] = {
    StrategyKind.NONE: NoProgression,
    StrategyKind.LINEAR: LinearProgression,
    StrategyKind.DOUBLE_PROGRESSION: DoubleProgression,
    StrategyKind.RPE_BASED: RpeProgression,
    StrategyKind.PERCENTAGE: PercentageProgression,
    StrategyKind.WAVE: WaveProgression,
}


class ValidatedConfig:
    """A StrategyConfig that has passed validation.

    Only ``validation.validate_config`` should build these. The evaluator
    and projector accept nothing else.
    """

    __slots__ = ("_config",)

    def __init__(self, config: StrategyConfig, *, _token: object = None) -> None:
        if _token is not _VALIDATION_TOKEN:
            raise TypeError(
                "ValidatedConfig can only be created by validate_config()"
            )
        self._config = config

    @property
    def config(self) -> StrategyConfig:
        return self._config

    @property
    def kind(self) -> StrategyKind:
        return self._config.kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidatedConfig):
            return NotImplemented
        return self._config == other._config

    def __hash__(self) -> int:
        return hash(self._config)

    def __repr__(self) -> str:
        return f"ValidatedConfig({self._config!r})"


_VALIDATION_TOKEN = object()


@dataclass(frozen=True)
class StrategyInfo:
    """Label and one-line description shown in the strategy picker."""

    kind: StrategyKind
    label: str
    description: str


STRATEGY_CATALOG: tuple[StrategyInfo, ...] = (
    StrategyInfo(StrategyKind.NONE, "No Progression", "Keep weights and reps static"),
    StrategyInfo(
        StrategyKind.LINEAR,
        "Linear Progression",
        "Add weight after each successful session",
    ),
    StrategyInfo(
        StrategyKind.DOUBLE_PROGRESSION,
        "Double Progression",
        "Increase reps until top of range, then add weight",
    ),
    StrategyInfo(
        StrategyKind.RPE_BASED,
        "RPE-Based",
        "Adjust weight based on perceived exertion",
    ),
    StrategyInfo(
        StrategyKind.PERCENTAGE,
        "Percentage Increase",
        "Increase weight by fixed % each week",
    ),
    StrategyInfo(
        StrategyKind.WAVE,
        "Wave Loading",
        "Cycle through intensity/volume waves",
    ),
)

# Starter configuration offered when a coach picks a strategy
DEFAULT_CONFIGS: dict[StrategyKind, StrategyConfig] = {
    StrategyKind.NONE: NoProgression(),
    StrategyKind.LINEAR: LinearProgression(
        weight_increment=5.0, deload_threshold=3, deload_percent=0.1
    ),
    StrategyKind.DOUBLE_PROGRESSION: DoubleProgression(
        rep_range=(8, 12), weight_increment=5.0
    ),
    StrategyKind.RPE_BASED: RpeProgression(
        target_rpe=8.0, rpe_range=(7.0, 9.0), adjustment_per_unit=5.0
    ),
    StrategyKind.PERCENTAGE: PercentageProgression(
        weekly_increase=0.025, based_on=BasedOn.WORKING_WEIGHT
    ),
    StrategyKind.WAVE: WaveProgression(
        waves=(
            WaveStep(week_index=1, intensity_percent=70.0, sets=4, reps=10),
            WaveStep(week_index=2, intensity_percent=75.0, sets=4, reps=8),
            WaveStep(week_index=3, intensity_percent=80.0, sets=4, reps=6),
            WaveStep(week_index=4, intensity_percent=60.0, sets=3, reps=12),
        )
    ),
}
