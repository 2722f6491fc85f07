"""Enumerations and constants for the progression engine.

Wire keys are the strings the surrounding application stores in its
program JSON; the enums themselves are what the engine matches on.
"""

from enum import IntEnum, auto


class StrategyKind(IntEnum):
    """The closed set of progression strategies a coach can assign."""

    NONE = auto()
    LINEAR = auto()
    DOUBLE_PROGRESSION = auto()
    RPE_BASED = auto()
    PERCENTAGE = auto()
    WAVE = auto()


class BasedOn(IntEnum):
    """Reference weight a percentage progression is seeded from."""

    WORKING_WEIGHT = auto()
    ONE_REP_MAX = auto()


class DiagnosticCode(IntEnum):
    """Non-fatal conditions reported alongside an evaluation result."""

    MISSING_REQUIRED_FIELD = auto()


# StrategyKind ↔ "type" discriminant in stored configs.
STRATEGY_KIND_KEYS = {
    StrategyKind.NONE: "none",
    StrategyKind.LINEAR: "linear",
    StrategyKind.DOUBLE_PROGRESSION: "double_progression",
    StrategyKind.RPE_BASED: "rpe_based",
    StrategyKind.PERCENTAGE: "percentage",
    StrategyKind.WAVE: "wave",
}
STRATEGY_KINDS_BY_KEY = {key: kind for kind, key in STRATEGY_KIND_KEYS.items()}

BASED_ON_KEYS = {
    BasedOn.WORKING_WEIGHT: "working_weight",
    BasedOn.ONE_REP_MAX: "1rm",
}
# Older payloads spell these in camelCase.
BASED_ON_BY_KEY = {
    "working_weight": BasedOn.WORKING_WEIGHT,
    "workingWeight": BasedOn.WORKING_WEIGHT,
    "1rm": BasedOn.ONE_REP_MAX,
    "oneRepMax": BasedOn.ONE_REP_MAX,
}

# ---------------------------------------------------------------------------
# Prescription defaults
# ---------------------------------------------------------------------------

# Smallest plate jump most gyms can load (2 × 1.25)
DEFAULT_WEIGHT_GRANULARITY = 2.5

# Reps/sets used when a strategy does not evolve them and the assignment
# doesn't say otherwise
DEFAULT_REPS = 8
DEFAULT_SETS = 4

# Preview shown on the authoring screen
DEFAULT_PREVIEW_WEEKS = 4
DEFAULT_PREVIEW_SEED_WEIGHT = 100.0

# Working weight × this when no 1RM is on record (≈ 8RM → 1RM, Epley)
ESTIMATED_ONE_REP_MAX_FACTOR = 1.3

# Borg CR-10 derived RPE scale
RPE_SCALE_MIN = 1.0
RPE_SCALE_MAX = 10.0
