"""Environment-variable-based configuration for callers of the engine."""

from __future__ import annotations

import os

from progression_engine.models.enums import (
    DEFAULT_PREVIEW_SEED_WEIGHT,
    DEFAULT_PREVIEW_WEEKS,
    DEFAULT_WEIGHT_GRANULARITY,
)

WEIGHT_GRANULARITY: float = float(
    os.environ.get("PROGRESSION_WEIGHT_GRANULARITY", str(DEFAULT_WEIGHT_GRANULARITY))
)
PREVIEW_WEEKS: int = int(os.environ.get("PROGRESSION_PREVIEW_WEEKS", str(DEFAULT_PREVIEW_WEEKS)))
PREVIEW_SEED_WEIGHT: float = float(
    os.environ.get("PROGRESSION_PREVIEW_SEED", str(DEFAULT_PREVIEW_SEED_WEIGHT))
)
LOG_LEVEL: str = os.environ.get("PROGRESSION_LOG_LEVEL", "INFO").upper()
