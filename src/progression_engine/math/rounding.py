"""Weight rounding to loadable plate increments."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext


def round_to_increment(weight: float, granularity: float) -> float:
    """Round *weight* to the nearest multiple of *granularity*, halves up.

    Built-in ``round`` rounds halves to even; this rounds them up. Infinite
    weights are returned unchanged.

    Args:
        weight: Raw weight, e.g. 103.75.
        granularity: Plate increment, e.g. 2.5. Must be positive.

    Returns:
        The rounded weight as a float, e.g. 105.0. Never negative.

    Examples:
        >>> round_to_increment(103.75, 2.5)
        105.0
        >>> round_to_increment(101.2, 2.5)
        100.0
    """
    if granularity <= 0:
        raise ValueError(f"granularity must be positive, got {granularity}")
    if math.isnan(weight):
        raise ValueError("weight must be a number, got nan")
    if weight <= 0:
        return 0.0
    if math.isinf(weight):
        return float(weight)

    step = Decimal(str(granularity))
    with localcontext() as ctx:
        ctx.prec = 60
        ratio = Decimal(str(float(weight))) / step
        # quantize needs a digit of precision for every integer digit
        ctx.prec = max(ctx.prec, ratio.adjusted() + 2)
        units = ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return float(units * step)
