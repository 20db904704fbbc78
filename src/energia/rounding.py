"""Decimal rounding for display values."""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

# Wide enough for any finite float at display precision
_CONTEXT = Context(prec=400)


def round_to(value: float, places: int) -> float:
    """Round half away from zero on the exact binary value of a float.

    Matches fixed-point formatting (e.g. 0.125 -> 0.13 at 2 places),
    unlike the built-in round() which rounds exact ties to even. Infinite
    and NaN values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_CONTEXT))


def round_optional(value: float | None, places: int) -> float | None:
    """round_to that passes None through."""
    if value is None:
        return None
    return round_to(value, places)
