"""Number formatting for URL path components."""

import math
from decimal import Decimal


def format_number(value: float) -> str:
    """
    Render a number the way the Static API expects it in a path.

    Integral values have no decimal point ("0", "6", "-122"); everything else
    uses the shortest decimal that round-trips ("45.52", "0.75"), always in
    positional notation ("0.00005", never "5e-05").
    """
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite number: {value}")
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (unlike round())."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
