# src/pricing/rounding.py

"""Half-up rounding for displayed money amounts and ratings."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 0) -> float:
    """Round ``value`` to ``places`` decimals, halves away from zero.

    28.5 becomes 29 and 4.25 becomes 4.3 (``round`` gives 28 and 4.2).
    """
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))
