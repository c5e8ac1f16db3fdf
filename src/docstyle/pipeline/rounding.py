"""Half-up rounding for profile numbers.

Profiles are compared against values produced by tools that round exact
halves away from zero (1/8 -> 0.13, 2.5 -> 3), so Python's half-to-even
``round`` is not used for profile fields.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union


def round_half_up(value: float, digits: int = 0) -> Union[int, float]:
    """Round to ``digits`` decimals, halves away from zero.

    Returns an int when ``digits`` is 0.
    """
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    if digits == 0:
        return int(rounded)
    return float(rounded)
