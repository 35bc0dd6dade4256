"""Currency rounding helpers"""

from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up (2.5 -> 3).

    round() rounds halves to even, so 2.5 would become 2.
    """
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_to_thousand(value: float) -> int:
    """Round a currency amount to the nearest thousand units"""
    return round_half_up(value / 1000) * 1000
