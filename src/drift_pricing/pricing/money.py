from decimal import ROUND_HALF_UP, Decimal

WHOLE_UNIT = Decimal("1")
CENT = Decimal("0.01")


def round_half_up(amount: float, step: Decimal = WHOLE_UNIT) -> float:
    """Round to ``step`` with halves going up (22.5 -> 23, unlike built-in round)."""
    return float(Decimal(str(amount)).quantize(step, rounding=ROUND_HALF_UP))


def round_cents(amount: float) -> float:
    return round_half_up(amount, CENT)
