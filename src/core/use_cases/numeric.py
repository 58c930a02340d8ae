from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def mean(values: Iterable[Decimal]) -> Decimal:
    """Unweighted arithmetic mean."""
    items = list(values)
    if not items:
        raise ValueError("mean() of an empty sequence")
    return sum(items, ZERO) / len(items)


def safe_percent(numerator: Decimal, denominator: Decimal) -> Decimal:
    """numerator / denominator * 100, or 0 when the denominator is zero."""
    if denominator == 0:
        return ZERO
    return numerator / denominator * HUNDRED


def round_money(value: Decimal, places: int = 2) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
