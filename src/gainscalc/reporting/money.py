from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

MoneyLike = str | Decimal

_MONEY_Q = Decimal("0.01")


def quantize_money(value: Decimal, places: MoneyLike = _MONEY_Q) -> Decimal:
    """Quantize monetary values consistently (half-up, like a cash register)."""
    quant = Decimal(places)
    return value.quantize(quant, rounding=ROUND_HALF_UP)


def prorate(amount: Decimal, take: Decimal, total_qty: Decimal) -> Decimal:
    """Share of ``amount`` attributable to ``take`` units out of ``total_qty``."""
    if total_qty == 0:
        return Decimal("0")
    return amount * (take / total_qty)


def abs_decimal(value: Decimal) -> Decimal:
    """Return the absolute value using Decimal.copy_abs for stability."""
    return value.copy_abs()
