from __future__ import annotations

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal

from gainscalc.conv import parse_date, to_dec

from .money import abs_decimal, quantize_money

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)  # fmt: skip


def format_currency(amount: Decimal | float | int | str) -> str:
    """US dollars with thousands separators, e.g. ``-$1,234.50``."""
    value = quantize_money(to_dec(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}${abs_decimal(value):,.2f}"


def format_signed_currency(amount: Decimal | float | int | str) -> str:
    """Like format_currency but gains carry an explicit ``+``."""
    value = to_dec(amount)
    prefix = "+" if value >= 0 else ""
    return prefix + format_currency(value)


def format_date(d: dt.date | str) -> str:
    """``Jan 15, 2023`` style, independent of the process locale."""
    if isinstance(d, str):
        d = parse_date(d)
    return f"{_MONTHS[d.month - 1]} {d.day}, {d.year}"


def format_rate(rate: Decimal | float | str) -> str:
    pct = (to_dec(rate) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{pct}%"
