from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal

from gainscalc.conv import to_dec
from gainscalc.model.types import (
    CapitalGain,
    CapitalGainsSummary,
    TaxImplications,
    UnmatchedSell,
)

logger = logging.getLogger(__name__)

DEFAULT_TAX_BRACKET = Decimal("0.24")

_ZERO = Decimal("0")

# (upper bracket bound inclusive, long-term rate)
LONG_TERM_RATE_STEPS: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal("0.12"), Decimal("0")),
    (Decimal("0.22"), Decimal("0.15")),
)
LONG_TERM_TOP_RATE = Decimal("0.20")


def long_term_rate(tax_bracket: Decimal) -> Decimal:
    """Long-term rate implied by the ordinary-income bracket."""
    for upper, rate in LONG_TERM_RATE_STEPS:
        if tax_bracket <= upper:
            return rate
    return LONG_TERM_TOP_RATE


def estimate_tax(
    short_term_total: Decimal,
    long_term_total: Decimal,
    short_rate: Decimal,
    long_rate: Decimal,
) -> Decimal:
    """Tax on positive totals only; losses never produce a refund."""
    tax = _ZERO
    if short_term_total > 0:
        tax += short_term_total * short_rate
    if long_term_total > 0:
        tax += long_term_total * long_rate
    return max(_ZERO, tax)


def summarize_gains(
    gains: Sequence[CapitalGain],
    tax_bracket: Decimal | float | str = DEFAULT_TAX_BRACKET,
    unmatched_sells: Iterable[UnmatchedSell] = (),
) -> CapitalGainsSummary:
    bracket = to_dec(tax_bracket, default=None)
    if bracket is None:
        raise ValueError(f"tax bracket is not a number: {tax_bracket!r}")
    if bracket < 0:
        raise ValueError(f"tax bracket cannot be negative: {tax_bracket!r}")

    short_term = tuple(g for g in gains if g.term == "short")
    long_term = tuple(g for g in gains if g.term == "long")

    total_short = sum((g.gain_loss for g in short_term), _ZERO)
    total_long = sum((g.gain_loss for g in long_term), _ZERO)

    short_rate = bracket
    long_rate = long_term_rate(bracket)

    summary = CapitalGainsSummary(
        short_term_gains=short_term,
        long_term_gains=long_term,
        total_short_term_gain_loss=total_short,
        total_long_term_gain_loss=total_long,
        net_capital_gain_loss=total_short + total_long,
        tax_implications=TaxImplications(
            short_term_tax_rate=short_rate,
            long_term_tax_rate=long_rate,
            estimated_tax=estimate_tax(total_short, total_long, short_rate, long_rate),
        ),
        unmatched_sells=tuple(unmatched_sells),
    )
    logger.debug(
        "Summary: %d short-term, %d long-term, net=%s",
        len(short_term),
        len(long_term),
        summary.net_capital_gain_loss,
    )
    return summary
