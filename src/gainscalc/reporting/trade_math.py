from __future__ import annotations

import datetime as dt
from decimal import Decimal

from gainscalc.model.types import Term, Transaction

from .money import prorate


def cost_basis(buy: Transaction, qty: Decimal) -> Decimal:
    """Purchase cost of ``qty`` units, including their share of the buy fees."""
    return buy.price * qty + prorate(buy.fees, qty, buy.quantity)


def sale_proceeds(sell: Transaction, qty: Decimal) -> Decimal:
    """Sale value of ``qty`` units, net of their share of the sell fees."""
    return sell.price * qty - prorate(sell.fees, qty, sell.quantity)


def matched_fees(buy: Transaction, sell: Transaction, qty: Decimal) -> Decimal:
    """Combined buy+sell fees for a matched chunk, over the larger of the two sizes."""
    return prorate(buy.fees + sell.fees, qty, max(buy.quantity, sell.quantity))


def anniversary(d: dt.date) -> dt.date:
    """Same calendar date one year later; 29 February maps to 28 February."""
    try:
        return d.replace(year=d.year + 1)
    except ValueError:
        # Leap-day buy: clamp to 28 February rather than rolling over to 1 March,
        # so a sell on 1 March of the next year is already long term.
        return d.replace(year=d.year + 1, day=28)


def long_term_threshold(buy_date: dt.date) -> dt.date:
    """First sell date that counts as held for more than one year."""
    return anniversary(buy_date) + dt.timedelta(days=1)


def holding_term(buy_date: dt.date, sell_date: dt.date) -> Term:
    return "long" if sell_date >= long_term_threshold(buy_date) else "short"
