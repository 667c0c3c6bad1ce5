from __future__ import annotations

from decimal import Decimal

from gainscalc.model.types import CapitalGain, Transaction

from .trade_math import cost_basis, holding_term, matched_fees, sale_proceeds


def build_capital_gain(
    buy: Transaction, sell: Transaction, qty: Decimal, seq: int
) -> CapitalGain:
    basis = cost_basis(buy, qty)
    proceeds = sale_proceeds(sell, qty)

    return CapitalGain(
        id=f"{buy.id}-{sell.id}-{seq}",
        symbol=sell.symbol,
        type=buy.type,
        buy_date=buy.date,
        sell_date=sell.date,
        quantity=qty,
        cost_basis=basis,
        sale_proceeds=proceeds,
        gain_loss=proceeds - basis,
        term=holding_term(buy.date, sell.date),
        fees=matched_fees(buy, sell, qty),
    )
