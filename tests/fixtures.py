"""Test fixtures for transaction objects.

Production code builds Transactions from CSV text via csv_parser. Tests that
exercise matching and aggregation construct them directly with this helper.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from gainscalc.model.types import Transaction


def tx(
    id: str,
    action: str,
    date: dt.date | str,
    quantity: str | int,
    price: str | int,
    *,
    symbol: str = "AAPL",
    fees: str | int = "0",
    type: str = "stock",
) -> Transaction:
    if isinstance(date, str):
        date = dt.date.fromisoformat(date)
    return Transaction(
        id=id,
        type=type,
        symbol=symbol,
        action=action,
        date=date,
        quantity=Decimal(str(quantity)),
        price=Decimal(str(price)),
        fees=Decimal(str(fees)),
    )
