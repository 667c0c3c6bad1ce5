from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

AssetType = Literal["stock", "crypto"]
Action = Literal["buy", "sell"]
Term = Literal["short", "long"]


@dataclass(frozen=True)
class Transaction:
    """One buy or sell of a single instrument."""

    id: str
    type: AssetType
    symbol: str  # uppercase
    action: Action
    date: dt.date
    quantity: Decimal  # always > 0
    price: Decimal  # per unit, always > 0
    fees: Decimal = Decimal("0")
    description: str | None = None

    @property
    def is_buy(self) -> bool:
        return self.action == "buy"

    @property
    def is_sell(self) -> bool:
        return self.action == "sell"


@dataclass(frozen=True)
class CapitalGain:
    """A chunk of one sell matched against a chunk of one buy lot."""

    id: str
    symbol: str
    type: AssetType  # taken from the buy side
    buy_date: dt.date
    sell_date: dt.date
    quantity: Decimal
    cost_basis: Decimal  # incl. proportional buy fees
    sale_proceeds: Decimal  # net of proportional sell fees
    gain_loss: Decimal
    term: Term
    fees: Decimal


@dataclass(frozen=True)
class UnmatchedSell:
    """Sell quantity left over after every prior buy lot was consumed."""

    symbol: str
    sell_id: str
    date: dt.date
    remaining_qty: Decimal
    message: str


@dataclass(frozen=True)
class TaxImplications:
    short_term_tax_rate: Decimal
    long_term_tax_rate: Decimal
    estimated_tax: Decimal


@dataclass(frozen=True)
class CapitalGainsSummary:
    short_term_gains: tuple[CapitalGain, ...]
    long_term_gains: tuple[CapitalGain, ...]
    total_short_term_gain_loss: Decimal
    total_long_term_gain_loss: Decimal
    net_capital_gain_loss: Decimal
    tax_implications: TaxImplications
    unmatched_sells: tuple[UnmatchedSell, ...] = ()

    @property
    def gains(self) -> tuple[CapitalGain, ...]:
        return self.short_term_gains + self.long_term_gains
