from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TypedDict

from gainscalc.model.types import Transaction


class MatchLeg(TypedDict):
    buy: Transaction
    qty: Decimal


@dataclass
class Lot:
    buy: Transaction
    qty: Decimal  # remaining quantity in lot
