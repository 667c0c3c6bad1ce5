from __future__ import annotations

from collections import defaultdict, deque
from decimal import Decimal

from .fifo_domain import Lot, MatchLeg


class PositionBook:
    """Maintain FIFO lots per symbol without matching policy concerns."""

    def __init__(self) -> None:
        self._positions: dict[str, deque[Lot]] = defaultdict(deque)

    def append_buy(self, symbol: str, lot: Lot) -> None:
        if lot.qty <= 0:
            raise ValueError("buy lot quantity must be positive")
        self._positions[symbol].append(lot)

    def consume_fifo(
        self, symbol: str, qty: Decimal
    ) -> tuple[list[MatchLeg], Decimal]:
        """Take ``qty`` units from the oldest lots; return legs and the shortfall."""
        if qty <= 0:
            raise ValueError("qty to consume must be positive")

        legs: list[MatchLeg] = []
        qty_remaining = qty

        lots = self._positions[symbol]
        while qty_remaining > 0 and lots:
            lot = lots[0]
            take = min(qty_remaining, lot.qty)
            legs.append({"buy": lot.buy, "qty": take})

            lot.qty -= take
            qty_remaining -= take

            if lot.qty <= 0:
                if lot.qty < 0:
                    raise ValueError("lot quantity cannot become negative")
                lots.popleft()

        return legs, qty_remaining
