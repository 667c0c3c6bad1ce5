from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Optional

from gainscalc.model.types import CapitalGain, Transaction, UnmatchedSell

from .events import EventRecorder
from .fifo_domain import Lot
from .positions import PositionBook
from .realized_builder import build_capital_gain

logger = logging.getLogger(__name__)


class FifoMatcher:
    """Match sells against earlier buys, oldest lot first, one symbol at a time.

    Buys and sells of a symbol are each ordered by date (ties keep input order) and
    every sell drains the lot queue in turn. Sell quantity with no lot left to
    consume produces no gain; it is recorded as an UnmatchedSell instead. The
    recorder only holds the events of the latest match() call.
    """

    def __init__(self, *, recorder: Optional[EventRecorder] = None) -> None:
        self.recorder = recorder or EventRecorder()

    @property
    def unmatched_sells(self) -> list[UnmatchedSell]:
        return self.recorder.unmatched_sells

    def match(self, transactions: Iterable[Transaction]) -> list[CapitalGain]:
        self.recorder.clear()
        by_symbol: dict[str, list[Transaction]] = {}
        for tx in transactions:
            by_symbol.setdefault(tx.symbol, []).append(tx)

        positions = PositionBook()
        gains: list[CapitalGain] = []
        for symbol, symbol_txs in by_symbol.items():
            self._match_symbol(symbol, symbol_txs, positions, gains)

        logger.debug(
            "Matched %d symbol(s) into %d gain line(s)", len(by_symbol), len(gains)
        )
        return gains

    def _match_symbol(
        self,
        symbol: str,
        txs: list[Transaction],
        positions: PositionBook,
        gains: list[CapitalGain],
    ) -> None:
        buys = sorted((t for t in txs if t.is_buy), key=lambda t: t.date)
        sells = sorted((t for t in txs if t.is_sell), key=lambda t: t.date)

        for buy in buys:
            positions.append_buy(symbol, Lot(buy=buy, qty=buy.quantity))

        for sell in sells:
            legs, qty_remaining = positions.consume_fifo(symbol, sell.quantity)
            for leg in legs:
                gains.append(
                    build_capital_gain(leg["buy"], sell, leg["qty"], len(gains))
                )

            if qty_remaining > 0:
                self._record_unmatched(sell, qty_remaining)

    def _record_unmatched(self, sell: Transaction, qty_remaining: Decimal) -> None:
        event = UnmatchedSell(
            symbol=sell.symbol,
            sell_id=sell.id,
            date=sell.date,
            remaining_qty=qty_remaining,
            message=(
                f"sell of {sell.quantity} {sell.symbol} on {sell.date.isoformat()} "
                f"exceeds prior buys by {qty_remaining}; remainder ignored"
            ),
        )
        logger.warning(
            "Unmatched SELL: symbol=%s id=%s date=%s qty=%s",
            event.symbol,
            event.sell_id,
            event.date,
            event.remaining_qty,
        )
        self.recorder.record_unmatched(event)


def match_transactions(transactions: Iterable[Transaction]) -> list[CapitalGain]:
    return FifoMatcher().match(transactions)
