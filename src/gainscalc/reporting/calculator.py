from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from gainscalc.model.csv_parser import parse_csv_transactions
from gainscalc.model.types import CapitalGainsSummary, Transaction

from .fifo import FifoMatcher
from .formatting import format_currency, format_date
from .summary import DEFAULT_TAX_BRACKET, summarize_gains

logger = logging.getLogger(__name__)


class CapitalGainsCalculator:
    """Entry point: transactions in, CapitalGainsSummary out.

    Holds no state between calls; each calculation builds its own matcher.
    """

    parse_csv_transactions = staticmethod(parse_csv_transactions)
    format_currency = staticmethod(format_currency)
    format_date = staticmethod(format_date)

    def __init__(
        self, *, tax_bracket: Decimal | float | str = DEFAULT_TAX_BRACKET
    ) -> None:
        self.tax_bracket = tax_bracket

    def calculate_capital_gains(
        self,
        transactions: Iterable[Transaction],
        tax_bracket: Decimal | float | str | None = None,
    ) -> CapitalGainsSummary:
        txs = list(transactions)
        matcher = FifoMatcher()
        gains = matcher.match(txs)
        summary = summarize_gains(
            gains,
            self.tax_bracket if tax_bracket is None else tax_bracket,
            matcher.unmatched_sells,
        )
        logger.info(
            "Capital gains: %d transactions -> %d gain lines "
            "(%d short-term, %d long-term, %d unmatched sells)",
            len(txs),
            len(gains),
            len(summary.short_term_gains),
            len(summary.long_term_gains),
            len(summary.unmatched_sells),
        )
        return summary


def calculate_capital_gains(
    transactions: Iterable[Transaction],
    tax_bracket: Decimal | float | str = DEFAULT_TAX_BRACKET,
) -> CapitalGainsSummary:
    return CapitalGainsCalculator(tax_bracket=tax_bracket).calculate_capital_gains(
        transactions
    )
