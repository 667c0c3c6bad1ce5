from .calculator import CapitalGainsCalculator, calculate_capital_gains
from .fifo import FifoMatcher, Lot, match_transactions
from .formatting import (
    format_currency,
    format_date,
    format_rate,
    format_signed_currency,
)
from .messages import render_summary_message, tax_strategy_notes
from .report_sink import ExcelReportSink, ReportSink
from .summary import DEFAULT_TAX_BRACKET, long_term_rate, summarize_gains

__all__ = [
    "CapitalGainsCalculator",
    "calculate_capital_gains",
    "FifoMatcher",
    "Lot",
    "match_transactions",
    "format_currency",
    "format_date",
    "format_rate",
    "format_signed_currency",
    "render_summary_message",
    "tax_strategy_notes",
    "ExcelReportSink",
    "ReportSink",
    "DEFAULT_TAX_BRACKET",
    "long_term_rate",
    "summarize_gains",
]
