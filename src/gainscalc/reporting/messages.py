from __future__ import annotations

from gainscalc.model.types import CapitalGainsSummary

from .formatting import format_currency

LOSS_DEDUCTION_LIMIT = 3000


def render_summary_message(summary: CapitalGainsSummary, transaction_count: int) -> str:
    """Assistant message posted once an upload has been processed."""
    lines = [
        f"Great! I've processed {transaction_count} transactions and calculated "
        "your capital gains. Here's what I found:",
        "",
        "**Short-term gains/losses:** "
        + format_currency(summary.total_short_term_gain_loss),
        "**Long-term gains/losses:** "
        + format_currency(summary.total_long_term_gain_loss),
        "**Net capital gain/loss:** " + format_currency(summary.net_capital_gain_loss),
        "**Estimated tax:** "
        + format_currency(summary.tax_implications.estimated_tax),
    ]
    if summary.unmatched_sells:
        lines += [
            "",
            f"Note: {len(summary.unmatched_sells)} sell(s) exceeded the shares bought "
            "before them; the uncovered quantity was left out.",
        ]
    lines += [
        "",
        "I've automatically filled out your Schedule D form below. "
        "You can review all the details there.",
    ]
    return "\n".join(lines)


def tax_strategy_notes(summary: CapitalGainsSummary) -> list[str]:
    if summary.net_capital_gain_loss == 0:
        return []

    notes = []
    if summary.net_capital_gain_loss > 0:
        notes.append("Consider tax-loss harvesting to offset gains")
    if summary.net_capital_gain_loss < 0:
        notes.append(
            f"You can deduct up to ${LOSS_DEDUCTION_LIMIT:,} in capital losses "
            "against ordinary income"
        )
    if summary.total_short_term_gain_loss > 0:
        notes.append(
            "Short-term gains are taxed as ordinary income - "
            "consider holding investments longer"
        )
    notes.append("Unused capital losses can be carried forward to future tax years")
    return notes
