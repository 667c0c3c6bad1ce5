from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from gainscalc.model.types import CapitalGain, CapitalGainsSummary

from .messages import tax_strategy_notes

MONEY_FMT = "$#,##0.00"
PCT_FMT = "0%"
DATE_FMT = "YYYY-MM-DD"
QTY_FMT = "0.########"

LABELS = {
    "sheet": {
        "summary": "Summary",
        "short": "Part I - Short-Term",
        "long": "Part II - Long-Term",
        "unmatched": "Unmatched Sells",
    },
    "summary": {
        "metric": "Metric",
        "amount": "Amount",
        "net": "Net Capital Gain/Loss",
        "short_total": "Short-Term Gains/Losses",
        "long_total": "Long-Term Gains/Losses",
        "short_rate": "Short-Term Tax Rate",
        "long_rate": "Long-Term Tax Rate",
        "estimated_tax": "Estimated Tax",
        "notes": "Tax Strategy Notes",
    },
    "gains": {
        "symbol": "Symbol",
        "type": "Type",
        "quantity": "Quantity",
        "acquired": "Date Acquired",
        "sold": "Date Sold",
        "proceeds": "Proceeds",
        "cost_basis": "Cost Basis",
        "fees": "Fees",
        "gain_loss": "Gain/Loss",
    },
    "unmatched": {
        "symbol": "Symbol",
        "sell_id": "Sell Id",
        "date": "Sell Date",
        "remaining": "Unmatched Quantity",
        "message": "Message",
    },
}


class ReportSink(Protocol):
    def write(self, summary: CapitalGainsSummary) -> Path:  # returns written file path
        ...


@dataclass
class ExcelReportSink:
    """Schedule D style workbook: totals sheet plus one sheet per holding term."""

    out_path: Path

    def write(self, summary: CapitalGainsSummary) -> Path:
        out_path = Path(self.out_path)
        wb = Workbook()

        # Remove the default sheet
        ws_default = wb.active
        wb.remove(ws_default)

        self._write_summary(wb, summary)
        self._write_gains(wb, LABELS["sheet"]["short"], summary.short_term_gains)
        self._write_gains(wb, LABELS["sheet"]["long"], summary.long_term_gains)
        if summary.unmatched_sells:
            self._write_unmatched(wb, summary)

        for _ws in wb.worksheets:
            _autosize(_ws)

        out_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(out_path)
        return out_path

    def _write_summary(self, wb: Workbook, summary: CapitalGainsSummary) -> None:
        labels = LABELS["summary"]
        ws = wb.create_sheet(title=LABELS["sheet"]["summary"])
        ws.append([labels["metric"], labels["amount"]])

        tax = summary.tax_implications
        rows = [
            (labels["net"], summary.net_capital_gain_loss, MONEY_FMT),
            (labels["short_total"], summary.total_short_term_gain_loss, MONEY_FMT),
            (labels["long_total"], summary.total_long_term_gain_loss, MONEY_FMT),
            (labels["short_rate"], tax.short_term_tax_rate, PCT_FMT),
            (labels["long_rate"], tax.long_term_tax_rate, PCT_FMT),
            (labels["estimated_tax"], tax.estimated_tax, MONEY_FMT),
        ]
        for label, value, fmt in rows:
            ws.append([label, float(value)])
            ws.cell(row=ws.max_row, column=2).number_format = fmt

        notes = tax_strategy_notes(summary)
        if notes:
            ws.append([])
            ws.append([labels["notes"]])
            for note in notes:
                ws.append([note])

    def _write_gains(
        self, wb: Workbook, title: str, gains: tuple[CapitalGain, ...]
    ) -> None:
        labels = LABELS["gains"]
        ws = wb.create_sheet(title=title)
        ws.append(
            [
                labels["symbol"],
                labels["type"],
                labels["quantity"],
                labels["acquired"],
                labels["sold"],
                labels["proceeds"],
                labels["cost_basis"],
                labels["fees"],
                labels["gain_loss"],
            ]
        )
        for g in gains:
            ws.append(
                [
                    g.symbol,
                    g.type,
                    float(g.quantity),
                    g.buy_date,
                    g.sell_date,
                    float(g.sale_proceeds),
                    float(g.cost_basis),
                    float(g.fees),
                    float(g.gain_loss),
                ]
            )
            r = ws.max_row
            ws.cell(row=r, column=3).number_format = QTY_FMT
            ws.cell(row=r, column=4).number_format = DATE_FMT
            ws.cell(row=r, column=5).number_format = DATE_FMT
            for col in range(6, 10):
                ws.cell(row=r, column=col).number_format = MONEY_FMT

        if gains:
            ws.append(
                [
                    "Total",
                    None,
                    None,
                    None,
                    None,
                    float(sum(g.sale_proceeds for g in gains)),
                    float(sum(g.cost_basis for g in gains)),
                    float(sum(g.fees for g in gains)),
                    float(sum(g.gain_loss for g in gains)),
                ]
            )
            r = ws.max_row
            for col in range(6, 10):
                ws.cell(row=r, column=col).number_format = MONEY_FMT

    def _write_unmatched(self, wb: Workbook, summary: CapitalGainsSummary) -> None:
        labels = LABELS["unmatched"]
        ws = wb.create_sheet(title=LABELS["sheet"]["unmatched"])
        ws.append(
            [
                labels["symbol"],
                labels["sell_id"],
                labels["date"],
                labels["remaining"],
                labels["message"],
            ]
        )
        for u in summary.unmatched_sells:
            ws.append([u.symbol, u.sell_id, u.date, float(u.remaining_qty), u.message])
            ws.cell(row=ws.max_row, column=3).number_format = DATE_FMT
            ws.cell(row=ws.max_row, column=4).number_format = QTY_FMT


def _autosize(sheet, max_width: int = 60, min_width: int = 10) -> None:
    for col in range(1, sheet.max_column + 1):
        max_len = 0
        for row in range(1, sheet.max_row + 1):
            v = sheet.cell(row=row, column=col).value
            if v is None:
                continue
            # Approximate display width using string conversion
            s = v.strftime("%Y-%m-%d") if hasattr(v, "strftime") else str(v)
            max_len = max(max_len, len(s))
        width = min(max_width, max(min_width, max_len + 2))
        sheet.column_dimensions[get_column_letter(col)].width = width
