from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Callable, Literal, Sequence

from gainscalc.conv import parse_date, to_dec

from .types import Action, AssetType, Transaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseIssue:
    line_no: int
    severity: Literal["warning"]
    message: str
    row_preview: Sequence[str] | None = None


@dataclass
class ParseReport:
    """Non-fatal diagnostics collected during parsing (one issue per skipped row)."""

    issues: list[ParseIssue] = field(default_factory=list)

    def warn(self, line_no: int, msg: str, row: Sequence[str] | None = None) -> None:
        self.issues.append(ParseIssue(line_no, "warning", msg, row))

    @property
    def skipped_rows(self) -> int:
        return len(self.issues)

    def log_with(self, log: logging.Logger) -> None:
        for i in self.issues:
            if i.row_preview is not None:
                log.warning(
                    "Skipped line %d: %s | row=%s",
                    i.line_no,
                    i.message,
                    i.row_preview,
                )
            else:
                log.warning("Skipped line %d: %s", i.line_no, i.message)


@dataclass
class ParseResult:
    transactions: list[Transaction]
    report: ParseReport

    def __len__(self) -> int:
        return len(self.transactions)


class TransactionParseError(ValueError):
    """Raised by strict parsing when at least one row had to be skipped."""

    def __init__(self, report: ParseReport) -> None:
        self.report = report
        first = report.issues[0]
        super().__init__(
            f"{report.skipped_rows} invalid row(s); first at line "
            f"{first.line_no}: {first.message}"
        )


@dataclass
class _RowBuilder:
    """Typed accumulator for one data line; frozen into a Transaction by build()."""

    id: str
    symbol: str = ""
    type: AssetType = "stock"
    action: Action | None = None
    date_raw: str = ""
    quantity: Decimal = Decimal("0")
    price: Decimal = Decimal("0")
    fees: Decimal = Decimal("0")
    description: str | None = None

    def set_symbol(self, value: str) -> None:
        self.symbol = value.upper()

    def set_type(self, value: str) -> None:
        self.type = "crypto" if "crypto" in value.lower() else "stock"

    def set_action(self, value: str) -> None:
        # Only a missing action column leaves the action unset; any cell value
        # without "sell" in it (empty included) is a buy.
        self.action = "sell" if "sell" in value.lower() else "buy"

    def set_date(self, value: str) -> None:
        self.date_raw = value

    def set_quantity(self, value: str) -> None:
        self.quantity = to_dec(value)

    def set_price(self, value: str) -> None:
        self.price = to_dec(value)

    def set_fees(self, value: str) -> None:
        self.fees = to_dec(value)

    def set_description(self, value: str) -> None:
        self.description = value

    def build(self) -> tuple[Transaction | None, str | None]:
        """Return (transaction, None) for a valid row or (None, reason) otherwise."""
        if not self.symbol:
            return None, "missing symbol"
        if self.action is None:
            return None, "missing action"
        if not self.date_raw:
            return None, "missing date"
        if not self.quantity:
            return None, "missing or zero quantity"
        if not self.price:
            return None, "missing or zero price"
        if self.quantity < 0:
            return None, f"negative quantity {self.quantity}"
        if self.price < 0:
            return None, f"negative price {self.price}"
        if self.fees < 0:
            return None, f"negative fees {self.fees}"
        try:
            date = parse_date(self.date_raw)
        except ValueError:
            return None, f"unparseable date {self.date_raw!r}"

        return (
            Transaction(
                id=self.id,
                type=self.type,
                symbol=self.symbol,
                action=self.action,
                date=date,
                quantity=self.quantity,
                price=self.price,
                fees=self.fees,
                description=self.description,
            ),
            None,
        )


_Setter = Callable[[_RowBuilder, str], None]

# header alias -> (field name, setter); anything not listed is ignored
HEADER_FIELDS: dict[str, tuple[str, _Setter]] = {
    "symbol": ("symbol", _RowBuilder.set_symbol),
    "ticker": ("symbol", _RowBuilder.set_symbol),
    "type": ("type", _RowBuilder.set_type),
    "action": ("action", _RowBuilder.set_action),
    "side": ("action", _RowBuilder.set_action),
    "date": ("date", _RowBuilder.set_date),
    "trade_date": ("date", _RowBuilder.set_date),
    "quantity": ("quantity", _RowBuilder.set_quantity),
    "shares": ("quantity", _RowBuilder.set_quantity),
    "amount": ("quantity", _RowBuilder.set_quantity),
    "price": ("price", _RowBuilder.set_price),
    "unit_price": ("price", _RowBuilder.set_price),
    "fees": ("fees", _RowBuilder.set_fees),
    "commission": ("fees", _RowBuilder.set_fees),
    "description": ("description", _RowBuilder.set_description),
}


class TransactionCsvParser:
    """
    Maps brokerage-export CSV text -> Transaction list (+ ParseReport).

    CSV shape:
        line 1 = comma-separated headers (case-insensitive, aliases allowed)
        line 2.. = comma-separated values; double quotes are stripped

    Splitting is naive: a comma inside a quoted value still splits the field.
    Bad rows never raise in lenient mode; they are reported and skipped.
    """

    def parse_file(
        self, path: str | Path, *, encoding: str = "utf-8", strict: bool = False
    ) -> ParseResult:
        with open(path, "r", encoding=encoding, errors="replace") as fp:
            return self.parse_text(fp.read(), strict=strict)

    def parse_text(self, text: str, *, strict: bool = False) -> ParseResult:
        report = ParseReport()
        transactions: list[Transaction] = []

        lines = text.strip().split("\n")
        # Strip BOM on the header line if present
        header_line = lines[0].lstrip("\ufeff")
        headers = [h.strip() for h in header_line.lower().split(",")]
        columns = _resolve_columns(headers)
        if header_line.strip() and not columns:
            logger.debug("No recognised columns in header %r", header_line)

        for index, line in enumerate(lines[1:]):
            line_no = index + 2
            if not line.strip():
                report.warn(line_no, "Empty row; skipped.")
                continue

            values = [v.strip().replace('"', "") for v in line.split(",")]
            builder = _RowBuilder(id=f"csv-{index}")
            for pos, setter in columns:
                setter(builder, values[pos] if pos < len(values) else "")

            tx, problem = builder.build()
            if tx is None:
                logger.debug("Skipping line %d: %s", line_no, problem)
                report.warn(line_no, f"Invalid transaction row: {problem}", values)
                continue
            transactions.append(tx)

        logger.debug(
            "Parsed %d transaction(s), skipped %d row(s)",
            len(transactions),
            report.skipped_rows,
        )
        if strict and report.issues:
            raise TransactionParseError(report)
        return ParseResult(transactions=transactions, report=report)


def _resolve_columns(headers: Sequence[str]) -> list[tuple[int, _Setter]]:
    """Pick the column feeding each field; the leftmost alias for a field wins."""
    seen: set[str] = set()
    columns: list[tuple[int, _Setter]] = []
    for pos, header in enumerate(headers):
        entry = HEADER_FIELDS.get(header)
        if entry is None:
            continue
        name, setter = entry
        if name in seen:
            continue
        seen.add(name)
        columns.append((pos, setter))
    return columns


def parse_transactions(text: str, *, strict: bool = False) -> ParseResult:
    return TransactionCsvParser().parse_text(text, strict=strict)


def parse_csv_transactions(text: str) -> list[Transaction]:
    """Lenient parse: the valid transactions only, invalid rows silently dropped."""
    return parse_transactions(text).transactions
