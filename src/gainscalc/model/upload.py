from __future__ import annotations

import logging
from pathlib import Path

from .csv_parser import ParseResult, TransactionCsvParser

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024

SAMPLE_TRANSACTIONS_CSV = """\
symbol,type,action,date,quantity,price,fees,description
AAPL,stock,buy,2023-01-15,100,150.25,9.99,Apple Inc
AAPL,stock,sell,2023-06-20,50,180.75,9.99,Apple Inc
TSLA,stock,buy,2023-02-10,25,200.50,9.99,Tesla Inc
TSLA,stock,sell,2023-11-15,25,240.25,9.99,Tesla Inc
BTC,crypto,buy,2023-03-01,0.5,25000,25,Bitcoin
BTC,crypto,sell,2023-08-15,0.25,30000,30,Bitcoin
MSFT,stock,buy,2022-12-01,75,250.00,9.99,Microsoft Corp
MSFT,stock,sell,2023-09-10,75,320.50,9.99,Microsoft Corp
"""


class UploadError(Exception):
    """A transaction file was rejected before or after parsing."""


def load_transactions_file(
    path: str | Path,
    *,
    strict: bool = False,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> ParseResult:
    """Validate and parse a brokerage CSV export.

    Rejects non-.csv names, files larger than ``max_bytes`` and files that yield no
    valid transaction at all. With ``strict`` any skipped row raises
    TransactionParseError instead of being reported.
    """
    p = Path(path)
    if not p.name.lower().endswith(".csv"):
        raise UploadError("Please upload a CSV file only.")

    size = p.stat().st_size
    if size > max_bytes:
        logger.debug("Rejecting %s: %d bytes > %d", p, size, max_bytes)
        raise UploadError("File size must be less than 5MB.")

    result = TransactionCsvParser().parse_file(p, strict=strict)
    if not result.transactions:
        raise UploadError(
            "No valid transactions found in the file. Please check the format."
        )

    logger.info(
        "Successfully processed %d transactions from %s", len(result), p.name
    )
    return result


def write_sample_csv(path: str | Path) -> Path:
    out_path = Path(path)
    out_path.write_text(SAMPLE_TRANSACTIONS_CSV, encoding="utf-8")
    return out_path
