from .csv_parser import (
    ParseIssue,
    ParseReport,
    ParseResult,
    TransactionCsvParser,
    TransactionParseError,
    parse_csv_transactions,
    parse_transactions,
)
from .types import (
    CapitalGain,
    CapitalGainsSummary,
    TaxImplications,
    Transaction,
    UnmatchedSell,
)
from .upload import (
    MAX_UPLOAD_BYTES,
    SAMPLE_TRANSACTIONS_CSV,
    UploadError,
    load_transactions_file,
    write_sample_csv,
)

__all__ = [
    "CapitalGain",
    "CapitalGainsSummary",
    "TaxImplications",
    "Transaction",
    "UnmatchedSell",
    "ParseIssue",
    "ParseReport",
    "ParseResult",
    "TransactionCsvParser",
    "TransactionParseError",
    "parse_csv_transactions",
    "parse_transactions",
    "MAX_UPLOAD_BYTES",
    "SAMPLE_TRANSACTIONS_CSV",
    "UploadError",
    "load_transactions_file",
    "write_sample_csv",
]
