import datetime as dt
import logging
from decimal import Decimal

import pytest

from gainscalc.model.csv_parser import (
    TransactionCsvParser,
    TransactionParseError,
    parse_csv_transactions,
    parse_transactions,
)

CANONICAL = """\
symbol,action,date,quantity,price,fees
aapl,buy,2023-01-15,100,150.25,9.99
aapl,sell,2023-06-20,50,180.75,9.99
"""

ALIASED = """\
ticker,side,trade_date,shares,unit_price,commission
aapl,buy,2023-01-15,100,150.25,9.99
aapl,sell,2023-06-20,50,180.75,9.99
"""


def test_parse_canonical_header():
    txs = parse_csv_transactions(CANONICAL)

    assert [t.id for t in txs] == ["csv-0", "csv-1"]
    buy, sell = txs
    assert buy.symbol == "AAPL"
    assert buy.action == "buy" and sell.action == "sell"
    assert buy.date == dt.date(2023, 1, 15)
    assert buy.quantity == Decimal("100")
    assert buy.price == Decimal("150.25")
    assert buy.fees == Decimal("9.99")
    assert buy.type == "stock"
    assert buy.description is None


def test_alias_headers_parse_identically():
    assert parse_csv_transactions(ALIASED) == parse_csv_transactions(CANONICAL)


def test_headers_are_case_insensitive_and_trimmed():
    text = " Symbol , ACTION,Date, Quantity ,PRICE\nmsft,Buy,2023-01-02,1,10"
    (t,) = parse_csv_transactions(text)
    assert t.symbol == "MSFT" and t.action == "buy"


def test_type_action_classification():
    text = "\n".join(
        [
            "symbol,type,action,date,quantity,price",
            "btc,Crypto Currency,SELL ORDER,2023-01-02,0.5,30000",
            "aapl,equity,purchase,2023-01-02,1,10",
        ]
    )
    btc, aapl = parse_csv_transactions(text)
    assert btc.type == "crypto" and btc.action == "sell"
    assert aapl.type == "stock" and aapl.action == "buy"


def test_amount_is_a_quantity_alias():
    text = "symbol,action,date,amount,price\neth,buy,2023-01-02,2.5,1800"
    (t,) = parse_csv_transactions(text)
    assert t.quantity == Decimal("2.5")


def test_quotes_are_stripped():
    text = 'symbol,action,date,quantity,price,description\n"tsla","buy","2023-02-10","25","200.50","Tesla Inc"'
    (t,) = parse_csv_transactions(text)
    assert t.symbol == "TSLA"
    assert t.price == Decimal("200.50")
    assert t.description == "Tesla Inc"


def test_quoted_comma_is_split_naively():
    text = 'symbol,action,date,quantity,price,description\nAAPL,buy,2023-01-15,1,10,"Apple, Inc"'
    (t,) = parse_csv_transactions(text)
    assert t.description == "Apple"


def test_unknown_columns_are_ignored():
    text = "account,symbol,action,date,quantity,price,notes\nX1,AAPL,buy,2023-01-15,1,10,hi"
    (t,) = parse_csv_transactions(text)
    assert t.symbol == "AAPL" and t.quantity == Decimal("1")


def test_leftmost_alias_wins():
    text = "symbol,ticker,action,date,quantity,price\nAAPL,MSFT,buy,2023-01-15,1,10"
    (t,) = parse_csv_transactions(text)
    assert t.symbol == "AAPL"


def test_fees_default_to_zero_and_non_numeric_fees_are_zero():
    text = "\n".join(
        [
            "symbol,action,date,quantity,price,fees",
            "AAPL,buy,2023-01-15,1,10,",
            "AAPL,buy,2023-01-16,1,10,n/a",
        ]
    )
    a, b = parse_csv_transactions(text)
    assert a.fees == Decimal("0") and b.fees == Decimal("0")


def test_windows_line_endings():
    text = CANONICAL.replace("\n", "\r\n")
    assert parse_csv_transactions(text) == parse_csv_transactions(CANONICAL)


def test_invalid_rows_are_dropped_but_ids_follow_line_position():
    text = "\n".join(
        [
            "symbol,action,date,quantity,price",
            ",buy,2023-01-15,1,10",  # missing symbol
            "AAPL,buy,2023-01-15,1,-10",  # negative price
            "AAPL,buy,,1,10",  # missing date
            "AAPL,buy,2023-01-15,abc,10",  # non-numeric quantity
            "AAPL,buy,2023-01-15,1,0",  # zero price
            "AAPL,buy,someday,1,10",  # unparseable date
            "AAPL,buy,2023-01-15,-1,10",  # negative quantity
            "AAPL,buy,2023-01-15,1,10",
        ]
    )
    result = parse_transactions(text)

    assert [t.id for t in result.transactions] == ["csv-7"]
    assert result.report.skipped_rows == 7
    assert [i.line_no for i in result.report.issues] == [2, 3, 4, 5, 6, 7, 8]
    assert "missing symbol" in result.report.issues[0].message
    assert "unparseable date" in result.report.issues[5].message


def test_empty_action_cell_is_a_buy():
    text = "\n".join(
        [
            "symbol,action,date,quantity,price",
            "AAPL,,2023-01-15,10,100",
            "AAPL,sell,2023-02-01,10,120",
        ]
    )
    result = parse_transactions(text)

    assert [t.action for t in result.transactions] == ["buy", "sell"]
    assert result.report.skipped_rows == 0


def test_header_without_action_column_rejects_every_row():
    text = "symbol,date,quantity,price\nAAPL,2023-01-15,10,100\nMSFT,2023-01-16,1,10"
    result = parse_transactions(text)

    assert result.transactions == []
    assert [i.line_no for i in result.report.issues] == [2, 3]
    assert all("missing action" in i.message for i in result.report.issues)


def test_short_row_does_not_raise():
    text = "symbol,action,date,quantity,price\nAAPL,buy"
    result = parse_transactions(text)
    assert result.transactions == []
    assert result.report.skipped_rows == 1


def test_blank_lines_are_reported():
    text = "symbol,action,date,quantity,price\n\nAAPL,buy,2023-01-15,1,10"
    result = parse_transactions(text)
    (t,) = result.transactions
    assert t.id == "csv-1"
    assert result.report.issues[0].message == "Empty row; skipped."


@pytest.mark.parametrize(
    "text",
    [
        "",
        "symbol,action,date,quantity,price,fees",
        "symbol,action,date,quantity,price\nAAPL,buy,2023-01-15,,\nMSFT,sell,2023-01-15,,",
        "foo,bar\n1,2\n3,4",
    ],
)
def test_empty_or_garbage_input_yields_no_transactions(text):
    assert parse_csv_transactions(text) == []


def test_bom_on_header_is_ignored():
    text = "\ufeffsymbol,action,date,quantity,price\nAAPL,buy,2023-01-15,1,10"
    assert len(parse_csv_transactions(text)) == 1


def test_strict_mode_raises_with_report():
    text = "symbol,action,date,quantity,price\nAAPL,buy,2023-01-15,1,10\nAAPL,buy,,1,10"
    with pytest.raises(TransactionParseError) as excinfo:
        parse_transactions(text, strict=True)
    assert excinfo.value.report.skipped_rows == 1
    assert "line 3" in str(excinfo.value)


def test_strict_mode_passes_clean_input():
    result = parse_transactions(CANONICAL, strict=True)
    assert len(result) == 2


def test_parse_file(tmp_path):
    path = tmp_path / "trades.csv"
    path.write_text(ALIASED, encoding="utf-8")
    result = TransactionCsvParser().parse_file(path)
    assert len(result.transactions) == 2


def test_report_log_with(caplog):
    result = parse_transactions("symbol,action,date,quantity,price\nAAPL,buy,,1,10")
    log = logging.getLogger("test")
    with caplog.at_level(logging.WARNING):
        result.report.log_with(log)
    assert "line 2: Invalid transaction row: missing date" in caplog.text
