import datetime as dt
from decimal import Decimal

import pytest

from fixtures import tx
from gainscalc.reporting.money import abs_decimal, prorate, quantize_money
from gainscalc.reporting.trade_math import (
    anniversary,
    cost_basis,
    holding_term,
    long_term_threshold,
    matched_fees,
    sale_proceeds,
)


def test_quantize_money_half_up():
    assert quantize_money(Decimal("123.455")) == Decimal("123.46")
    assert quantize_money(Decimal("-1.005")) == Decimal("-1.01")
    assert quantize_money(Decimal("123.4567"), "0.0001") == Decimal("123.4567")


def test_prorate():
    assert prorate(Decimal("9.99"), Decimal("50"), Decimal("100")) == Decimal("4.995")
    assert prorate(Decimal("9.99"), Decimal("100"), Decimal("100")) == Decimal("9.99")
    assert prorate(Decimal("10"), Decimal("1"), Decimal("0")) == Decimal("0")


def test_abs_decimal_uses_copy_abs():
    value = Decimal("-10.5")
    assert abs_decimal(value) == Decimal("10.5")
    assert value == Decimal("-10.5")


def test_cost_basis_full_and_partial_fee_allocation():
    buy = tx("b1", "buy", "2023-01-15", 100, 10, fees="9.99")
    assert cost_basis(buy, Decimal("100")) == Decimal("1009.99")
    assert cost_basis(buy, Decimal("50")) == Decimal("504.995")


def test_sale_proceeds_prorates_over_sell_quantity():
    sell = tx("s1", "sell", "2023-06-20", 50, "180.75", fees="9.99")
    assert sale_proceeds(sell, Decimal("50")) == Decimal("9027.51")
    assert sale_proceeds(sell, Decimal("25")) == Decimal("4518.75") - Decimal("4.995")


def test_matched_fees_use_larger_quantity():
    buy = tx("b1", "buy", "2023-01-15", 100, 10, fees="9.99")
    sell = tx("s1", "sell", "2023-06-20", 50, 12, fees="9.99")
    assert matched_fees(buy, sell, Decimal("50")) == Decimal("9.99")


@pytest.mark.parametrize(
    "buy, sell, expected",
    [
        (dt.date(2023, 1, 15), dt.date(2024, 1, 15), "short"),
        (dt.date(2023, 1, 15), dt.date(2024, 1, 16), "long"),
        (dt.date(2023, 1, 15), dt.date(2023, 6, 20), "short"),
        (dt.date(2022, 12, 31), dt.date(2024, 1, 1), "long"),
        (dt.date(2022, 12, 31), dt.date(2023, 12, 31), "short"),
        (dt.date(2024, 2, 29), dt.date(2025, 2, 28), "short"),
        (dt.date(2024, 2, 29), dt.date(2025, 3, 1), "long"),
        (dt.date(2023, 3, 1), dt.date(2024, 3, 1), "short"),
        (dt.date(2023, 3, 1), dt.date(2024, 3, 2), "long"),
    ],
)
def test_holding_term_boundaries(buy, sell, expected):
    assert holding_term(buy, sell) == expected


def test_anniversary_and_threshold():
    assert anniversary(dt.date(2024, 2, 29)) == dt.date(2025, 2, 28)
    assert long_term_threshold(dt.date(2023, 1, 31)) == dt.date(2024, 2, 1)
    assert long_term_threshold(dt.date(2023, 12, 31)) == dt.date(2025, 1, 1)
