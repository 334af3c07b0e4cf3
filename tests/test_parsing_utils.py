from datetime import date
from decimal import Decimal

import pytest

from return_recon.infrastructure.parsing.utils import (
    RowReader,
    digits_only,
    parse_br_date,
    parse_br_decimal,
    split_document,
    try_parse_br_decimal,
)


@pytest.mark.parametrize(
    "token, expected",
    [
        ("1.234,56", Decimal("1234.56")),
        ("0,00", Decimal("0")),
        ("", Decimal("0")),
        ("abc", Decimal("0")),
        ("-1.234,56", Decimal("-1234.56")),
        ("R$ 2.000,10", Decimal("2000.10")),
        ("NaN", Decimal("0")),
        (None, Decimal("0")),
    ],
)
def test_parse_br_decimal(token, expected):
    assert parse_br_decimal(token) == expected


def test_try_parse_br_decimal_flags_garbage():
    assert try_parse_br_decimal("abc") is None
    assert try_parse_br_decimal("") == Decimal("0")


def test_try_parse_br_decimal_rejects_exponents_and_oversized_amounts():
    assert try_parse_br_decimal("1e1000000") is None
    assert try_parse_br_decimal("1,5E3") is None
    assert try_parse_br_decimal("9" * 40) is None
    assert try_parse_br_decimal("9" * 20) == Decimal("9" * 20)
    assert try_parse_br_decimal(",50") == Decimal("0.50")


def test_parse_br_date():
    assert parse_br_date("10/05/2025") == date(2025, 5, 10)
    assert parse_br_date("1/5/2025") == date(2025, 5, 1)
    assert parse_br_date("10-05-2025") is None
    assert parse_br_date("31/02/2025") is None
    assert parse_br_date("") is None
    assert parse_br_date(None) is None


def test_split_document():
    assert split_document("573456/001") == ("573456", "001")
    assert split_document("573456") == ("573456", "001")
    assert split_document("573456/") == ("573456", "001")
    assert split_document("573456/002", default_installment="1") == ("573456", "002")


def test_digits_only():
    assert digits_only("57.220.226/0001-15") == "57220226000115"
    assert digits_only(None) == ""


def test_row_reader_collects_warnings():
    header = ["VALOR", "DATA", "DIAS"]
    reader = RowReader(header, ["12,x", "2025-01-01", "abc"])

    assert reader.as_decimal("VALOR") == Decimal("0")
    assert reader.as_date("DATA") is None
    assert reader.as_int("DIAS") == 0
    assert [w.column for w in reader.warnings] == ["VALOR", "DATA", "DIAS"]


def test_row_reader_short_row():
    reader = RowReader(["A", "B", "C"], ["1"])

    assert reader.text("A") == "1"
    assert reader.raw("C") is None
    assert reader.as_decimal("C") == Decimal("0")
    assert len(reader.warnings) == 1
    assert reader.warnings[0].column == "*"
