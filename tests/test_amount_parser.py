"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from continuum.utils.amount_parser import coerce_decimal, is_decimal_text, parse_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("15.49", Decimal("15.49")),
        ("$15.49", Decimal("15.49")),
        ("€1,234.56", Decimal("1234.56")),
        ("(12.00)", Decimal("-12.00")),
        ("  7 ", Decimal("7")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "NaN", "Infinity"])
def test_parse_amount_rejects(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_coerce_decimal():
    assert coerce_decimal("0.10") == Decimal("0.10")
    assert coerce_decimal("twelve") is None
    assert coerce_decimal("nan") is None
    assert coerce_decimal("$5") is None


def test_coerce_decimal_reads_leading_number():
    assert coerce_decimal("12abc") == Decimal("12")
    assert coerce_decimal(" -3.5 kg") == Decimal("-3.5")
    assert coerce_decimal("1e3x") == Decimal("1e3")
    assert coerce_decimal("1,000") == Decimal("1")


def test_is_decimal_text():
    assert is_decimal_text("1E+30")
    assert is_decimal_text(" .5 ")
    assert not is_decimal_text("12abc")
    assert not is_decimal_text("")
