"""Unit tests for price normalization."""

import math

import pytest

from ferrecloud.v1_0.helper.io import cell_text, to_float, to_price


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("100", 100.0),
        ("19.99", 19.99),
        ("19,99", 19.99),
        ("$ 1.234,56", 1234.56),
        ("1,234.56", 1234.56),
        (" 50 ", 50.0),
        (42, 42.0),
    ],
)
def test_to_float_accepts_common_formats(raw, expected):
    assert to_float(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["", None, "abc", "12abc", True, float("nan"), "inf"])
def test_to_float_rejects_non_numbers(raw):
    assert to_float(raw) is None


def test_to_price_rounds_and_rejects_negative():
    assert to_price("10.456") == 10.46
    assert to_price("-1") is None


def test_cell_text_blanks_missing_cells():
    assert cell_text(None) == ""
    assert cell_text(math.nan) == ""
    assert cell_text(7) == "7"
