from datetime import date, datetime
from decimal import Decimal

import pytest

from print_engine.formatting import COLUMN_FORMATTERS, format_date, format_number, get_formatter


@pytest.mark.parametrize("value,expected", [
    (1000, "1,000"),
    (2500, "2,500"),
    (1234567.25, "1,234,567.25"),
    (Decimal("9876.50"), "9,876.50"),
    (-250, "-250"),
    (0, "0"),
    (True, "True"),
    ("n/a", "n/a"),
    (None, ""),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_number_custom_separator():
    assert format_number(1234567, separator=".") == "1.234.567"
    assert format_number(1234567, separator=" ") == "1 234 567"


@pytest.mark.parametrize("value,expected", [
    (date(2026, 3, 1), "2026-03-01"),
    (datetime(2026, 3, 1, 14, 30), "2026-03-01"),
    ("2026-03-01T14:30:00", "2026-03-01"),
    ("next week", "next week"),
    (None, ""),
])
def test_format_date(value, expected):
    assert format_date(value) == expected


def test_named_formatters():
    assert set(COLUMN_FORMATTERS) == {"text", "number", "date"}
    assert get_formatter("number") is format_number
    assert get_formatter(None) is None
    assert get_formatter("currency") is None
