from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from contracts_desk.utils.validators import (
    contains_text,
    format_date,
    is_valid_rate,
    normalize_search,
    parse_rate,
)


def test_normalize_search():
    assert normalize_search("  Кровля ") == "кровля"
    assert normalize_search("   ") is None
    assert normalize_search(None) is None


def test_contains_text_is_case_insensitive():
    assert contains_text("Ремонт КРОВЛИ", "кровли")
    assert contains_text(42, "4")
    assert not contains_text(None, "x")


def test_format_date():
    assert format_date(date(2023, 1, 5)) == "05.01.2023"


@pytest.mark.parametrize(
    "raw, expected",
    [("20", Decimal("20")), ("12,5", Decimal("12.5")), (" 0.1 ", Decimal("0.1")), ("", None), ("x", None), ("NaN", None)],
)
def test_parse_rate(raw, expected):
    assert parse_rate(raw) == expected


def test_is_valid_rate_bounds():
    assert is_valid_rate(Decimal("0"))
    assert is_valid_rate(Decimal("100"))
    assert not is_valid_rate(Decimal("100.01"))
    assert not is_valid_rate(Decimal("-0.5"))
    assert not is_valid_rate(None)
