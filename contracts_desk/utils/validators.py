"""Deterministic validators and text helpers shared by the managers."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

DATE_FORMAT = "%d.%m.%Y"
VAT_MIN = Decimal("0")
VAT_MAX = Decimal("100")


def normalize_search(text: str | None) -> str | None:
    """Trimmed, casefolded search text, or None when there is nothing to match."""
    if text is None or not text.strip():
        return None
    return text.strip().casefold()


def contains_text(value: object, needle: str) -> bool:
    """Case-insensitive substring test; ``needle`` is already normalized."""
    if value is None:
        return False
    return needle in str(value).casefold()


def format_date(value: date | datetime) -> str:
    return value.strftime(DATE_FORMAT)


def parse_rate(text: str | None) -> Decimal | None:
    """Parse a VAT rate accepting both '.' and ',' as the decimal separator."""
    if text is None or not text.strip():
        return None
    try:
        rate = Decimal(text.strip().replace(",", "."))
    except InvalidOperation:
        return None
    if not rate.is_finite():
        return None
    return rate


def is_valid_rate(rate: Decimal | None) -> bool:
    return rate is not None and VAT_MIN <= rate <= VAT_MAX
