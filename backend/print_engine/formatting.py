"""
Cell Value Formatting

Column formatters map a raw cell value to display text. The HTTP layer can
only name a formatter, so the built-in ones are registered in
COLUMN_FORMATTERS by name.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Optional


def format_number(value: Any, separator: str = ",") -> str:
    """
    Format a number with thousands separators.

    Decimals keep their digits (1234.5 -> "1,234.5"). Booleans and
    non-numeric values pass through as text, None renders empty.
    """
    if value is None:
        return ''
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return str(value)

    text = f"{value:,}"
    if separator != ",":
        text = text.replace(",", separator)
    return text


def format_date(value: Any, fmt: str = "%Y-%m-%d") -> str:
    """Format a date/datetime (or ISO date string); anything else passes through."""
    if value is None:
        return ''
    if isinstance(value, (date, datetime)):
        return value.strftime(fmt)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value).strftime(fmt)
        except ValueError:
            return value
    return str(value)


def format_text(value: Any) -> str:
    if value is None:
        return ''
    return str(value)


COLUMN_FORMATTERS: Dict[str, Callable[[Any], str]] = {
    'text': format_text,
    'number': format_number,
    'date': format_date,
}


def get_formatter(name: Optional[str]) -> Optional[Callable[[Any], str]]:
    """Look up a named formatter. None means pass-through."""
    if not name:
        return None
    return COLUMN_FORMATTERS.get(name)
