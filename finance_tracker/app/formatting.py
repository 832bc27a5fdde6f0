import logging
from datetime import date, datetime
from typing import Optional

from .config import CURRENCY_CODE, DISPLAY_DATE_FORMAT, ISO_DATE_FORMAT, PLACEHOLDER_LABEL
from .context import DateRange

logger = logging.getLogger(__name__)


def parse_iso_date(value) -> Optional[date]:
    """Parse a YYYY-MM-DD string. Returns None for empty or malformed input."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()
    except ValueError:
        return None


def format_date(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


def format_date_range(value: Optional[DateRange]) -> str:
    """
    Human-readable label for a committed range, e.g. "Mar 05, 2024" for a
    single day or "Jan 01, 2024 - Jan 15, 2024". Owner-supplied ranges may
    carry garbage, so anything unparseable renders as the placeholder label
    instead of raising.
    """
    if value is None:
        return PLACEHOLDER_LABEL

    try:
        start, end = value.as_dates()
        if value.date_from == value.date_to:
            return format_date(start)
        return f"{format_date(start)} - {format_date(end)}"
    except (AttributeError, TypeError, ValueError):
        logger.debug("Unparseable date range %r; showing placeholder.", value)
        return PLACEHOLDER_LABEL


def format_currency(amount: float, currency: str = CURRENCY_CODE) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency} {abs(amount):,.0f}"


def format_compact_currency(amount: float, currency: str = CURRENCY_CODE) -> str:
    if amount >= 1_000_000:
        return f"{currency} {amount / 1_000_000:.1f}M"
    if amount >= 1_000:
        return f"{currency} {amount / 1_000:.1f}K"
    return format_currency(amount, currency)
