"""
Date and time rendering for observations.

Observations store the date-time exactly as entered (an ISO-8601 local
date-time such as "2024-03-01T09:00"). Every rendering goes through this
module so CSV, feedback and the details view agree. Unparseable values
render as "Invalid Date" instead of raising.
"""

from datetime import datetime
from typing import Optional


INVALID_DATE = "Invalid Date"

# Fixed English abbreviations, independent of the process locale
_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def parse_date_time(value: str) -> Optional[datetime]:
    """
    Parse a stored date-time string.

    Args:
        value: ISO-8601 date-time (a trailing "Z" is accepted)

    Returns:
        Parsed datetime, or None if the value cannot be parsed
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_date(value: str) -> str:
    """Render the date portion as YYYY-MM-DD."""
    parsed = parse_date_time(value)
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime("%Y-%m-%d")


def format_time(value: str) -> str:
    """Render the time portion as 24-hour HH:MM."""
    parsed = parse_date_time(value)
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime("%H:%M")


def format_display(value: str) -> str:
    """
    Render a medium date with a short time for the details view.

    Examples:
        >>> format_display("2024-03-01T09:00")
        '1 Mar 2024, 09:00'
    """
    parsed = parse_date_time(value)
    if parsed is None:
        return INVALID_DATE
    month = _MONTH_ABBREVIATIONS[parsed.month - 1]
    return f"{parsed.day} {month} {parsed.year}, {parsed.strftime('%H:%M')}"
