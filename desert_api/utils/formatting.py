"""Date helpers shared by email templates and PDFs"""

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[str, date, datetime, None]


def parse_date(value: DateLike) -> Optional[datetime]:
    """Parse ISO 8601 strings (with or without a trailing Z) and date objects"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def format_long_date(value: DateLike, fallback: str = "N/A") -> str:
    """October 19, 2026"""
    parsed = parse_date(value)
    if not parsed:
        return fallback
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def format_short_date(value: DateLike, fallback: str = "N/A") -> str:
    """10/19/2026"""
    parsed = parse_date(value)
    if not parsed:
        return fallback
    return f"{parsed.month}/{parsed.day}/{parsed.year}"
