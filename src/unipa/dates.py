"""Japanese date/time localization.

Recognised patterns (searched anywhere in the input):
    2025年1月5日          -> 2025-01-05
    2025年1月15日 14:30   -> 2025-01-15 14:30  (or 2025-01-15T14:30:00+09:00)
    2026年3月             -> 2026-03

Only ASCII digits are recognised. Anything else is returned unchanged: callers get "localized, or passthrough".
"""

import re

JST_OFFSET = "+09:00"

DATE_PATTERN = re.compile(r"([0-9]{4})年([0-9]{1,2})月([0-9]{1,2})日")
DATETIME_PATTERN = re.compile(r"([0-9]{4})年([0-9]{1,2})月([0-9]{1,2})日\s*([0-9]{1,2}):([0-9]{2})")
YEAR_MONTH_PATTERN = re.compile(r"([0-9]{4})年([0-9]{1,2})月")


def format_date(value: str) -> str:
    """'2025年1月5日' -> '2025-01-05'."""
    match = DATE_PATTERN.search(value)
    if not match:
        return value
    year, month, day = match.groups()
    return f"{year}-{int(month):02d}-{int(day):02d}"


def format_datetime(value: str) -> str:
    """'2025年1月15日 9:05' -> '2025-01-15 09:05'."""
    match = DATETIME_PATTERN.search(value)
    if not match:
        return value
    year, month, day, hour, minute = match.groups()
    return f"{year}-{int(month):02d}-{int(day):02d} {int(hour):02d}:{minute}"


def format_iso_datetime(value: str) -> str:
    """'2025年1月15日 14:30' -> '2025-01-15T14:30:00+09:00'."""
    match = DATETIME_PATTERN.search(value)
    if not match:
        return value
    year, month, day, hour, minute = match.groups()
    return f"{year}-{int(month):02d}-{int(day):02d}T{int(hour):02d}:{minute}:00{JST_OFFSET}"


def format_year_month(value: str) -> str:
    """'2026年3月' -> '2026-03'."""
    match = YEAR_MONTH_PATTERN.search(value)
    if not match:
        return value
    year, month = match.groups()
    return f"{year}-{int(month):02d}"


def localize(value: str) -> str:
    """Apply the most specific recognised pattern, else pass through."""
    if DATETIME_PATTERN.search(value):
        return format_datetime(value)
    if DATE_PATTERN.search(value):
        return format_date(value)
    return format_year_month(value)
