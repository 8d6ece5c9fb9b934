"""Helpers for ``YYYY-MM`` month keys and calendar month boundaries."""

import calendar
import re
from datetime import date, datetime, time
from typing import List, Optional, Tuple

from components.core.exceptions import InvalidArgumentError

MONTH_KEY_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


def parse_month_key(month_key: str) -> date:
    """Parse a month key into the first day of that month."""
    match = MONTH_KEY_PATTERN.fullmatch(month_key or "")
    if not match:
        raise InvalidArgumentError(f"Invalid month key: {month_key!r}. Expected YYYY-MM")
    return date(int(match.group(1)), int(match.group(2)), 1)


def get_month_key(value: date) -> str:
    """Get month key in format "YYYY-MM" for a given date"""
    return f"{value.year:04d}-{value.month:02d}"


def get_current_month_key(today: Optional[date] = None) -> str:
    return get_month_key(today or date.today())


def get_month_date_range(month_key: str) -> Tuple[datetime, datetime]:
    """
    Get the first and the last instant of a calendar month.

    Both boundaries are inclusive; the end is the last microsecond of the
    last day of the month.
    """
    first_day = parse_month_key(month_key)
    last_day = first_day.replace(day=calendar.monthrange(first_day.year, first_day.month)[1])
    return datetime.combine(first_day, time.min), datetime.combine(last_day, time.max)


def add_months(value: datetime, months: int) -> datetime:
    """Shift a date by whole months, clamping the day to the end of the target month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def get_next_month_key(month_key: str) -> str:
    first_day = parse_month_key(month_key)
    return get_month_key(add_months(datetime.combine(first_day, time.min), 1))


def get_previous_month_key(month_key: str) -> str:
    first_day = parse_month_key(month_key)
    return get_month_key(add_months(datetime.combine(first_day, time.min), -1))


def generate_month_range(start_month_key: str, end_month_key: str) -> List[str]:
    """List every month key from start to end, both included."""
    parse_month_key(end_month_key)
    months = []
    current = get_month_key(parse_month_key(start_month_key))
    while current <= end_month_key:
        months.append(current)
        current = get_next_month_key(current)
    return months


def is_past_month(month_key: str, now: Optional[datetime] = None) -> bool:
    _, end = get_month_date_range(month_key)
    return end < (now or datetime.now())


def is_future_month(month_key: str, now: Optional[datetime] = None) -> bool:
    start, _ = get_month_date_range(month_key)
    return start > (now or datetime.now())


def is_current_month(month_key: str, today: Optional[date] = None) -> bool:
    parse_month_key(month_key)
    return month_key == get_current_month_key(today)
