"""
Calendar-day helpers.

Ledger keys are plain `date` objects. Incoming values may be dates,
datetimes (truncated to their date) or ISO "YYYY-MM-DD" strings.
"""

import calendar
import re
from datetime import date, datetime, timedelta
from typing import Iterator

from .errors import InvalidDateError

_ISO_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_day(value: date | datetime | str) -> date:
    """
    Normalize a calendar day.

    Args:
        value: date, datetime or "YYYY-MM-DD" string

    Returns:
        The calendar date

    Raises:
        InvalidDateError: value is not a well-formed calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if not _ISO_DAY.match(value):
            raise InvalidDateError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
        try:
            return date.fromisoformat(value)
        except ValueError as e:
            raise InvalidDateError(f"Invalid date: {value!r} ({e})") from e
    raise InvalidDateError(f"Invalid date: {value!r}")


def day_key(day: date) -> str:
    """ISO string used as a ledger/display key."""
    return day.isoformat()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from start to end, both inclusive."""
    # counted so an end of date.max never steps past it
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month."""
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def week_start(day: date) -> date:
    """Sunday that starts the week containing `day`."""
    # weekday(): Monday=0 ... Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)
