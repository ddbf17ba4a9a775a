# portfolio_timeline/utils/date_utils.py
"""
Date utility functions for the Portfolio Timeline library.

Trade lists and price histories arrive keyed by whatever the upstream
loader produced: ISO strings, epoch timestamps or real date objects. Every
date that enters the valuation engine goes through to_date_key() so that
lookups compare like with like.

Usage:
    from portfolio_timeline.utils.date_utils import to_date_key, iter_days

    day = to_date_key("2023-01-03")
    days = list(iter_days(day, to_date_key(1675209600)))
"""

import calendar
from collections.abc import Iterator
from datetime import date, datetime, timedelta, timezone

from portfolio_timeline.services.exceptions import MalformedDateError

DateKey = date | datetime | str | int | float


def to_date_key(value: DateKey) -> date:
    """
    Normalize a date-like key to a calendar date.

    Accepted inputs:
    - date: returned unchanged
    - datetime: its date part
    - str: "YYYY-MM-DD", optionally followed by a time part after "T" or a space
    - int/float: epoch timestamp in seconds, interpreted in UTC

    Args:
        value: Raw date key

    Returns:
        The calendar date

    Raises:
        MalformedDateError: If the value cannot be interpreted as a date

    Example:
        >>> to_date_key("2023-01-03T00:00:00")
        datetime.date(2023, 1, 3)
        >>> to_date_key(1672704000)
        datetime.date(2023, 1, 3)
    """
    # bool is an int subclass; True is not a timestamp
    if isinstance(value, bool):
        raise MalformedDateError(value, "boolean is not a date")

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError) as e:
            raise MalformedDateError(value, str(e)) from e

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise MalformedDateError(value, "empty string")
        day_part = text.split("T", 1)[0].split(" ", 1)[0]
        try:
            return date.fromisoformat(day_part)
        except ValueError as e:
            raise MalformedDateError(value, str(e)) from e

    raise MalformedDateError(value, f"unsupported type {type(value).__name__}")


def iter_days(start_date: date, end_date: date) -> Iterator[date]:
    """
    Yield every calendar day from start_date to end_date inclusive.

    Uses a fixed one-day step; weekends and market holidays are included.
    Yields nothing if end_date is before start_date.
    """
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def subtract_months(d: date, months: int) -> date:
    """
    Go back a number of calendar months, clamping the day-of-month.

    Example:
        >>> subtract_months(date(2023, 3, 31), 1)
        datetime.date(2023, 2, 28)
    """
    month_index = d.year * 12 + (d.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def subtract_years(d: date, years: int) -> date:
    """
    Go back a number of calendar years.

    Feb 29 maps to Feb 28 when the target year is not a leap year.
    """
    return subtract_months(d, years * 12)
