"""Calendar-day helpers shared by the analytics services.

Naive datetimes are treated as local wall-clock time; aware datetimes are
converted to the local zone before their calendar day is taken.
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta
from typing import Union

DateLike = Union[date, datetime]

ONE_DAY = timedelta(days=1)
ONE_SECOND = timedelta(seconds=1)


def local_day(value: DateLike) -> date:
    """Return the local calendar day of a date or datetime."""

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def is_same_day(left: DateLike, right: DateLike) -> bool:
    return local_day(left) == local_day(right)


def start_of_day(value: DateLike) -> datetime:
    """Local midnight of the day containing ``value`` (naive)."""

    return datetime.combine(local_day(value), time.min)


def end_of_day(value: DateLike) -> datetime:
    """Last whole second of the day containing ``value``."""

    return start_of_day(value) + ONE_DAY - ONE_SECOND


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, clamping to the target month's length."""

    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(day.day, monthrange(year, month)[1]))


def month_bounds(day: date) -> tuple[date, date]:
    """First and last calendar day of the month containing ``day``."""

    first = day.replace(day=1)
    last = day.replace(day=monthrange(day.year, day.month)[1])
    return first, last
