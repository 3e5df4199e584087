"""Resolution of named periods into concrete datetime windows."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..models.budget import BudgetCategory, BudgetPeriod
from .calendar_grid import SUNDAY
from .dates import ONE_DAY, ONE_SECOND, DateLike, add_months, local_day, start_of_day


@dataclass(frozen=True, slots=True)
class DateRange:
    """Closed interval [start, end]."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


def resolve_period(
    period: BudgetPeriod | str,
    *,
    now: datetime | None = None,
    start: DateLike | None = None,
    end: DateLike | None = None,
    first_weekday: int = SUNDAY,
) -> DateRange:
    """Return the window a period preset covers around ``now``.

    Custom periods keep the caller's bounds untouched; with a missing bound the
    window falls back to today, which is where a custom picker starts.
    """

    period = BudgetPeriod(period)
    now = now or datetime.now()
    today_start = start_of_day(now)

    if period is BudgetPeriod.CUSTOM:
        if start is not None and end is not None:
            return DateRange(_as_datetime(start), _as_datetime(end, end_of_day=True))
        period = BudgetPeriod.DAY

    if period is BudgetPeriod.DAY:
        return DateRange(today_start, today_start + ONE_DAY - ONE_SECOND)

    if period is BudgetPeriod.WEEK:
        back = (today_start.weekday() - first_weekday) % 7
        week_start = today_start - timedelta(days=back)
        return DateRange(week_start, week_start + timedelta(days=7) - ONE_SECOND)

    first = local_day(now).replace(day=1)
    month_start = start_of_day(first)
    return DateRange(month_start, start_of_day(add_months(first, 1)) - ONE_SECOND)


def category_window(
    category: BudgetCategory,
    *,
    now: datetime | None = None,
    first_weekday: int = SUNDAY,
) -> DateRange:
    """Window a budget category is measured over.

    Custom categories use their stored start and end dates; the other presets
    resolve around ``now``.
    """

    return resolve_period(
        category.period,
        now=now,
        start=category.start_date,
        end=category.end_date,
        first_weekday=first_weekday,
    )


def _as_datetime(value: DateLike, *, end_of_day: bool = False) -> datetime:
    # Bare dates from a date picker cover the whole day.
    if isinstance(value, datetime):
        return value
    moment = start_of_day(value)
    return moment + ONE_DAY - ONE_SECOND if end_of_day else moment


__all__ = ["DateRange", "category_window", "resolve_period"]
