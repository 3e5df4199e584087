"""Month grids for calendar-style rendering of completions and reminders."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from .dates import DateLike, add_months, local_day, month_bounds

SUNDAY = calendar.SUNDAY
MONDAY = calendar.MONDAY

Cell = Optional[date]


@dataclass(frozen=True, slots=True)
class CalendarCell:
    """One grid slot; ``day`` is None for padding cells."""

    day: Cell
    marked: bool = False

    @property
    def is_blank(self) -> bool:
        return self.day is None


def leading_blanks(first_of_month: date, first_weekday: int = SUNDAY) -> int:
    return (first_of_month.weekday() - first_weekday + 7) % 7


def month_grid(reference: DateLike, *, first_weekday: int = SUNDAY) -> list[Cell]:
    """Cells for the month containing ``reference``, padded to whole weeks."""

    first, last = month_bounds(local_day(reference))
    cells: list[Cell] = [None] * leading_blanks(first, first_weekday)
    cells.extend(first + timedelta(days=offset) for offset in range(last.day))
    cells.extend([None] * (-len(cells) % 7))
    return cells


def month_weeks(reference: DateLike, *, first_weekday: int = SUNDAY) -> list[list[Cell]]:
    cells = month_grid(reference, first_weekday=first_weekday)
    return [cells[i : i + 7] for i in range(0, len(cells), 7)]


def weekday_labels(first_weekday: int = SUNDAY, *, width: int = 2) -> list[str]:
    """Column headers in grid order, e.g. ``["Su", "Mo", ...]``."""

    names = calendar.day_abbr
    return [names[(first_weekday + i) % 7][:width] for i in range(7)]


def mark_weeks(weeks: Iterable[Iterable[Cell]], marked: Iterable[DateLike]) -> list[list[CalendarCell]]:
    """Flag every cell whose local calendar day appears in ``marked``."""

    marked_days = {local_day(value) for value in marked}
    return [
        [CalendarCell(day=cell, marked=cell is not None and cell in marked_days) for cell in week]
        for week in weeks
    ]


def shift_month(reference: DateLike, offset: int) -> date:
    """First day of the month ``offset`` months away (negative for the past)."""

    return add_months(local_day(reference).replace(day=1), offset)


__all__ = [
    "MONDAY",
    "SUNDAY",
    "CalendarCell",
    "leading_blanks",
    "mark_weeks",
    "month_grid",
    "month_weeks",
    "shift_month",
    "weekday_labels",
]
