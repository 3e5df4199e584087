"""Habit service helpers for streaks and completion state."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from ..models.habit import Habit
from .dates import DateLike, is_same_day, local_day

SEEDLING = "seedling"
SPROUT = "sprout"
TREE = "tree"


def completion_days(completions: Iterable[DateLike], *, today: date | None = None) -> list[date]:
    """Distinct local completion days in ascending order, ignoring days after ``today``."""

    today = today or date.today()
    return sorted({day for day in map(local_day, completions) if day <= today})


def compute_streaks(completions: Iterable[DateLike], *, today: date | None = None) -> tuple[int, int]:
    """Return (current_streak, longest_streak) from completion timestamps.

    The current streak survives a missing "today" as long as yesterday was
    completed; it only breaks once a whole day has been skipped.
    """

    today = today or date.today()
    days = completion_days(completions, today=today)
    if not days:
        return 0, 0

    # Longest streak: sweep through sorted days, counting consecutive runs.
    longest = 1
    run = 1
    for previous, day in zip(days, days[1:]):
        if day - previous == timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1

    # Current streak: anchor on today, else yesterday, then walk backwards.
    present = set(days)
    cursor = today if today in present else today - timedelta(days=1)
    current = 0
    while cursor in present:
        current += 1
        cursor -= timedelta(days=1)

    return current, longest


def habit_streaks(habit: Habit, *, today: date | None = None) -> tuple[int, int]:
    """Streaks for a habit whose completions are loaded."""

    return compute_streaks((c.completed_at for c in habit.completions), today=today)


def is_completed_on(habit: Habit, day: DateLike) -> bool:
    return any(is_same_day(c.completed_at, day) for c in habit.completions)


def growth_stage(current_streak: int) -> str:
    """Map a streak onto the plant that visualises it."""

    if current_streak <= 2:
        return SEEDLING
    if current_streak <= 6:
        return SPROUT
    return TREE


__all__ = [
    "SEEDLING",
    "SPROUT",
    "TREE",
    "completion_days",
    "compute_streaks",
    "growth_stage",
    "habit_streaks",
    "is_completed_on",
]
