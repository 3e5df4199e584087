"""Upcoming payment reminders and their notification schedule."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from ..models.reminder import PaymentReminder
from .dates import add_months, local_day


@dataclass(frozen=True, slots=True)
class UpcomingReminder:
    """A reminder paired with the due date that makes it upcoming."""

    reminder: PaymentReminder
    due_at: datetime

    def days_until(self, today: date) -> int:
        return (local_day(self.due_at) - today).days


def _roll_forward(due_at: datetime, today: date) -> datetime:
    """Move a monthly due date to its first occurrence on or after ``today``."""

    months = (today.year - due_at.year) * 12 + (today.month - due_at.month)
    months = max(months, 0)
    candidate = add_months(due_at.date(), months)
    if candidate < today:
        months += 1
    shifted = add_months(due_at.date(), months)
    return datetime.combine(shifted, due_at.time())


def next_due_date(reminder: PaymentReminder, *, now: datetime | None = None) -> Optional[datetime]:
    """Earliest due date falling today or later.

    Recurring reminders repeat monthly on the day of each stored date.
    """

    now = now or datetime.now()
    today = local_day(now)
    candidates = []
    for due_at in reminder.dates:
        if local_day(due_at) >= today:
            candidates.append(due_at)
        elif reminder.is_recurring:
            candidates.append(_roll_forward(due_at, today))
    return min(candidates, default=None)


def is_cleared_this_month(reminder: PaymentReminder, *, now: datetime | None = None) -> bool:
    now = now or datetime.now()
    cleared = reminder.last_cleared_at
    return cleared is not None and (cleared.year, cleared.month) == (now.year, now.month)


def upcoming_reminders(
    reminders: Iterable[PaymentReminder], *, now: datetime | None = None
) -> list[UpcomingReminder]:
    """Reminders with a due date ahead that were not cleared this month, soonest first."""

    now = now or datetime.now()
    upcoming = []
    for reminder in reminders:
        if is_cleared_this_month(reminder, now=now):
            continue
        due_at = next_due_date(reminder, now=now)
        if due_at is not None:
            upcoming.append(UpcomingReminder(reminder=reminder, due_at=due_at))
    return sorted(upcoming, key=lambda item: (item.due_at, item.reminder.name))


def notification_schedule(
    reminder: PaymentReminder,
    *,
    now: datetime | None = None,
    lead_days: int = 2,
    at: time = time(9, 0),
) -> list[tuple[datetime, datetime]]:
    """(alert moment, due date) pairs from ``lead_days`` before each due date up to the day itself.

    Moments already in the past are skipped. When two due dates share an alert
    moment, the alert announces the earlier one.
    """

    now = now or datetime.now()
    today = local_day(now)
    schedule: dict[datetime, datetime] = {}
    for due_at in reminder.dates:
        if reminder.is_recurring and local_day(due_at) < today:
            due_at = _roll_forward(due_at, today)
        for offset in range(lead_days, -1, -1):
            moment = datetime.combine(local_day(due_at) - timedelta(days=offset), at)
            if moment < now:
                continue
            if moment not in schedule or due_at < schedule[moment]:
                schedule[moment] = due_at
    return sorted(schedule.items())


def notification_times(
    reminder: PaymentReminder,
    *,
    now: datetime | None = None,
    lead_days: int = 2,
    at: time = time(9, 0),
) -> list[datetime]:
    return [
        moment
        for moment, _ in notification_schedule(reminder, now=now, lead_days=lead_days, at=at)
    ]


__all__ = [
    "UpcomingReminder",
    "is_cleared_this_month",
    "next_due_date",
    "notification_schedule",
    "notification_times",
    "upcoming_reminders",
]
