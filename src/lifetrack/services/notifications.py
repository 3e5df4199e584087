"""Notification capability consumed by whoever creates or clears reminders."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, Protocol

from ..models.reminder import PaymentReminder


class NotificationScheduler(Protocol):
    """Schedules and cancels local alerts for payment reminders."""

    def schedule(self, reminder: PaymentReminder) -> list[str]:  # pragma: no cover - interface
        """Queue alerts for the reminder's due dates and return their identifiers."""
        ...

    def cancel(self, reminder: PaymentReminder) -> None:  # pragma: no cover - interface
        """Drop every pending alert of the reminder."""
        ...

    def sync(self, reminders: Iterable[PaymentReminder]) -> int:  # pragma: no cover - interface
        """Make pending alerts mirror ``reminders`` and return how many are queued."""
        ...

    def watch(
        self, load: Callable[[], Iterable[PaymentReminder]], *, interval_seconds: int = 60
    ) -> int:  # pragma: no cover - interface
        """Sync from ``load`` now and keep re-reading it every ``interval_seconds``."""
        ...

    def start(self) -> None:  # pragma: no cover - interface
        ...

    def stop(self) -> None:  # pragma: no cover - interface
        ...


def notification_id(reminder: PaymentReminder, moment: datetime) -> str:
    """Stable job identifier for one alert of one reminder."""

    return f"reminder_{reminder.id}_{int(moment.timestamp())}"


def notification_message(reminder: PaymentReminder, due_at: datetime) -> str:
    amount = f" ({reminder.amount:,.2f})" if reminder.amount else ""
    return f"{reminder.name}{amount} is due on {due_at:%d %b %Y}."
