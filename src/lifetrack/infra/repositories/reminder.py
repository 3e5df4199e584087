"""SQLModel implementation of the PaymentReminder repository."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import select

from ...models.reminder import PaymentReminder, ReminderDueDate
from ..database import SessionFactory

logger = logging.getLogger("lifetrack.repositories.reminder")


class SQLModelReminderRepository:
    """SQLModel-based payment reminder repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, reminder_id: int) -> Optional[PaymentReminder]:
        """Retrieve a reminder (with due dates) by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(PaymentReminder)
                .options(selectinload(PaymentReminder.due_dates))
                .where(PaymentReminder.id == reminder_id)
            ).first()
            if obj:
                session.expunge_all()
            return obj

    def list_all(self) -> list[PaymentReminder]:
        """List reminders by name with due dates eagerly loaded."""
        with self.session_factory() as session:
            statement = (
                select(PaymentReminder)
                .options(selectinload(PaymentReminder.due_dates))
                .order_by(PaymentReminder.name)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(
        self,
        name: str,
        due_dates: Iterable[datetime],
        *,
        amount: float | None = None,
        is_recurring: bool = False,
    ) -> PaymentReminder:
        """Create a reminder with one or more due dates."""
        dates = sorted(due_dates)
        if not dates:
            raise ValueError("A payment reminder needs at least one due date")
        with self.session_factory() as session:
            reminder = PaymentReminder(name=name, amount=amount, is_recurring=is_recurring)
            reminder.due_dates = [ReminderDueDate(due_at=due_at) for due_at in dates]
            session.add(reminder)
            session.commit()
            session.refresh(reminder)
            # Load the children before detaching the graph.
            list(reminder.due_dates)
            session.expunge_all()
            return reminder

    def mark_cleared(self, reminder_id: int, *, when: datetime | None = None) -> Optional[PaymentReminder]:
        """Mark a reminder as paid for the current month."""
        with self.session_factory() as session:
            reminder = session.get(PaymentReminder, reminder_id)
            if reminder is None:
                return None
            reminder.last_cleared_at = when or datetime.now()
            session.add(reminder)
            session.commit()
            session.refresh(reminder)
            list(reminder.due_dates)
            session.expunge_all()
            return reminder

    def delete(self, reminder_id: int) -> None:
        """Delete a reminder and its due dates."""
        with self.session_factory() as session:
            reminder = session.get(PaymentReminder, reminder_id)
            if reminder:
                session.delete(reminder)
                session.commit()
                logger.info("Deleted payment reminder", extra={"reminder_id": reminder_id})
