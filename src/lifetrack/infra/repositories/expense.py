"""SQLModel implementation of the Expense repository."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlmodel import select

from ...models.expense import Expense
from ..database import SessionFactory

logger = logging.getLogger("lifetrack.repositories.expense")


class SQLModelExpenseRepository:
    """SQLModel-based expense repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        """Retrieve an expense by ID."""
        with self.session_factory() as session:
            obj = session.get(Expense, expense_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Expense]:
        """List expenses, most recent first."""
        with self.session_factory() as session:
            statement = select(Expense).order_by(Expense.occurred_at.desc())  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def filter_by_date_range(self, start: datetime, end: datetime) -> list[Expense]:
        """Expenses with occurred_at inside [start, end], most recent first."""
        with self.session_factory() as session:
            statement = (
                select(Expense)
                .where(Expense.occurred_at >= start)
                .where(Expense.occurred_at <= end)
                .order_by(Expense.occurred_at.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_categories(self) -> list[str]:
        """Distinct category names used by recorded expenses."""
        with self.session_factory() as session:
            names = session.exec(select(Expense.category).distinct().order_by(Expense.category)).all()
            return list(names)

    def create(self, expense: Expense) -> Expense:
        """Create a new expense."""
        with self.session_factory() as session:
            session.add(expense)
            session.commit()
            session.refresh(expense)
            session.expunge(expense)
            return expense

    def update(self, expense: Expense) -> Expense:
        """Update an existing expense."""
        with self.session_factory() as session:
            merged = session.merge(expense)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, expense_id: int) -> None:
        """Delete an expense by ID."""
        with self.session_factory() as session:
            expense = session.get(Expense, expense_id)
            if expense:
                session.delete(expense)
                session.commit()
                logger.info("Deleted expense", extra={"expense_id": expense_id})
