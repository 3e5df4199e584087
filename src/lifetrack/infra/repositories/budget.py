"""SQLModel implementation of the BudgetCategory repository."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from sqlmodel import select

from ...models.budget import BudgetCategory, BudgetPeriod
from ..database import SessionFactory

logger = logging.getLogger("lifetrack.repositories.budget")


class SQLModelBudgetRepository:
    """SQLModel-based budget category repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, category_id: int) -> Optional[BudgetCategory]:
        """Retrieve a budget category by ID."""
        with self.session_factory() as session:
            obj = session.get(BudgetCategory, category_id)
            if obj:
                session.expunge(obj)
            return obj

    def get_by_name(self, name: str, period: BudgetPeriod) -> Optional[BudgetCategory]:
        """Names are unique per period type."""
        with self.session_factory() as session:
            obj = session.exec(
                select(BudgetCategory)
                .where(BudgetCategory.name == name)
                .where(BudgetCategory.period == period)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, period: BudgetPeriod | None = None) -> list[BudgetCategory]:
        """List categories sorted by name, optionally for one period type."""
        with self.session_factory() as session:
            statement = select(BudgetCategory).order_by(BudgetCategory.name)  # type: ignore
            if period is not None:
                statement = statement.where(BudgetCategory.period == period)
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def upsert(
        self,
        name: str,
        budget_amount: float,
        *,
        period: BudgetPeriod = BudgetPeriod.MONTH,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> BudgetCategory:
        """Create the category for (name, period) or update its budget amount."""
        if budget_amount < 0:
            raise ValueError("Budget amount cannot be negative")
        with self.session_factory() as session:
            category = session.exec(
                select(BudgetCategory)
                .where(BudgetCategory.name == name)
                .where(BudgetCategory.period == period)
            ).first()
            if category is None:
                category = BudgetCategory(name=name, period=period)
            category.budget_amount = budget_amount
            if period is BudgetPeriod.CUSTOM:
                category.start_date = start_date
                category.end_date = end_date
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category

    def delete(self, category_id: int) -> None:
        """Delete a budget category by ID; expenses keep their category text."""
        with self.session_factory() as session:
            category = session.get(BudgetCategory, category_id)
            if category:
                session.delete(category)
                session.commit()
                logger.info("Deleted budget category", extra={"category_id": category_id})
