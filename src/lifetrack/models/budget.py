"""Budgeting tables."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class BudgetPeriod(str, Enum):
    """Named date-range presets used to scope budgets and expense queries."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        return "period" if self is BudgetPeriod.CUSTOM else self.value


class BudgetCategory(SQLModel, table=True):
    """Spending allowance for one category over one kind of period."""

    __tablename__: ClassVar[str] = "budget_category"
    __table_args__ = (UniqueConstraint("name", "period", name="uq_budget_category_name_period"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=64, index=True)
    budget_amount: float = Field(default=0.0, nullable=False)
    period: BudgetPeriod = Field(default=BudgetPeriod.MONTH, nullable=False)
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)
