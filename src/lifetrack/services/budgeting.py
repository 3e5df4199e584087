"""Budgeting domain services: spend aggregation, insights and chart data."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

from ..models.budget import BudgetCategory, BudgetPeriod
from ..models.expense import Expense
from .calendar_grid import SUNDAY
from .periods import DateRange, category_window

WARNING_PERCENT = 80
ON_TRACK_MESSAGE = "You're managing your budget well!"


@dataclass(frozen=True, slots=True)
class ChartSlice:
    """Total spend of one category, ready for a pie/donut chart."""

    category: str
    amount: float


@dataclass(frozen=True, slots=True)
class CategorySpend:
    """Spend against budget for one category."""

    name: str
    budget: float
    spent: float

    @property
    def percent(self) -> int:
        """Truncated percentage of the budget used; 0 when there is no budget."""
        if self.budget <= 0:
            return 0
        return int(self.spent * 100 / self.budget)

    @property
    def remaining(self) -> float:
        return round(self.budget - self.spent, 2)


def expenses_in_range(expenses: Iterable[Expense], window: DateRange) -> list[Expense]:
    return [e for e in expenses if window.start <= e.occurred_at <= window.end]


def total_spent(expenses: Iterable[Expense], window: DateRange) -> float:
    return round(sum(e.amount for e in expenses_in_range(expenses, window)), 2)


def spent_for_category(
    category: BudgetCategory | str, expenses: Iterable[Expense], window: DateRange
) -> float:
    name = category if isinstance(category, str) else category.name
    return round(
        sum(e.amount for e in expenses_in_range(expenses, window) if e.category == name), 2
    )


def spending_by_category(expenses: Iterable[Expense], window: DateRange) -> dict[str, float]:
    """Sum of in-range amounts for every category name present, in encounter order."""

    totals: dict[str, float] = {}
    for expense in expenses_in_range(expenses, window):
        totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount
    return {name: round(amount, 2) for name, amount in totals.items()}


def spent_by_category(
    categories: Iterable[BudgetCategory],
    expenses: Iterable[Expense],
    window: DateRange | None = None,
    *,
    now: datetime | None = None,
    first_weekday: int = SUNDAY,
) -> list[CategorySpend]:
    """Spend for each budget category, keeping the categories' order.

    Without a ``window`` every category is measured over its own period, so
    custom categories count the expenses between their stored dates.
    """

    expenses = list(expenses)
    if window is not None:
        totals = spending_by_category(expenses, window)
        return [
            CategorySpend(name=c.name, budget=c.budget_amount, spent=totals.get(c.name, 0.0))
            for c in categories
        ]
    return [
        CategorySpend(
            name=c.name,
            budget=c.budget_amount,
            spent=spent_for_category(
                c, expenses, category_window(c, now=now, first_weekday=first_weekday)
            ),
        )
        for c in categories
    ]


def categories_for_period(
    categories: Iterable[BudgetCategory], period: BudgetPeriod | str
) -> list[BudgetCategory]:
    period = BudgetPeriod(period)
    return [c for c in categories if c.period == period]


def highest_spending(spends: Sequence[CategorySpend]) -> CategorySpend | None:
    """Top category by spend; ties go to the alphabetically first name."""

    best: CategorySpend | None = None
    for spend in spends:
        if best is None or spend.spent > best.spent:
            best = spend
        elif spend.spent == best.spent and spend.name.casefold() < best.name.casefold():
            best = spend
    return best


def generate_insights(
    categories: Iterable[BudgetCategory],
    expenses: Iterable[Expense],
    window: DateRange | None = None,
    *,
    period_label: str = "month",
    now: datetime | None = None,
    first_weekday: int = SUNDAY,
) -> list[str]:
    """Human-readable budget tips for the window.

    Warns about every category at or above 80% of its budget, then names the
    highest spending category. Falls back to a single encouraging message.
    Without a ``window`` each category uses its own period (see
    ``spent_by_category``).
    """

    spends = spent_by_category(
        categories, expenses, window, now=now, first_weekday=first_weekday
    )
    tips = [
        f"You are {s.percent}% of the way to your '{s.name}' budget for this {period_label}."
        for s in spends
        if s.budget > 0 and s.percent >= WARNING_PERCENT
    ]
    top = highest_spending(spends)
    if top is not None and top.spent > 0:
        tips.append(f"Your highest spending category is '{top.name}'.")
    return tips or [ON_TRACK_MESSAGE]


def chart_data(expenses: Iterable[Expense], window: DateRange) -> list[ChartSlice]:
    """Group in-range spend by category, dropping empty or negative groups."""

    return [
        ChartSlice(category=name, amount=amount)
        for name, amount in spending_by_category(expenses, window).items()
        if amount > 0
    ]


__all__ = [
    "ON_TRACK_MESSAGE",
    "WARNING_PERCENT",
    "CategorySpend",
    "ChartSlice",
    "categories_for_period",
    "chart_data",
    "expenses_in_range",
    "generate_insights",
    "highest_spending",
    "spending_by_category",
    "spent_by_category",
    "spent_for_category",
    "total_spent",
]
