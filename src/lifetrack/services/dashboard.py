"""Today's progress summary shown on the dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from ..models.budget import BudgetCategory
from ..models.expense import Expense
from ..models.habit import Habit
from ..models.task import Task
from .budgeting import total_spent
from .habits import is_completed_on
from .periods import resolve_period
from .tasks import completion_ratio


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    habits_done: int
    habits_total: int
    tasks_done: int
    tasks_total: int
    budget_spent: float
    budget_total: float

    @property
    def habits_progress(self) -> float:
        return self.habits_done / self.habits_total if self.habits_total else 0.0

    @property
    def tasks_progress(self) -> float:
        return self.tasks_done / self.tasks_total if self.tasks_total else 0.0

    @property
    def budget_progress(self) -> float:
        if self.budget_total <= 0:
            return 0.0
        return min(self.budget_spent / self.budget_total, 1.0)


def build_summary(
    habits: Iterable[Habit],
    tasks: Iterable[Task],
    categories: Iterable[BudgetCategory],
    expenses: Iterable[Expense],
    *,
    now: datetime | None = None,
) -> DashboardSummary:
    """Habits done today, tasks due today that are completed, and this month's spend vs budget."""

    now = now or datetime.now()
    today = resolve_period("day", now=now)
    month = resolve_period("month", now=now)

    active = [h for h in habits if h.is_active and not h.is_archived]
    habits_done = sum(1 for h in active if is_completed_on(h, now))
    tasks_done, tasks_total = completion_ratio(t for t in tasks if today.contains(t.due_at))

    return DashboardSummary(
        habits_done=habits_done,
        habits_total=len(active),
        tasks_done=tasks_done,
        tasks_total=tasks_total,
        budget_spent=total_spent(expenses, month),
        budget_total=round(sum(c.budget_amount for c in categories), 2),
    )
