"""SQLModel table exports."""

from .budget import BudgetCategory, BudgetPeriod
from .expense import Expense
from .habit import Habit, HabitCompletion, HabitFrequency
from .reminder import PaymentReminder, ReminderDueDate
from .task import Task, TaskStatus

__all__ = [
    "BudgetCategory",
    "BudgetPeriod",
    "Expense",
    "Habit",
    "HabitCompletion",
    "HabitFrequency",
    "PaymentReminder",
    "ReminderDueDate",
    "Task",
    "TaskStatus",
]
