"""Concrete repository implementations using SQLModel."""

from .budget import SQLModelBudgetRepository
from .expense import SQLModelExpenseRepository
from .habit import SQLModelHabitRepository
from .reminder import SQLModelReminderRepository
from .task import SQLModelTaskRepository

__all__ = [
    "SQLModelBudgetRepository",
    "SQLModelExpenseRepository",
    "SQLModelHabitRepository",
    "SQLModelReminderRepository",
    "SQLModelTaskRepository",
]
