"""Pytest configuration and shared fixtures for LifeTrack tests.

Provides database fixtures, record factories and a fully wired application
context for testing analytics, repositories and the CLI without touching the
real app database.
"""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from lifetrack.config import TestingConfig
from lifetrack.context import create_app_context
from lifetrack.infra.database import create_session_factory
from lifetrack.infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelExpenseRepository,
    SQLModelHabitRepository,
    SQLModelReminderRepository,
    SQLModelTaskRepository,
)
from lifetrack.models import (
    BudgetCategory,
    BudgetPeriod,
    Expense,
    Habit,
    HabitCompletion,
    PaymentReminder,
    ReminderDueDate,
)


class RecordingNotifier:
    """NotificationScheduler double that remembers what it was asked to do."""

    def __init__(self):
        self.scheduled: list[int] = []
        self.cancelled: list[int] = []

    def schedule(self, reminder):
        self.scheduled.append(reminder.id)
        return [f"reminder_{reminder.id}"]

    def cancel(self, reminder):
        self.cancelled.append(reminder.id)

    def sync(self, reminders):
        return sum(len(self.schedule(r)) for r in reminders)

    def watch(self, load, *, interval_seconds=60):
        return self.sync(load())

    def start(self):
        pass

    def stop(self):
        pass


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what repositories expect."""
    return create_session_factory(db_engine)


@pytest.fixture
def habit_repo(session_factory):
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def task_repo(session_factory):
    return SQLModelTaskRepository(session_factory)


@pytest.fixture
def expense_repo(session_factory):
    return SQLModelExpenseRepository(session_factory)


@pytest.fixture
def budget_repo(session_factory):
    return SQLModelBudgetRepository(session_factory)


@pytest.fixture
def reminder_repo(session_factory):
    return SQLModelReminderRepository(session_factory)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app_context(tmp_path, notifier):
    """Application context on a temporary data directory."""
    return create_app_context(TestingConfig(tmp_path), notifier=notifier)


# =============================================================================
# In-memory record builders (not persisted)
# =============================================================================


@pytest.fixture
def make_habit():
    """Build a transient habit with completions at the given timestamps."""

    def _make(name: str = "Exercise", completions=(), **kwargs) -> Habit:
        habit = Habit(name=name, **kwargs)
        habit.completions = [HabitCompletion(completed_at=stamp) for stamp in completions]
        return habit

    return _make


@pytest.fixture
def make_expense():
    def _make(amount: float, category: str, occurred_at: datetime, **kwargs) -> Expense:
        return Expense(amount=amount, category=category, occurred_at=occurred_at, **kwargs)

    return _make


@pytest.fixture
def make_category():
    def _make(name: str, budget_amount: float, period: BudgetPeriod = BudgetPeriod.MONTH) -> BudgetCategory:
        return BudgetCategory(name=name, budget_amount=budget_amount, period=period)

    return _make


@pytest.fixture
def make_reminder():
    def _make(name: str = "Rent", due_dates=(), **kwargs) -> PaymentReminder:
        reminder = PaymentReminder(name=name, **kwargs)
        reminder.due_dates = [ReminderDueDate(due_at=due_at) for due_at in due_dates]
        return reminder

    return _make
