"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .config import BaseConfig
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database
from .infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelExpenseRepository,
    SQLModelHabitRepository,
    SQLModelReminderRepository,
    SQLModelTaskRepository,
)
from .scheduler import ReminderNotifier
from .services.notifications import NotificationScheduler
from .services.quotes import QuoteProvider


@dataclass
class AppContext:
    """Centralized application context with repositories and collaborators."""

    config: BaseConfig
    session_factory: SessionFactory

    habit_repo: SQLModelHabitRepository
    task_repo: SQLModelTaskRepository
    expense_repo: SQLModelExpenseRepository
    budget_repo: SQLModelBudgetRepository
    reminder_repo: SQLModelReminderRepository

    notifier: NotificationScheduler
    quotes: QuoteProvider = field(default_factory=QuoteProvider)

    @property
    def first_weekday(self) -> int:
        return self.config.FIRST_WEEKDAY


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    notifier: Optional[NotificationScheduler] = None,
) -> AppContext:
    """Create the engine, initialize the schema and wire repositories."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    if notifier is None:
        notifier = ReminderNotifier(
            lead_days=config.REMINDER_LEAD_DAYS,
            hour=config.REMINDER_HOUR,
        )

    return AppContext(
        config=config,
        session_factory=session_factory,
        habit_repo=SQLModelHabitRepository(session_factory),
        task_repo=SQLModelTaskRepository(session_factory),
        expense_repo=SQLModelExpenseRepository(session_factory),
        budget_repo=SQLModelBudgetRepository(session_factory),
        reminder_repo=SQLModelReminderRepository(session_factory),
        notifier=notifier,
    )
