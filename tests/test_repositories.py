"""Repository tests against a temporary SQLite database."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from lifetrack.models import BudgetPeriod, Expense, Habit, Task, TaskStatus


class TestHabitRepository:
    def test_create_and_get(self, habit_repo):
        habit = habit_repo.create(Habit(name="Read"))
        assert habit.id is not None

        loaded = habit_repo.get_by_id(habit.id)
        assert loaded.name == "Read"
        assert loaded.completions == []
        assert habit_repo.get_by_name("Read").id == habit.id
        assert habit_repo.get_by_id(999) is None

    def test_add_completion_updates_last_completed(self, habit_repo):
        habit = habit_repo.create(Habit(name="Walk"))
        stamp = datetime(2024, 3, 14, 7, 30)
        habit_repo.add_completion(habit.id, stamp)
        habit_repo.add_completion(habit.id, stamp - timedelta(days=3))

        loaded = habit_repo.get_by_id(habit.id)
        assert len(loaded.completions) == 2
        assert loaded.last_completed_at == stamp

    def test_toggle_completion_twice_restores_state(self, habit_repo):
        habit = habit_repo.create(Habit(name="Stretch"))
        day = date(2024, 3, 10)

        assert habit_repo.toggle_completion(habit.id, day) is True
        assert len(habit_repo.get_completions(habit.id, day, day)) == 1

        assert habit_repo.toggle_completion(habit.id, day) is False
        assert habit_repo.get_completions(habit.id) == []
        assert habit_repo.get_by_id(habit.id).last_completed_at is None

    def test_toggle_today_uses_current_time(self, habit_repo):
        habit = habit_repo.create(Habit(name="Meditate"))
        habit_repo.toggle_completion(habit.id)
        completions = habit_repo.get_completions(habit.id)
        assert completions[0].completed_at.date() == date.today()

    def test_get_completions_filters_by_day(self, habit_repo):
        habit = habit_repo.create(Habit(name="Run"))
        for day in (1, 5, 9):
            habit_repo.add_completion(habit.id, datetime(2024, 3, day, 23, 0))

        rows = habit_repo.get_completions(habit.id, date(2024, 3, 5), date(2024, 3, 9))
        assert [r.completed_at.day for r in rows] == [5, 9]

    def test_get_streaks(self, habit_repo):
        habit = habit_repo.create(Habit(name="Journal"))
        today = date(2024, 3, 15)
        for offset in range(3):
            habit_repo.add_completion(habit.id, datetime(2024, 3, 15 - offset, 21))
        habit_repo.add_completion(habit.id, datetime(2024, 3, 15, 22))

        assert habit_repo.get_streaks(habit.id, today=today) == (3, 3)

    def test_delete_cascades_to_completions(self, habit_repo):
        habit = habit_repo.create(Habit(name="Floss"))
        habit_repo.add_completion(habit.id, datetime(2024, 3, 1))
        habit_repo.add_completion(habit.id, datetime(2024, 3, 2))

        habit_repo.delete(habit.id)

        assert habit_repo.get_by_id(habit.id) is None
        assert habit_repo.get_completions(habit.id) == []

    def test_archived_habits_hidden_by_default(self, habit_repo):
        keep = habit_repo.create(Habit(name="Keep", created_at=datetime(2024, 1, 1)))
        newer = habit_repo.create(Habit(name="Newer", created_at=datetime(2024, 2, 1)))
        archived = habit_repo.create(Habit(name="Old"))
        habit_repo.set_archived(archived.id)

        assert [h.id for h in habit_repo.list_all()] == [newer.id, keep.id]
        assert len(habit_repo.list_all(include_archived=True)) == 3
        assert habit_repo.get_by_id(archived.id).is_active is False

    def test_update_renames(self, habit_repo):
        habit = habit_repo.create(Habit(name="Typo"))
        habit.name = "Fixed"
        habit_repo.update(habit)
        assert habit_repo.get_by_id(habit.id).name == "Fixed"


class TestTaskRepository:
    def test_filter_by_due_range(self, task_repo):
        task_repo.create(Task(title="Early", due_at=datetime(2024, 3, 1, 9)))
        task_repo.create(Task(title="Inside", due_at=datetime(2024, 3, 13, 9)))
        task_repo.create(Task(title="Late", due_at=datetime(2024, 3, 30, 9)))

        rows = task_repo.filter_by_due_range(datetime(2024, 3, 10), datetime(2024, 3, 16, 23, 59, 59))
        assert [t.title for t in rows] == ["Inside"]

    def test_next_priority(self, task_repo):
        assert task_repo.next_priority() == 0
        task_repo.create(Task(title="A", priority=0))
        task_repo.create(Task(title="B", priority=4))
        assert task_repo.next_priority() == 5

    def test_set_status_any_transition(self, task_repo):
        task = task_repo.create(Task(title="Write report"))
        assert task_repo.set_status(task.id, TaskStatus.COMPLETED).status == TaskStatus.COMPLETED
        assert task_repo.set_status(task.id, TaskStatus.NOT_STARTED).status == TaskStatus.NOT_STARTED
        assert task_repo.set_status(12345, TaskStatus.COMPLETED) is None

    def test_save_all_persists_priorities(self, task_repo):
        a = task_repo.create(Task(title="A", priority=0))
        b = task_repo.create(Task(title="B", priority=1))
        a.priority, b.priority = 1, 0
        task_repo.save_all([a, b])
        assert task_repo.get_by_id(a.id).priority == 1
        assert task_repo.get_by_id(b.id).priority == 0

    def test_delete(self, task_repo):
        task = task_repo.create(Task(title="Gone"))
        task_repo.delete(task.id)
        assert task_repo.get_by_id(task.id) is None


class TestExpenseRepository:
    def test_filter_by_date_range_and_categories(self, expense_repo):
        expense_repo.create(Expense(amount=10, category="Food", occurred_at=datetime(2024, 3, 2)))
        expense_repo.create(Expense(amount=20, category="Rent", occurred_at=datetime(2024, 3, 5)))
        expense_repo.create(Expense(amount=30, category="Food", occurred_at=datetime(2024, 4, 1)))

        march = expense_repo.filter_by_date_range(datetime(2024, 3, 1), datetime(2024, 3, 31, 23, 59, 59))
        assert [e.amount for e in march] == [20, 10]
        assert expense_repo.list_categories() == ["Food", "Rent"]

    def test_update_and_delete(self, expense_repo):
        expense = expense_repo.create(Expense(amount=10, category="Food"))
        expense.amount = 12.5
        expense_repo.update(expense)
        assert expense_repo.get_by_id(expense.id).amount == 12.5

        expense_repo.delete(expense.id)
        assert expense_repo.list_all() == []


class TestBudgetRepository:
    def test_upsert_creates_then_updates(self, budget_repo):
        first = budget_repo.upsert("Food", 1000)
        second = budget_repo.upsert("Food", 1200)
        assert first.id == second.id
        assert budget_repo.get_by_name("Food", BudgetPeriod.MONTH).budget_amount == 1200

    def test_same_name_in_different_periods(self, budget_repo):
        budget_repo.upsert("Food", 1000, period=BudgetPeriod.MONTH)
        budget_repo.upsert("Food", 250, period=BudgetPeriod.WEEK)
        assert len(budget_repo.list_all()) == 2
        assert [c.budget_amount for c in budget_repo.list_all(BudgetPeriod.WEEK)] == [250]

    def test_custom_period_stores_bounds(self, budget_repo):
        category = budget_repo.upsert(
            "Trip", 5000, period=BudgetPeriod.CUSTOM,
            start_date=date(2024, 5, 1), end_date=date(2024, 5, 10),
        )
        assert (category.start_date, category.end_date) == (date(2024, 5, 1), date(2024, 5, 10))

    def test_negative_amount_rejected(self, budget_repo):
        with pytest.raises(ValueError):
            budget_repo.upsert("Food", -1)

    def test_delete(self, budget_repo):
        category = budget_repo.upsert("Food", 10)
        budget_repo.delete(category.id)
        assert budget_repo.get_by_id(category.id) is None


class TestReminderRepository:
    def test_create_sorts_due_dates(self, reminder_repo):
        reminder = reminder_repo.create(
            "Rent", [datetime(2024, 4, 1), datetime(2024, 3, 1)], amount=1200, is_recurring=True
        )
        loaded = reminder_repo.get_by_id(reminder.id)
        assert loaded.dates == [datetime(2024, 3, 1), datetime(2024, 4, 1)]
        assert loaded.is_recurring is True

    def test_create_requires_a_date(self, reminder_repo):
        with pytest.raises(ValueError):
            reminder_repo.create("Nothing", [])

    def test_mark_cleared(self, reminder_repo):
        reminder = reminder_repo.create("Phone", [datetime(2024, 3, 20)])
        when = datetime(2024, 3, 18, 12)
        assert reminder_repo.mark_cleared(reminder.id, when=when).last_cleared_at == when
        assert reminder_repo.mark_cleared(999) is None

    def test_delete_removes_due_dates(self, reminder_repo):
        reminder = reminder_repo.create("Gas", [datetime(2024, 3, 20), datetime(2024, 4, 20)])
        reminder_repo.delete(reminder.id)
        assert reminder_repo.list_all() == []


class TestNaiveTimestamps:
    """Local wall-clock timestamps are stored and returned without a timezone."""

    def test_habit_completion_round_trip(self, app_context):
        stamp = datetime(2024, 3, 14, 7, 30, 15)
        habit = app_context.habit_repo.create(Habit(name="Run", created_at=stamp))
        app_context.habit_repo.add_completion(habit.id, stamp)

        loaded = app_context.habit_repo.get_by_id(habit.id)
        assert loaded.created_at == stamp
        assert loaded.created_at.tzinfo is None
        assert loaded.completions[0].completed_at == stamp
        assert loaded.last_completed_at == stamp

    def test_expense_task_and_reminder_round_trip(self, app_context):
        stamp = datetime(2024, 3, 14, 21, 5)
        expense = app_context.expense_repo.create(Expense(amount=9.5, category="Food", occurred_at=stamp))
        task = app_context.task_repo.create(Task(title="Pay", due_at=stamp))
        reminder = app_context.reminder_repo.create("Rent", [stamp])
        app_context.reminder_repo.mark_cleared(reminder.id, when=stamp)

        assert app_context.expense_repo.get_by_id(expense.id).occurred_at == stamp
        assert app_context.task_repo.get_by_id(task.id).due_at.tzinfo is None
        loaded = app_context.reminder_repo.get_by_id(reminder.id)
        assert loaded.dates == [stamp]
        assert loaded.last_cleared_at == stamp

    def test_range_queries_bind_naive_bounds(self, app_context):
        app_context.expense_repo.create(
            Expense(amount=3, category="Food", occurred_at=datetime(2024, 3, 14, 12))
        )
        rows = app_context.expense_repo.filter_by_date_range(
            datetime(2024, 3, 14), datetime(2024, 3, 14, 23, 59, 59)
        )
        assert [e.amount for e in rows] == [3]
