"""SQLModel implementation of the Habit repository."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import selectinload
from sqlmodel import select

from ...models.habit import Habit, HabitCompletion
from ...services.dates import ONE_DAY, start_of_day
from ...services.habits import compute_streaks
from ..database import SessionFactory

logger = logging.getLogger("lifetrack.repositories.habit")


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit (with completions) by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).options(selectinload(Habit.completions)).where(Habit.id == habit_id)
            ).first()
            if obj:
                session.expunge_all()
            return obj

    def get_by_name(self, name: str) -> Optional[Habit]:
        """Retrieve a habit (with completions) by name."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).options(selectinload(Habit.completions)).where(Habit.name == name)
            ).first()
            if obj:
                session.expunge_all()
            return obj

    def list_all(self, *, include_archived: bool = False) -> list[Habit]:
        """List habits newest first, completions eagerly loaded."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .options(selectinload(Habit.completions))
                .order_by(Habit.created_at.desc())  # type: ignore
            )
            if not include_archived:
                statement = statement.where(Habit.is_archived == False)  # noqa: E712

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update(self, habit: Habit) -> Habit:
        """Persist changes to an existing habit's own fields."""
        with self.session_factory() as session:
            merged = session.merge(habit)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def set_archived(self, habit_id: int, archived: bool = True) -> Optional[Habit]:
        """Archive or restore a habit; archived habits stop counting as active."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit is None:
                return None
            habit.is_archived = archived
            habit.is_active = not archived
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: int) -> None:
        """Delete a habit and, by cascade, all of its completions."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit:
                session.delete(habit)
                session.commit()
                logger.info("Deleted habit", extra={"habit_id": habit_id})

    # Completion operations
    def add_completion(self, habit_id: int, completed_at: datetime | None = None) -> HabitCompletion:
        """Record a completion; same-day duplicates are tolerated."""
        completed_at = completed_at or datetime.now()
        with self.session_factory() as session:
            completion = HabitCompletion(habit_id=habit_id, completed_at=completed_at)
            session.add(completion)
            habit = session.get(Habit, habit_id)
            if habit is not None and (
                habit.last_completed_at is None or completed_at > habit.last_completed_at
            ):
                habit.last_completed_at = completed_at
                session.add(habit)
            session.commit()
            session.refresh(completion)
            session.expunge(completion)
            return completion

    def get_completions(
        self, habit_id: int, start_date: date | None = None, end_date: date | None = None
    ) -> list[HabitCompletion]:
        """Completions for a habit, optionally restricted to [start_date, end_date] days."""
        with self.session_factory() as session:
            statement = select(HabitCompletion).where(HabitCompletion.habit_id == habit_id)
            if start_date is not None:
                statement = statement.where(HabitCompletion.completed_at >= start_of_day(start_date))
            if end_date is not None:
                statement = statement.where(
                    HabitCompletion.completed_at < start_of_day(end_date) + ONE_DAY
                )
            statement = statement.order_by(HabitCompletion.completed_at)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def toggle_completion(self, habit_id: int, on: date | None = None) -> bool:
        """Flip the completion state of a habit for one day.

        Returns True when the day is completed after the call.
        """
        day = on or date.today()
        day_start = start_of_day(day)
        with self.session_factory() as session:
            same_day = list(
                session.exec(
                    select(HabitCompletion)
                    .where(HabitCompletion.habit_id == habit_id)
                    .where(HabitCompletion.completed_at >= day_start)
                    .where(HabitCompletion.completed_at < day_start + ONE_DAY)
                ).all()
            )
            if same_day:
                for completion in same_day:
                    session.delete(completion)
                completed = False
            else:
                stamp = datetime.now() if day == date.today() else day_start
                session.add(HabitCompletion(habit_id=habit_id, completed_at=stamp))
                completed = True
            session.flush()

            habit = session.get(Habit, habit_id)
            if habit is not None:
                latest = session.exec(
                    select(HabitCompletion.completed_at)
                    .where(HabitCompletion.habit_id == habit_id)
                    .order_by(HabitCompletion.completed_at.desc())  # type: ignore
                ).first()
                habit.last_completed_at = latest
                session.add(habit)
            session.commit()
            return completed

    def get_streaks(self, habit_id: int, *, today: date | None = None) -> tuple[int, int]:
        """Return (current, longest) streak for a habit."""
        with self.session_factory() as session:
            stamps = session.exec(
                select(HabitCompletion.completed_at).where(HabitCompletion.habit_id == habit_id)
            ).all()
            return compute_streaks(stamps, today=today)
