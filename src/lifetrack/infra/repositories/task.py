"""SQLModel implementation of the Task repository."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from sqlmodel import select

from ...models.task import Task, TaskStatus
from ..database import SessionFactory

logger = logging.getLogger("lifetrack.repositories.task")


class SQLModelTaskRepository:
    """SQLModel-based task repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, task_id: int) -> Optional[Task]:
        """Retrieve a task by ID."""
        with self.session_factory() as session:
            obj = session.get(Task, task_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Task]:
        """List tasks by due date, earliest first."""
        with self.session_factory() as session:
            statement = select(Task).order_by(Task.due_at, Task.priority)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def filter_by_due_range(self, start: datetime, end: datetime) -> list[Task]:
        """Tasks whose due date falls inside [start, end]."""
        with self.session_factory() as session:
            statement = (
                select(Task)
                .where(Task.due_at >= start)
                .where(Task.due_at <= end)
                .order_by(Task.due_at)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def next_priority(self) -> int:
        """Priority slot after the last task, for appending new tasks."""
        with self.session_factory() as session:
            last = session.exec(select(Task.priority).order_by(Task.priority.desc())).first()  # type: ignore
            return 0 if last is None else last + 1

    def create(self, task: Task) -> Task:
        """Create a new task."""
        with self.session_factory() as session:
            session.add(task)
            session.commit()
            session.refresh(task)
            session.expunge(task)
            return task

    def update(self, task: Task) -> Task:
        """Update an existing task."""
        with self.session_factory() as session:
            merged = session.merge(task)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def save_all(self, tasks: Iterable[Task]) -> None:
        """Persist a batch of edited tasks in one transaction (used after reordering)."""
        with self.session_factory() as session:
            for task in tasks:
                session.merge(task)
            session.commit()

    def set_status(self, task_id: int, status: TaskStatus) -> Optional[Task]:
        """Set any status directly; transitions are unrestricted."""
        with self.session_factory() as session:
            task = session.get(Task, task_id)
            if task is None:
                return None
            task.status = status
            session.add(task)
            session.commit()
            session.refresh(task)
            session.expunge(task)
            return task

    def delete(self, task_id: int) -> None:
        """Delete a task by ID."""
        with self.session_factory() as session:
            task = session.get(Task, task_id)
            if task:
                session.delete(task)
                session.commit()
                logger.info("Deleted task", extra={"task_id": task_id})
