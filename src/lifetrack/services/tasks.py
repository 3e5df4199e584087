"""Task list helpers: filtering, status changes and manual ordering."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Sequence

from ..models.task import Task, TaskStatus
from .periods import DateRange


class StatusFilter(str, Enum):
    ALL = "All"
    NOT_STARTED = TaskStatus.NOT_STARTED.value
    IN_PROGRESS = TaskStatus.IN_PROGRESS.value
    COMPLETED = TaskStatus.COMPLETED.value

    def matches(self, task: Task) -> bool:
        return self is StatusFilter.ALL or task.status == TaskStatus(self.value)


def filter_tasks(
    tasks: Iterable[Task],
    *,
    status_filter: StatusFilter = StatusFilter.ALL,
    window: DateRange | None = None,
) -> list[Task]:
    """Tasks matching the status filter and due inside ``window``, by priority then due date."""

    selected = [
        task
        for task in tasks
        if status_filter.matches(task) and (window is None or window.contains(task.due_at))
    ]
    return sorted(selected, key=lambda task: (task.priority, task.due_at))


def set_status(task: Task, status: TaskStatus | str) -> Task:
    """Any status may follow any other."""

    task.status = TaskStatus(status)
    return task


def move_task(tasks: Sequence[Task], source: int, destination: int) -> list[Task]:
    """Move one task inside the list and renumber priorities 0..n-1."""

    ordered = list(tasks)
    if not 0 <= source < len(ordered):
        raise IndexError(f"No task at position {source}")
    destination = max(0, min(destination, len(ordered) - 1))
    ordered.insert(destination, ordered.pop(source))
    for priority, task in enumerate(ordered):
        task.priority = priority
    return ordered


def completion_ratio(tasks: Iterable[Task]) -> tuple[int, int]:
    """(completed, total) for a task collection."""

    items = list(tasks)
    return sum(1 for t in items if t.status == TaskStatus.COMPLETED), len(items)
