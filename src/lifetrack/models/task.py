"""Task management table."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class TaskStatus(str, Enum):
    """Workflow status; any status may be set directly from any other."""

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class Task(SQLModel, table=True):
    """A to-do item with a due date and a manual ordering slot."""

    __tablename__: ClassVar[str] = "task"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(nullable=False, max_length=120)
    due_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime, nullable=False, index=True
    )
    status: TaskStatus = Field(default=TaskStatus.NOT_STARTED, nullable=False)
    priority: int = Field(default=0, nullable=False)
    description: Optional[str] = Field(default=None, max_length=500)
    tags: str = Field(default="", max_length=255)

    @property
    def tag_list(self) -> list[str]:
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]
