"""Habit tracking data structures."""

from __future__ import annotations

from datetime import datetime, time
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


class HabitFrequency(str, Enum):
    """How often a habit is expected to be completed."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Habit(SQLModel, table=True):
    """A user-defined habit the app tracks."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime, nullable=False)
    frequency: HabitFrequency = Field(default=HabitFrequency.DAILY, nullable=False)
    reminder_time: Optional[time] = Field(default=None)
    is_active: bool = Field(default=True, nullable=False)
    is_archived: bool = Field(default=False, nullable=False)
    last_completed_at: Optional[datetime] = Field(default=None, sa_type=DateTime)

    completions: list["HabitCompletion"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "HabitCompletion",
            back_populates="habit",
            cascade="all, delete-orphan",
        ),
    )


class HabitCompletion(SQLModel, table=True):
    """A single completion of a habit; day granularity in practice."""

    __tablename__: ClassVar[str] = "habit_completion"

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True, ondelete="CASCADE")
    completed_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime, nullable=False, index=True
    )

    habit: Optional["Habit"] = Relationship(
        back_populates="completions",
        sa_relationship=relationship("Habit", back_populates="completions"),
    )
