"""Payment reminder tables."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


class PaymentReminder(SQLModel, table=True):
    """A bill or payment the user wants to be reminded about."""

    __tablename__: ClassVar[str] = "payment_reminder"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=80)
    amount: Optional[float] = Field(default=None)
    is_recurring: bool = Field(default=False, nullable=False)
    last_cleared_at: Optional[datetime] = Field(default=None, sa_type=DateTime)

    due_dates: list["ReminderDueDate"] = Relationship(
        back_populates="reminder",
        sa_relationship=relationship(
            "ReminderDueDate",
            back_populates="reminder",
            cascade="all, delete-orphan",
            order_by="ReminderDueDate.due_at",
        ),
    )

    @property
    def dates(self) -> list[datetime]:
        return [row.due_at for row in self.due_dates]


class ReminderDueDate(SQLModel, table=True):
    """One due date of a payment reminder."""

    __tablename__: ClassVar[str] = "reminder_due_date"

    id: Optional[int] = Field(default=None, primary_key=True)
    reminder_id: Optional[int] = Field(
        default=None, foreign_key="payment_reminder.id", index=True, ondelete="CASCADE"
    )
    due_at: datetime = Field(sa_type=DateTime, nullable=False)

    reminder: Optional["PaymentReminder"] = Relationship(
        back_populates="due_dates",
        sa_relationship=relationship("PaymentReminder", back_populates="due_dates"),
    )
