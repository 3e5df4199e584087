"""SQLModel definition for expenses."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class Expense(SQLModel, table=True):
    """A single outgoing payment, grouped by free-text category name."""

    __tablename__: ClassVar[str] = "expense"

    id: Optional[int] = Field(default=None, primary_key=True)
    amount: float = Field(nullable=False, description="Positive amount spent")
    occurred_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime, nullable=False, index=True
    )
    category: str = Field(nullable=False, max_length=64, index=True)
    payment_mode: str = Field(default="", max_length=32)
    note: str = Field(default="", max_length=255)
