"""Service module exports."""

from . import (
    budgeting,
    calendar_grid,
    dashboard,
    dates,
    habits,
    notifications,
    periods,
    quotes,
    reminders,
    reports,
    tasks,
)

__all__ = [
    "budgeting",
    "calendar_grid",
    "dashboard",
    "dates",
    "habits",
    "notifications",
    "periods",
    "quotes",
    "reminders",
    "reports",
    "tasks",
]
