"""Application configuration objects and helpers."""

from __future__ import annotations

import calendar
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

_WEEKDAY_NAMES = {name.lower(): idx for idx, name in enumerate(calendar.day_name)}


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def parse_weekday(value: str | int) -> int:
    """Return a ``calendar`` weekday index (Monday=0) from a number or a day name."""

    if isinstance(value, int):
        weekday = value
    else:
        text = value.strip().lower()
        if text in _WEEKDAY_NAMES:
            return _WEEKDAY_NAMES[text]
        try:
            weekday = int(text)
        except ValueError as exc:
            raise ValueError(f"Unknown weekday: {value!r}") from exc
    if not 0 <= weekday <= 6:
        raise ValueError(f"Weekday must be between 0 (Monday) and 6 (Sunday), got {weekday}")
    return weekday


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "LifeTrack"
    DB_FILENAME = "lifetrack.db"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("LIFETRACK_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("LIFETRACK_DATABASE_URL", self._build_sqlite_url())
        self.FIRST_WEEKDAY = parse_weekday(os.getenv("LIFETRACK_FIRST_WEEKDAY", "sunday"))
        self.REMINDER_LEAD_DAYS = _env_int("LIFETRACK_REMINDER_LEAD_DAYS", 2)
        self.REMINDER_HOUR = _env_int("LIFETRACK_REMINDER_HOUR", 9)
        self.REMINDER_RESYNC_SECONDS = _env_int("LIFETRACK_REMINDER_RESYNC_SECONDS", 60)
        self.CURRENCY = os.getenv("LIFETRACK_CURRENCY", "₹")
        if not 0 <= self.REMINDER_HOUR <= 23:
            raise ValueError("LIFETRACK_REMINDER_HOUR must be between 0 and 23.")
        if self.REMINDER_LEAD_DAYS < 0:
            raise ValueError("LIFETRACK_REMINDER_LEAD_DAYS cannot be negative.")
        if self.REMINDER_RESYNC_SECONDS < 1:
            raise ValueError("LIFETRACK_REMINDER_RESYNC_SECONDS must be at least 1.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("LIFETRACK_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to per-user storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}


class TestingConfig(BaseConfig):
    """Configuration for test runs rooted in an explicit (temporary) folder."""

    __test__ = False

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)
        super().__init__()
        self.DATABASE_URL = f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def _resolve_data_dir(self) -> Path:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        return self._data_dir.resolve()
