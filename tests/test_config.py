"""Configuration loading tests."""

from __future__ import annotations

import calendar

import pytest

from lifetrack.config import BaseConfig, TestingConfig, parse_weekday


@pytest.fixture
def env(monkeypatch, tmp_path):
    monkeypatch.setenv("LIFETRACK_DATA_DIR", str(tmp_path / "data"))
    for name in (
        "LIFETRACK_DEV_MODE",
        "LIFETRACK_DATABASE_URL",
        "LIFETRACK_FIRST_WEEKDAY",
        "LIFETRACK_REMINDER_LEAD_DAYS",
        "LIFETRACK_REMINDER_HOUR",
        "LIFETRACK_CURRENCY",
        "LIFETRACK_REMINDER_RESYNC_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(env, tmp_path):
    config = BaseConfig()
    assert config.DATA_DIR == (tmp_path / "data").resolve()
    assert config.DATA_DIR.is_dir()
    assert config.DATABASE_URL.endswith("lifetrack.db")
    assert config.FIRST_WEEKDAY == calendar.SUNDAY
    assert config.REMINDER_LEAD_DAYS == 2
    assert config.REMINDER_HOUR == 9
    assert config.DEV_MODE is True
    assert config.REMINDER_RESYNC_SECONDS == 60


def test_environment_overrides(env):
    env.setenv("LIFETRACK_FIRST_WEEKDAY", "Monday")
    env.setenv("LIFETRACK_REMINDER_LEAD_DAYS", "3")
    env.setenv("LIFETRACK_REMINDER_HOUR", "18")
    env.setenv("LIFETRACK_CURRENCY", "$")
    env.setenv("LIFETRACK_DATABASE_URL", "sqlite:///:memory:")

    config = BaseConfig()

    assert config.FIRST_WEEKDAY == calendar.MONDAY
    assert config.REMINDER_LEAD_DAYS == 3
    assert config.REMINDER_HOUR == 18
    assert config.CURRENCY == "$"
    assert config.DATABASE_URL == "sqlite:///:memory:"


def test_production_mode_needs_no_extra_settings(env):
    env.setenv("LIFETRACK_DEV_MODE", "false")
    env.setenv("LIFETRACK_REMINDER_RESYNC_SECONDS", "15")
    config = BaseConfig()
    assert config.DEV_MODE is False
    assert config.REMINDER_RESYNC_SECONDS == 15
    assert not hasattr(config, "SECRET_KEY")


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("LIFETRACK_REMINDER_HOUR", "24"),
        ("LIFETRACK_REMINDER_LEAD_DAYS", "-1"),
        ("LIFETRACK_REMINDER_HOUR", "nine"),
        ("LIFETRACK_FIRST_WEEKDAY", "someday"),
        ("LIFETRACK_REMINDER_RESYNC_SECONDS", "0"),
    ],
)
def test_invalid_values_rejected(env, name, value):
    env.setenv(name, value)
    with pytest.raises(ValueError):
        BaseConfig()


def test_sqlite_engine_options(env):
    assert BaseConfig().sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_testing_config_uses_given_folder(env, tmp_path):
    config = TestingConfig(tmp_path / "isolated")
    assert config.DATA_DIR == (tmp_path / "isolated").resolve()
    assert config.DATABASE_URL == f"sqlite:///{config.DATA_DIR / 'lifetrack.db'}"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("sunday", 6), ("MONDAY", 0), (" tuesday ", 1), ("4", 4), (3, 3)],
)
def test_parse_weekday(value, expected):
    assert parse_weekday(value) == expected


@pytest.mark.parametrize("value", ["7", -1, "funday"])
def test_parse_weekday_rejects(value):
    with pytest.raises(ValueError):
        parse_weekday(value)
