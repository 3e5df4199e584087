"""Tests for period preset resolution."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from lifetrack.models import BudgetCategory, BudgetPeriod
from lifetrack.services.calendar_grid import MONDAY, SUNDAY
from lifetrack.services.dates import add_months, end_of_day, month_bounds, start_of_day
from lifetrack.services.periods import DateRange, category_window, resolve_period

# Wednesday afternoon.
NOW = datetime(2024, 3, 13, 15, 30, 12)


class TestResolvePeriod:
    def test_day_spans_whole_day(self):
        window = resolve_period(BudgetPeriod.DAY, now=NOW)
        assert window.start == datetime(2024, 3, 13)
        assert window.end == datetime(2024, 3, 13, 23, 59, 59)
        assert (window.end - window.start).total_seconds() == 86399

    def test_week_starts_on_sunday_by_default(self):
        window = resolve_period("week", now=NOW)
        assert window.start == datetime(2024, 3, 10)
        assert window.start.weekday() == SUNDAY
        assert window.end == datetime(2024, 3, 16, 23, 59, 59)

    def test_week_with_monday_first(self):
        window = resolve_period(BudgetPeriod.WEEK, now=NOW, first_weekday=MONDAY)
        assert window.start == datetime(2024, 3, 11)
        assert window.end == datetime(2024, 3, 17, 23, 59, 59)

    def test_week_on_first_weekday_starts_today(self):
        sunday = datetime(2024, 3, 10, 8)
        assert resolve_period("week", now=sunday).start == datetime(2024, 3, 10)

    def test_month_covers_leap_february(self):
        window = resolve_period("month", now=datetime(2024, 2, 10))
        assert window.start == datetime(2024, 2, 1)
        assert window.end == datetime(2024, 2, 29, 23, 59, 59)

    def test_month_in_december_rolls_year(self):
        window = resolve_period("month", now=datetime(2024, 12, 31, 23))
        assert window.end == datetime(2024, 12, 31, 23, 59, 59)

    def test_custom_keeps_datetime_bounds(self):
        start = datetime(2024, 1, 5, 10)
        end = datetime(2024, 1, 9, 18)
        window = resolve_period("custom", now=NOW, start=start, end=end)
        assert window == DateRange(start, end)

    def test_custom_with_dates_covers_whole_days(self):
        window = resolve_period("custom", now=NOW, start=date(2024, 1, 5), end=date(2024, 1, 9))
        assert window.start == datetime(2024, 1, 5)
        assert window.end == datetime(2024, 1, 9, 23, 59, 59)

    def test_custom_missing_bound_falls_back_to_day(self):
        window = resolve_period("custom", now=NOW, start=date(2024, 1, 5))
        assert window == resolve_period("day", now=NOW)

    def test_unknown_period_rejected(self):
        with pytest.raises(ValueError):
            resolve_period("fortnight", now=NOW)

    @pytest.mark.parametrize("period", ["day", "week", "month"])
    def test_now_falls_inside_its_window(self, period):
        assert resolve_period(period, now=NOW).contains(NOW)

    def test_contains_is_inclusive(self):
        window = resolve_period("day", now=NOW)
        assert window.contains(window.start)
        assert window.contains(window.end)
        assert not window.contains(window.end + timedelta(seconds=1))


class TestCategoryWindow:
    def test_custom_category_uses_stored_dates(self):
        trip = BudgetCategory(
            name="Trip", budget_amount=100, period=BudgetPeriod.CUSTOM,
            start_date=date(2024, 5, 1), end_date=date(2024, 5, 10),
        )
        assert category_window(trip, now=NOW) == DateRange(
            datetime(2024, 5, 1), datetime(2024, 5, 10, 23, 59, 59)
        )

    def test_preset_category_follows_now(self):
        food = BudgetCategory(name="Food", budget_amount=50, period=BudgetPeriod.WEEK)
        window = category_window(food, now=NOW, first_weekday=MONDAY)
        assert window == resolve_period("week", now=NOW, first_weekday=MONDAY)


class TestDateHelpers:
    def test_add_months_clamps_day(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_add_months_backwards(self):
        assert add_months(date(2024, 3, 15), -3) == date(2023, 12, 15)

    def test_month_bounds(self):
        assert month_bounds(date(2024, 4, 18)) == (date(2024, 4, 1), date(2024, 4, 30))

    def test_day_boundaries(self):
        assert start_of_day(NOW) == datetime(2024, 3, 13)
        assert end_of_day(NOW) == datetime(2024, 3, 13, 23, 59, 59)
