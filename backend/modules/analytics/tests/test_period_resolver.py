# backend/modules/analytics/tests/test_period_resolver.py

import pytest
from datetime import datetime, timedelta, timezone

from modules.analytics.exceptions import InvalidPeriodError
from modules.analytics.schemas.sales_summary_schemas import SalesPeriod
from modules.analytics.services.period_resolver import (
    PeriodWindow,
    parse_period,
    resolve_period_window,
    to_local,
)


class TestResolvePeriodWindow:
    """Test cases for period window resolution"""

    def test_today_starts_at_midnight(self, fixed_now):
        window = resolve_period_window(SalesPeriod.TODAY, fixed_now)

        assert window.start == datetime(2026, 10, 19)
        assert window.end == fixed_now

    def test_yesterday_runs_through_now(self, fixed_now):
        """Yesterday keeps today's orders in the window unless bounded"""
        window = resolve_period_window(SalesPeriod.YESTERDAY, fixed_now)

        assert window.start == datetime(2026, 10, 18)
        assert window.end == fixed_now
        assert window.contains(fixed_now - timedelta(hours=1))

    def test_yesterday_bounded_to_midnight(self, fixed_now):
        window = resolve_period_window(
            SalesPeriod.YESTERDAY, fixed_now, bound_yesterday_to_midnight=True
        )

        assert window.start == datetime(2026, 10, 18)
        assert window.end == datetime(2026, 10, 19)
        assert window.contains(datetime(2026, 10, 18, 23, 59, 59))
        assert not window.contains(datetime(2026, 10, 19))

    def test_week_goes_back_seven_days(self, fixed_now):
        window = resolve_period_window(SalesPeriod.WEEK, fixed_now)

        assert window.start == datetime(2026, 10, 12)
        assert window.end == fixed_now

    def test_month_goes_back_one_month(self, fixed_now):
        window = resolve_period_window(SalesPeriod.MONTH, fixed_now)

        assert window.start == datetime(2026, 9, 19)

    def test_month_clamps_to_shorter_month(self):
        window = resolve_period_window(SalesPeriod.MONTH, datetime(2026, 3, 31, 10, 0))

        assert window.start == datetime(2026, 2, 28)

    def test_string_selector_accepted(self, fixed_now):
        window = resolve_period_window("week", fixed_now)

        assert window.start == datetime(2026, 10, 12)

    def test_unknown_period_fails_fast(self, fixed_now):
        with pytest.raises(InvalidPeriodError) as exc_info:
            resolve_period_window("quarter", fixed_now)

        assert exc_info.value.error_code == "INVALID_PERIOD"
        assert exc_info.value.details["period"] == "quarter"
        assert "today" in exc_info.value.details["allowed"]

    def test_unknown_period_is_value_error(self):
        with pytest.raises(ValueError):
            parse_period("fortnight")


class TestPeriodWindow:
    """Test cases for window membership"""

    def test_bounds_are_inclusive(self, fixed_now):
        window = PeriodWindow(start=datetime(2026, 10, 19), end=fixed_now)

        assert window.contains(datetime(2026, 10, 19))
        assert window.contains(fixed_now)
        assert not window.contains(fixed_now + timedelta(seconds=1))
        assert not window.contains(datetime(2026, 10, 18, 23, 59, 59))

    def test_exclusive_end(self):
        window = PeriodWindow(
            start=datetime(2026, 10, 18), end=datetime(2026, 10, 19), include_end=False
        )

        assert not window.contains(datetime(2026, 10, 19))


class TestToLocal:
    """Test cases for timestamp normalization"""

    def test_naive_is_unchanged(self, fixed_now):
        assert to_local(fixed_now) == fixed_now

    def test_aware_converted_to_zone(self):
        moment = datetime(2026, 10, 19, 10, 0, tzinfo=timezone(timedelta(hours=5, minutes=30)))

        local = to_local(moment, timezone.utc)

        assert local == datetime(2026, 10, 19, 4, 30)
        assert local.tzinfo is None
