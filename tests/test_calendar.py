"""Tests for core calendar logic."""

from datetime import date, datetime, timedelta

import pytest

from ganttline.core.calendar import (
    CalendarConfig,
    InvalidConfig,
    Period,
    count_working_days,
    date_key,
    date_range,
    is_non_working,
    is_weekend,
    parse_date,
    period_end,
    toggle,
)


# Fixtures
@pytest.fixture
def monday():
    # 2024-01-01 is a Monday
    return date(2024, 1, 1)


@pytest.fixture
def saturday(monday):
    return monday + timedelta(days=5)


class TestDateRange:
    def test_sprint_has_fifteen_dates(self, monday):
        dates = date_range(CalendarConfig(monday, Period.SPRINT))
        assert len(dates) == 15
        assert dates[0] == date(2024, 1, 1)
        assert dates[-1] == date(2024, 1, 15)

    def test_month_runs_to_last_day(self):
        dates = date_range(CalendarConfig(date(2024, 2, 10), Period.MONTH))
        assert dates[0] == date(2024, 2, 10)
        assert dates[-1] == date(2024, 2, 29)
        assert len(dates) == 20

    def test_month_from_last_day_is_single_date(self):
        dates = date_range(CalendarConfig(date(2024, 4, 30), Period.MONTH))
        assert dates == [date(2024, 4, 30)]

    def test_quarter_runs_to_quarter_end(self):
        dates = date_range(CalendarConfig(date(2024, 5, 15), Period.QUARTER))
        assert dates[-1] == date(2024, 6, 30)
        assert len(dates) == 47

    def test_fourth_quarter(self):
        dates = date_range(CalendarConfig(date(2024, 12, 1), Period.QUARTER))
        assert dates[-1] == date(2024, 12, 31)

    def test_accepts_iso_string(self):
        dates = date_range(CalendarConfig("2024-01-01", Period.SPRINT))
        assert dates[0] == date(2024, 1, 1)

    def test_contiguous_one_day_step(self):
        dates = date_range(CalendarConfig(date(2024, 1, 20), Period.QUARTER))
        assert all(b - a == timedelta(days=1) for a, b in zip(dates, dates[1:]))

    def test_default_kind_is_sprint(self, monday):
        assert len(date_range(CalendarConfig(monday))) == 15

    @pytest.mark.parametrize("bad", ["not-a-date", "2024-13-01", "", None, 20240101])
    def test_unparseable_start_fails(self, bad):
        with pytest.raises(InvalidConfig):
            date_range(CalendarConfig(bad, Period.MONTH))


class TestParseDate:
    def test_date_passthrough(self, monday):
        assert parse_date(monday) == monday

    def test_datetime_reduced_to_date(self):
        assert parse_date(datetime(2024, 1, 5, 15, 30)) == date(2024, 1, 5)

    def test_iso_datetime_string(self):
        assert parse_date("2024-01-05T10:00:00") == date(2024, 1, 5)

    def test_invalid_config_is_value_error(self):
        with pytest.raises(ValueError):
            parse_date("tomorrow")


class TestPeriodEnd:
    def test_sprint(self, monday):
        assert period_end(monday, Period.SPRINT) == date(2024, 1, 15)

    def test_quarter_start_month(self):
        assert period_end(date(2024, 1, 1), Period.QUARTER) == date(2024, 3, 31)


class TestNonWorking:
    def test_weekend_default(self, saturday):
        assert is_weekend(saturday)
        assert is_non_working(saturday, frozenset()) is True

    def test_weekday_default(self, monday):
        assert is_non_working(monday, frozenset()) is False

    def test_override_makes_weekend_working(self, saturday):
        assert is_non_working(saturday, {date_key(saturday)}) is False

    def test_override_makes_weekday_non_working(self, monday):
        assert is_non_working(monday, {"2024-01-01"}) is True

    def test_toggle_saturday_twice(self, saturday):
        overrides = toggle(saturday, frozenset())
        assert is_non_working(saturday, overrides) is False
        overrides = toggle(saturday, overrides)
        assert is_non_working(saturday, overrides) is True


class TestToggle:
    def test_self_inverse(self, monday):
        original = frozenset({"2024-02-01", "2024-02-03"})
        for i in range(30):
            d = monday + timedelta(days=i)
            assert toggle(d, toggle(d, original)) == original

    def test_only_affects_one_date(self, monday):
        original = frozenset({"2024-02-01"})
        result = toggle(monday, original)
        assert result == {"2024-02-01", "2024-01-01"}

    def test_does_not_mutate_input(self, monday):
        original = {"2024-02-01"}
        toggle(monday, original)
        assert original == {"2024-02-01"}


class TestCountWorkingDays:
    def test_full_week(self, monday):
        assert count_working_days(monday, 7, frozenset()) == 5

    def test_with_overrides(self, monday):
        overrides = {"2024-01-06", "2024-01-02"}
        # Saturday becomes working, Tuesday non-working
        assert count_working_days(monday, 7, overrides) == 5

    def test_weekend_only(self, saturday):
        assert count_working_days(saturday, 2, frozenset()) == 0
