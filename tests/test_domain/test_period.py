"""Tests for the calendar period engine: ranges, navigation, day counts"""
import pytest
from datetime import date, datetime, timedelta, timezone

from habitgrid.domain.period import (
    compute_range, shift_period, count_days_in_period, go_to_current_period,
    add_months, is_leap_year, days_between,
    PeriodError, VALID_GRANULARITIES,
    WEEK, MONTH, QUARTER, SEMESTER, YEAR, PREVIOUS, NEXT,
)


SAMPLE_DATES = [
    date(2023, 1, 1), date(2023, 2, 28), date(2024, 2, 29), date(2024, 3, 14),
    date(2024, 6, 30), date(2024, 7, 1), date(2024, 12, 31), date(2100, 2, 15),
]


class TestComputeRangeInvariants:
    @pytest.mark.parametrize("granularity", VALID_GRANULARITIES)
    @pytest.mark.parametrize("ref", SAMPLE_DATES)
    def test_days_cover_inclusive_range(self, granularity, ref):
        p = compute_range(ref, granularity)
        assert p.start <= ref <= p.end
        assert len(p.days) == (p.end - p.start).days + 1
        assert p.days[0] == p.start and p.days[-1] == p.end
        assert list(p.days) == sorted(p.days)

    def test_datetime_reference_uses_its_date(self):
        p = compute_range(datetime(2024, 3, 14, 23, 59), WEEK)
        assert p.start == date(2024, 3, 11)

    def test_aware_reference_read_in_reference_zone(self):
        # Monday 03:00 UTC is still Sunday evening in Mexico City
        instant = datetime(2024, 3, 18, 3, 0, tzinfo=timezone.utc)
        p = compute_range(instant, WEEK)
        assert (p.start, p.end) == (date(2024, 3, 11), date(2024, 3, 17))
        assert go_to_current_period(instant) in p

    def test_aware_reference_shift(self):
        instant = datetime(2024, 4, 1, 2, 0, tzinfo=timezone.utc)
        assert shift_period(instant, MONTH, NEXT) == date(2024, 4, 30)

    def test_day_boundaries(self):
        p = compute_range(date(2024, 3, 14), MONTH)
        assert p.start_at == datetime(2024, 3, 1, 0, 0, 0)
        assert p.end_at.date() == date(2024, 3, 31)
        assert (p.end_at.hour, p.end_at.minute, p.end_at.second) == (23, 59, 59)

    def test_unknown_granularity_fails_fast(self):
        with pytest.raises(PeriodError):
            compute_range(date(2024, 3, 14), "fortnight")


class TestWeek:
    def test_thursday(self):
        p = compute_range(date(2024, 3, 14), WEEK)
        assert (p.start, p.end) == (date(2024, 3, 11), date(2024, 3, 17))
        assert len(p.days) == 7

    def test_sunday_belongs_to_preceding_monday(self):
        p = compute_range(date(2024, 3, 17), WEEK)
        assert p.start == date(2024, 3, 11)

    def test_monday_starts_its_own_week(self):
        p = compute_range(date(2024, 3, 18), WEEK)
        assert p.start == date(2024, 3, 18)

    def test_week_across_year_boundary(self):
        p = compute_range(date(2024, 12, 31), WEEK)
        assert (p.start, p.end) == (date(2024, 12, 30), date(2025, 1, 5))

    @pytest.mark.parametrize("ref", SAMPLE_DATES)
    def test_always_monday_to_sunday(self, ref):
        p = compute_range(ref, WEEK)
        assert p.start.weekday() == 0
        assert p.end.weekday() == 6
        assert len(p.days) == 7


class TestMonth:
    def test_leap_february(self):
        p = compute_range(date(2024, 2, 10), MONTH)
        assert (p.start, p.end) == (date(2024, 2, 1), date(2024, 2, 29))
        assert len(p.days) == 29

    def test_common_february(self):
        assert len(compute_range(date(2023, 2, 10), MONTH).days) == 28

    def test_december(self):
        p = compute_range(date(2024, 12, 31), MONTH)
        assert (p.start, p.end) == (date(2024, 12, 1), date(2024, 12, 31))


class TestQuarterSemesterYear:
    @pytest.mark.parametrize("ref, start, end", [
        (date(2024, 1, 1), date(2024, 1, 1), date(2024, 3, 31)),
        (date(2024, 5, 15), date(2024, 4, 1), date(2024, 6, 30)),
        (date(2024, 9, 30), date(2024, 7, 1), date(2024, 9, 30)),
        (date(2024, 10, 1), date(2024, 10, 1), date(2024, 12, 31)),
    ])
    def test_quarters(self, ref, start, end):
        p = compute_range(ref, QUARTER)
        assert (p.start, p.end) == (start, end)

    def test_semesters(self):
        first = compute_range(date(2024, 6, 30), SEMESTER)
        second = compute_range(date(2024, 7, 1), SEMESTER)
        assert (first.start, first.end) == (date(2024, 1, 1), date(2024, 6, 30))
        assert (second.start, second.end) == (date(2024, 7, 1), date(2024, 12, 31))
        assert len(first.days) == 182
        assert len(second.days) == 184

    def test_year(self):
        p = compute_range(date(2024, 8, 8), YEAR)
        assert (p.start, p.end) == (date(2024, 1, 1), date(2024, 12, 31))
        assert len(p.days) == 366

    @pytest.mark.parametrize("granularity, count", [(QUARTER, 4), (SEMESTER, 2), (YEAR, 1)])
    def test_periods_partition_the_year(self, granularity, count):
        year_days = compute_range(date(2024, 1, 1), YEAR).days
        collected = []
        ref = date(2024, 1, 1)
        for _ in range(count):
            p = compute_range(ref, granularity)
            collected.extend(p.days)
            ref = p.end + timedelta(days=1)
        assert tuple(collected) == year_days


class TestShiftPeriod:
    @pytest.mark.parametrize("ref, granularity, direction, expected", [
        (date(2024, 3, 14), WEEK, NEXT, date(2024, 3, 21)),
        (date(2024, 1, 3), WEEK, PREVIOUS, date(2023, 12, 27)),
        (date(2024, 1, 31), MONTH, NEXT, date(2024, 2, 29)),
        (date(2023, 1, 31), MONTH, NEXT, date(2023, 2, 28)),
        (date(2024, 3, 31), MONTH, PREVIOUS, date(2024, 2, 29)),
        (date(2024, 1, 15), MONTH, PREVIOUS, date(2023, 12, 15)),
        (date(2024, 11, 30), QUARTER, NEXT, date(2025, 2, 28)),
        (date(2024, 8, 31), SEMESTER, PREVIOUS, date(2024, 2, 29)),
        (date(2024, 2, 29), YEAR, NEXT, date(2025, 2, 28)),
        (date(2024, 6, 1), YEAR, PREVIOUS, date(2023, 6, 1)),
    ])
    def test_shift(self, ref, granularity, direction, expected):
        assert shift_period(ref, granularity, direction) == expected

    def test_next_then_previous_lands_in_same_period(self):
        ref = date(2024, 1, 31)
        back = shift_period(shift_period(ref, MONTH, NEXT), MONTH, PREVIOUS)
        assert compute_range(back, MONTH) == compute_range(ref, MONTH)

    def test_unknown_direction(self):
        with pytest.raises(PeriodError):
            shift_period(date(2024, 3, 14), WEEK, "sideways")

    def test_add_months_clamps(self):
        assert add_months(date(2024, 10, 31), 1) == date(2024, 11, 30)
        assert add_months(date(2024, 1, 31), -2) == date(2023, 11, 30)


class TestGoToCurrentPeriod:
    def test_converts_instant_to_reference_zone(self):
        # 03:00 UTC on the 15th is still the 14th in Mexico City (UTC-6)
        now = datetime(2024, 3, 15, 3, 0, tzinfo=timezone.utc)
        assert go_to_current_period(now, tz_name="America/Mexico_City") == date(2024, 3, 14)

    def test_other_zone_sees_next_day(self):
        now = datetime(2024, 3, 15, 3, 0, tzinfo=timezone.utc)
        assert go_to_current_period(now, tz_name="Europe/Madrid") == date(2024, 3, 15)

    def test_defaults_to_clock(self):
        assert isinstance(go_to_current_period(), date)


class TestCountDaysInPeriod:
    def test_week_is_always_seven(self):
        p = compute_range(date(2024, 3, 14), WEEK)
        assert count_days_in_period(WEEK, p, today=date(2024, 3, 12)) == 7

    def test_month_uses_full_length_even_when_current(self):
        p = compute_range(date(2024, 2, 1), MONTH)
        assert count_days_in_period(MONTH, p, today=date(2024, 2, 3)) == 29
        p = compute_range(date(2023, 2, 1), MONTH)
        assert count_days_in_period(MONTH, p, today=date(2024, 2, 3)) == 28

    def test_current_quarter_truncated_at_today(self):
        p = compute_range(date(2024, 1, 1), QUARTER)
        assert count_days_in_period(QUARTER, p, today=date(2024, 2, 10)) == 41

    def test_past_quarter_full_span(self):
        p = compute_range(date(2024, 1, 1), QUARTER)
        assert count_days_in_period(QUARTER, p, today=date(2024, 5, 1)) == 91

    def test_quarter_on_its_last_day(self):
        p = compute_range(date(2024, 1, 1), QUARTER)
        assert count_days_in_period(QUARTER, p, today=date(2024, 3, 31)) == 91

    def test_future_quarter_counts_nothing(self):
        p = compute_range(date(2024, 8, 1), QUARTER)
        assert count_days_in_period(QUARTER, p, today=date(2024, 5, 1)) == 0

    def test_current_semester_first_day(self):
        p = compute_range(date(2024, 7, 1), SEMESTER)
        assert count_days_in_period(SEMESTER, p, today=date(2024, 7, 1)) == 1

    def test_past_semester(self):
        p = compute_range(date(2023, 3, 1), SEMESTER)
        assert count_days_in_period(SEMESTER, p, today=date(2024, 7, 1)) == 181

    def test_current_year_truncated_at_today(self):
        p = compute_range(date(2024, 1, 1), YEAR)
        assert count_days_in_period(YEAR, p, today=date(2024, 3, 1)) == 61

    @pytest.mark.parametrize("year, expected", [(2023, 365), (2024, 366), (2000, 366), (2100, 365)])
    def test_other_years_use_full_length(self, year, expected):
        p = compute_range(date(year, 6, 1), YEAR)
        assert count_days_in_period(YEAR, p, today=date(2025, 1, 10)) == expected


def test_leap_rule():
    assert is_leap_year(2024)
    assert not is_leap_year(2023)
    assert not is_leap_year(1900)
    assert is_leap_year(2000)


def test_days_between_single_day():
    assert days_between(date(2024, 3, 14), date(2024, 3, 14)) == [date(2024, 3, 14)]
