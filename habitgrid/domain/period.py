"""
Calendar period engine.

Pure date arithmetic, no I/O and no clock reads: every function takes the
reference date (and "today" where it matters) as an argument.

Granularities:
- week: Monday..Sunday (ISO week)
- month: first..last day of the month
- quarter: Jan-Mar, Apr-Jun, Jul-Sep, Oct-Dec
- semester: Jan-Jun, Jul-Dec
- year: Jan 1..Dec 31
"""
import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from habitgrid.utils.dates import local_today, to_day


WEEK = "week"
MONTH = "month"
QUARTER = "quarter"
SEMESTER = "semester"
YEAR = "year"

VALID_GRANULARITIES = (WEEK, MONTH, QUARTER, SEMESTER, YEAR)

PREVIOUS = "previous"
NEXT = "next"
VALID_DIRECTIONS = frozenset({PREVIOUS, NEXT})

# Months per navigation step; week is handled in days
_STEP_MONTHS = {MONTH: 1, QUARTER: 3, SEMESTER: 6, YEAR: 12}


class PeriodError(ValueError):
    pass


@dataclass(frozen=True)
class Period:
    granularity: str
    start: date
    end: date
    days: tuple[date, ...]

    @property
    def start_at(self) -> datetime:
        """Start of the first day, 00:00:00.000."""
        return datetime.combine(self.start, time.min)

    @property
    def end_at(self) -> datetime:
        """End of the last day, 23:59:59.999999."""
        return datetime.combine(self.end, time.max)

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


def validate_granularity(granularity: str) -> str:
    if granularity not in VALID_GRANULARITIES:
        raise PeriodError(
            f"invalid granularity: {granularity!r} (expected one of {', '.join(VALID_GRANULARITIES)})"
        )
    return granularity


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def add_months(d: date, n: int) -> date:
    """Shift by n months, clamping the day to the target month's last day."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = min(d.day, last_day_of_month(year, month))
    return date(year, month, day)


def _bounds(d: date, granularity: str) -> tuple[date, date]:
    if granularity == WEEK:
        start = d - timedelta(days=d.weekday())
        return start, start + timedelta(days=6)

    if granularity == YEAR:
        return date(d.year, 1, 1), date(d.year, 12, 31)

    span = {MONTH: 1, QUARTER: 3, SEMESTER: 6}[granularity]
    first_month = (d.month - 1) // span * span + 1
    last_month = first_month + span - 1
    return (
        date(d.year, first_month, 1),
        date(d.year, last_month, last_day_of_month(d.year, last_month)),
    )


def days_between(start: date, end: date) -> list[date]:
    """Every calendar day from start to end, both inclusive."""
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def compute_range(reference_date: date | datetime, granularity: str) -> Period:
    """Inclusive period of the given granularity that contains reference_date."""
    validate_granularity(granularity)
    start, end = _bounds(to_day(reference_date), granularity)
    return Period(
        granularity=granularity,
        start=start,
        end=end,
        days=tuple(days_between(start, end)),
    )


def shift_period(reference_date: date | datetime, granularity: str, direction: str) -> date:
    """
    Move the reference date one period back or forward.

    Month-based steps clamp the day of month (2024-01-31 + 1 month = 2024-02-29,
    2024-02-29 + 1 year = 2025-02-28).
    """
    validate_granularity(granularity)
    if direction not in VALID_DIRECTIONS:
        raise PeriodError(f"invalid direction: {direction!r} (expected previous or next)")

    d = to_day(reference_date)
    sign = 1 if direction == NEXT else -1

    if granularity == WEEK:
        return d + timedelta(weeks=sign)
    return add_months(d, sign * _STEP_MONTHS[granularity])


def go_to_current_period(now: datetime | None = None, tz_name: str | None = None) -> date:
    """Reference date of the current period: today in the reference zone."""
    if now is None:
        return local_today(tz_name)
    return to_day(now, tz_name)


def count_days_in_period(granularity: str, period: Period, today: date) -> int:
    """
    Denominator for completion percentages.

    Ongoing quarters, semesters and years only count the days up to today,
    so days that have not happened yet are not counted as missed. Weeks and
    months always use their full length.
    """
    validate_granularity(granularity)

    if granularity == WEEK:
        return 7

    if granularity == MONTH:
        return last_day_of_month(period.start.year, period.start.month)

    if granularity in (QUARTER, SEMESTER):
        count_end = today if period.end > today else period.end
        return max(0, (count_end - period.start).days + 1)

    year = period.start.year
    if year == today.year:
        return (today - date(year, 1, 1)).days + 1
    return 366 if is_leap_year(year) else 365
