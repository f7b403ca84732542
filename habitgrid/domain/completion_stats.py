"""
Day-status classification and completion aggregates over a Period.

Completions are any objects exposing `habit_id` and `day` (ORM rows, the
API's snapshots, plain namespaces). `day` may be a date, a naive datetime
or a "YYYY-MM-DD" string; matching is calendar-day equality, never a
timestamp range comparison.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable

from habitgrid.domain.period import Period, count_days_in_period
from habitgrid.utils.dates import to_day

DAY_COMPLETED = "completed"
DAY_INCOMPLETE = "incomplete"
DAY_NEUTRAL = "neutral"


@dataclass(frozen=True)
class CompletionStats:
    completed_count: int
    total_count: int
    percentage: int

    def as_dict(self) -> dict:
        return {
            "completed": self.completed_count,
            "total": self.total_count,
            "percentage": self.percentage,
        }


EMPTY_STATS = CompletionStats(completed_count=0, total_count=0, percentage=0)


def completion_percentage(completed: int, total: int) -> int:
    """completed/total as a whole percent, rounded half-up; 0 when total is 0."""
    if total <= 0:
        return 0
    ratio = Decimal(completed) * 100 / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def completed_days(habit_id: str, completions: Iterable[Any], period: Period | None = None) -> set[date]:
    """Distinct days a habit was completed, optionally limited to a period."""
    days = set()
    for c in completions:
        if c.habit_id != habit_id:
            continue
        d = to_day(c.day)
        if period is None or d in period:
            days.add(d)
    return days


def classify_day(habit_id: str, day: date | str, completions: Iterable[Any], today: date) -> str:
    """
    completed  - a completion exists for (habit_id, day), past or future
    incomplete - day is strictly before today and nothing was recorded
    neutral    - today or later, nothing recorded yet
    """
    d = to_day(day)
    for c in completions:
        if c.habit_id == habit_id and to_day(c.day) == d:
            return DAY_COMPLETED
    if d < today:
        return DAY_INCOMPLETE
    return DAY_NEUTRAL


def aggregate_habit_completion(
    habit_id: str,
    completions: Iterable[Any],
    granularity: str,
    period: Period,
    today: date,
) -> CompletionStats:
    completed = len(completed_days(habit_id, completions, period))
    total = count_days_in_period(granularity, period, today)
    return CompletionStats(
        completed_count=completed,
        total_count=total,
        percentage=completion_percentage(completed, total),
    )


def aggregate_overall_completion(
    habit_ids: Iterable[str],
    completions: Iterable[Any],
    granularity: str,
    period: Period,
    today: date,
) -> CompletionStats:
    """All habits together: denominator is days-in-period times habit count."""
    habit_ids = list(habit_ids)
    if not habit_ids:
        return EMPTY_STATS

    completions = list(completions)
    total = count_days_in_period(granularity, period, today) * len(habit_ids)
    completed = sum(len(completed_days(h, completions, period)) for h in habit_ids)
    return CompletionStats(
        completed_count=completed,
        total_count=total,
        percentage=completion_percentage(completed, total),
    )
