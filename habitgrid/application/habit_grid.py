"""Calendar grid view: habits x days of one period, with completion stats"""
from datetime import date, datetime

from sqlalchemy.orm import Session

from habitgrid.application.habits import list_habits
from habitgrid.application.completions import fetch_completions
from habitgrid.domain.period import compute_range, shift_period, PREVIOUS, NEXT
from habitgrid.domain.completion_stats import (
    classify_day, aggregate_habit_completion, aggregate_overall_completion,
)
from habitgrid.domain import labels
from habitgrid.utils.dates import format_day


def build_grid_view(
    db: Session,
    owner_id: str,
    granularity: str,
    reference_date: date | datetime,
    today: date,
) -> dict:
    """
    Everything the client needs to draw one period of the habit grid.

    Completions are loaded once for the whole period and shared by every
    row; per-day statuses and stats come from the period engine.
    """
    period = compute_range(reference_date, granularity)
    habits = list_habits(db, owner_id)
    completions = fetch_completions(db, owner_id, period.start, period.end) if habits else []

    by_habit: dict[str, list] = {}
    for c in completions:
        by_habit.setdefault(c.habit_id, []).append(c)

    rows = []
    for h in habits:
        habit_completions = by_habit.get(h.habit_id, [])
        days = [
            {
                "date": format_day(d),
                "status": classify_day(h.habit_id, d, habit_completions, today),
                "is_today": d == today,
            }
            for d in period.days
        ]
        stats = aggregate_habit_completion(h.habit_id, habit_completions, granularity, period, today)
        rows.append({"habit": h, "days": days, "stats": stats})

    overall = aggregate_overall_completion(
        [h.habit_id for h in habits], completions, granularity, period, today,
    )

    return {
        "granularity": granularity,
        "granularity_name": labels.granularity_name(granularity),
        "reference_date": format_day(reference_date),
        "start": format_day(period.start),
        "end": format_day(period.end),
        "previous_reference_date": format_day(shift_period(reference_date, granularity, PREVIOUS)),
        "next_reference_date": format_day(shift_period(reference_date, granularity, NEXT)),
        "caption": labels.period_caption(granularity),
        "range_caption": labels.range_caption(period),
        "headers": [
            {"date": format_day(d), "label": labels.day_header(d, granularity), "is_today": d == today}
            for d in period.days
        ],
        "month_columns": [
            {
                "label": col["label"],
                "year": col["year"],
                "month": col["month"],
                "weeks": [[format_day(d) for d in week] for week in col["weeks"]],
            }
            for col in labels.month_columns(period)
        ],
        "rows": rows,
        "overall": overall,
    }
