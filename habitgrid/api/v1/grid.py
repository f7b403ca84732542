"""
Habit grid API: one period of the calendar grid with completion stats
"""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from habitgrid.api.deps import get_db, get_current_owner
from habitgrid.application.habit_grid import build_grid_view
from habitgrid.domain.period import (
    WEEK, PeriodError, shift_period, go_to_current_period, validate_granularity,
)
from habitgrid.utils.dates import local_now, to_day


router = APIRouter(prefix="/api/v1/grid", tags=["grid"])


# === Response models ===

class StatsResponse(BaseModel):
    completed: int
    total: int
    percentage: int


class DayCellResponse(BaseModel):
    date: str
    status: str  # completed, incomplete, neutral
    is_today: bool


class GridRowResponse(BaseModel):
    habit_id: str
    name: str
    days: list[DayCellResponse]
    stats: StatsResponse


class HeaderResponse(BaseModel):
    date: str
    label: str
    is_today: bool


class MonthColumnResponse(BaseModel):
    label: str
    year: int
    month: int
    weeks: list[list[str]]


class GridResponse(BaseModel):
    granularity: str
    granularity_name: str
    reference_date: str
    start: str
    end: str
    today: str
    previous_reference_date: str
    next_reference_date: str
    caption: str
    range_caption: str
    headers: list[HeaderResponse]
    month_columns: list[MonthColumnResponse]
    rows: list[GridRowResponse]
    overall: StatsResponse


# === Helpers ===

def _parse_reference(value: str | None, today: date) -> date:
    if not value:
        return today
    try:
        return to_day(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date {value!r}, expected YYYY-MM-DD")


def _grid_response(db: Session, owner_id: str, view: str, reference: date, today: date) -> GridResponse:
    grid = build_grid_view(db, owner_id, view, reference, today)
    return GridResponse(
        granularity=grid["granularity"],
        granularity_name=grid["granularity_name"],
        reference_date=grid["reference_date"],
        start=grid["start"],
        end=grid["end"],
        today=today.isoformat(),
        previous_reference_date=grid["previous_reference_date"],
        next_reference_date=grid["next_reference_date"],
        caption=grid["caption"],
        range_caption=grid["range_caption"],
        headers=[HeaderResponse(**h) for h in grid["headers"]],
        month_columns=[MonthColumnResponse(**c) for c in grid["month_columns"]],
        rows=[
            GridRowResponse(
                habit_id=row["habit"].habit_id,
                name=row["habit"].name,
                days=[DayCellResponse(**d) for d in row["days"]],
                stats=StatsResponse(**row["stats"].as_dict()),
            )
            for row in grid["rows"]
        ],
        overall=StatsResponse(**grid["overall"].as_dict()),
    )


# === Endpoints ===

@router.get("/", response_model=GridResponse)
def get_grid(
    view: str = Query(WEEK),
    date_: str | None = Query(None, alias="date"),
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    """Grid for the period of `view` granularity containing `date` (default: today)"""
    today = to_day(local_now())
    try:
        validate_granularity(view)
    except PeriodError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _grid_response(db, owner_id, view, _parse_reference(date_, today), today)


@router.get("/navigate", response_model=GridResponse)
def navigate_grid(
    direction: str,
    view: str = Query(WEEK),
    date_: str | None = Query(None, alias="date"),
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    """Previous / next / current period relative to `date`"""
    now = local_now()
    today = to_day(now)
    reference = _parse_reference(date_, today)
    try:
        validate_granularity(view)
        if direction == "current":
            reference = go_to_current_period(now)
        else:
            reference = shift_period(reference, view, direction)
    except PeriodError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _grid_response(db, owner_id, view, reference, today)
