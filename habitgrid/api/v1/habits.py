"""
Habit and completion API endpoints
"""
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from habitgrid.api.deps import get_db, get_current_owner
from habitgrid.infrastructure.db.models import HabitModel, HabitCompletion
from habitgrid.application.habits import (
    CreateHabitUseCase, RenameHabitUseCase, DeleteHabitUseCase,
    HabitValidationError, HabitNotFoundError,
    list_habits, get_habit,
)
from habitgrid.application.completions import (
    MarkHabitCompleteUseCase, RemoveHabitCompletionUseCase, ToggleTodayCompletionUseCase,
    fetch_completions, fetch_today_completions,
)
from habitgrid.utils.dates import local_now, to_day, format_day


router = APIRouter(prefix="/api/v1/habits", tags=["habits"])


# === Request/Response models ===

class HabitNameRequest(BaseModel):
    name: str  # trimmed and checked by the use case (400 when blank)


class MarkCompleteRequest(BaseModel):
    day: date | None = None  # default: today in the reference timezone


class HabitResponse(BaseModel):
    habit_id: str
    owner_id: str
    name: str
    created_at: datetime


class CompletionResponse(BaseModel):
    id: int
    habit_id: str
    owner_id: str
    day: str  # YYYY-MM-DD
    completed_at: datetime


class CompletionStateResponse(BaseModel):
    habit_id: str
    day: str
    completed: bool
    changed: bool


# === Helpers ===

def _habit_response(h: HabitModel) -> HabitResponse:
    return HabitResponse(
        habit_id=h.habit_id,
        owner_id=h.owner_id,
        name=h.name,
        created_at=h.created_at,
    )


def _completion_response(c: HabitCompletion) -> CompletionResponse:
    return CompletionResponse(
        id=c.id,
        habit_id=c.habit_id,
        owner_id=c.owner_id,
        day=format_day(c.day),
        completed_at=c.completed_at,
    )


def _parse_day(value: str) -> date:
    try:
        return to_day(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid day {value!r}, expected YYYY-MM-DD")


# === Completions ===

@router.get("/completions/today", response_model=list[CompletionResponse])
def list_today_completions(
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    """Completions recorded for today (reference timezone)"""
    return [_completion_response(c) for c in fetch_today_completions(db, owner_id)]


@router.get("/completions", response_model=list[CompletionResponse])
def list_completions(
    start: str,
    end: str,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    """Completions with start <= day <= end"""
    start_day, end_day = _parse_day(start), _parse_day(end)
    if start_day > end_day:
        raise HTTPException(status_code=422, detail="start must be <= end")
    return [_completion_response(c) for c in fetch_completions(db, owner_id, start_day, end_day)]


# === Habits ===

@router.get("/", response_model=list[HabitResponse])
def list_habits_endpoint(
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    """Owner's habits, newest first"""
    return [_habit_response(h) for h in list_habits(db, owner_id)]


@router.post("/", response_model=HabitResponse, status_code=status.HTTP_201_CREATED)
def create_habit(
    req: HabitNameRequest,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    try:
        habit_id = CreateHabitUseCase(db).execute(owner_id=owner_id, name=req.name)
    except HabitValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    habit = get_habit(db, owner_id, habit_id)
    if not habit:
        raise HTTPException(status_code=500, detail="Habit creation failed")
    return _habit_response(habit)


@router.get("/{habit_id}", response_model=HabitResponse)
def get_habit_endpoint(
    habit_id: str,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    habit = get_habit(db, owner_id, habit_id)
    if not habit:
        raise HTTPException(status_code=404, detail="Habit not found")
    return _habit_response(habit)


@router.patch("/{habit_id}", response_model=HabitResponse)
def rename_habit(
    habit_id: str,
    req: HabitNameRequest,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    try:
        habit = RenameHabitUseCase(db).execute(habit_id, owner_id, req.name)
    except HabitNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except HabitValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    return _habit_response(habit)


@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_habit(
    habit_id: str,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    try:
        DeleteHabitUseCase(db).execute(habit_id, owner_id)
    except HabitNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{habit_id}/completions", response_model=CompletionStateResponse)
def mark_complete(
    habit_id: str,
    req: MarkCompleteRequest | None = None,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    """Mark a habit done for a day; repeating it is a no-op (changed=false)"""
    now = local_now()
    day = req.day if req and req.day else to_day(now)
    try:
        created = MarkHabitCompleteUseCase(db).execute(habit_id, owner_id, day=day, now=now)
    except HabitNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    return CompletionStateResponse(habit_id=habit_id, day=format_day(day), completed=True, changed=created)


@router.delete("/{habit_id}/completions/{day}", response_model=CompletionStateResponse)
def remove_completion(
    habit_id: str,
    day: str,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    parsed = _parse_day(day)
    removed = RemoveHabitCompletionUseCase(db).execute(habit_id, owner_id, parsed)
    return CompletionStateResponse(habit_id=habit_id, day=format_day(parsed), completed=False, changed=removed)


@router.post("/{habit_id}/toggle", response_model=CompletionStateResponse)
def toggle_today(
    habit_id: str,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    """Flip today's completion of a habit"""
    now = local_now()
    try:
        completed = ToggleTodayCompletionUseCase(db).execute(habit_id, owner_id, now=now)
    except HabitNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    return CompletionStateResponse(habit_id=habit_id, day=format_day(now), completed=completed, changed=True)
