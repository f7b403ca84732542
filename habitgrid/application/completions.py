"""Completion store use cases and queries"""
import logging
from datetime import date, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from habitgrid.application.habits import get_habit, HabitNotFoundError
from habitgrid.infrastructure.eventlog.repository import EventLogRepository
from habitgrid.infrastructure.db.models import HabitCompletion
from habitgrid.domain.habit_completion import HabitCompletionEvent
from habitgrid.utils.dates import local_now, local_today, to_day, format_day

logger = logging.getLogger(__name__)


class MarkHabitCompleteUseCase:
    """
    Record that a habit was done on a day (today in the reference zone by default).

    (habit_id, day) is a natural key: marking an already completed day is a
    no-op. The existence check runs first; the UNIQUE constraint catches a
    concurrent insert that slips between check and write.
    """
    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventLogRepository(db)

    def execute(self, habit_id: str, owner_id: str, day: date | str | None = None,
                now: datetime | None = None) -> bool:
        if now is None:
            now = local_now()
        day = to_day(day) if day is not None else to_day(now)

        if not get_habit(self.db, owner_id, habit_id):
            raise HabitNotFoundError(f"Habit {habit_id} not found")

        if _find(self.db, habit_id, owner_id, day):
            return False

        self.db.add(HabitCompletion(
            habit_id=habit_id, owner_id=owner_id, day=day, completed_at=now,
        ))
        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            logger.info("Completion %s/%s already recorded concurrently", habit_id, day)
            return False

        self.event_repo.append_event(
            owner_id=owner_id,
            event_type="habit_completed",
            payload=HabitCompletionEvent.complete(habit_id, format_day(day), now),
        )
        self.db.commit()
        logger.info("Habit %s completed on %s", habit_id, day)
        return True


class RemoveHabitCompletionUseCase:
    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventLogRepository(db)

    def execute(self, habit_id: str, owner_id: str, day: date | str) -> bool:
        day = to_day(day)
        removed = self.db.query(HabitCompletion).filter(
            HabitCompletion.habit_id == habit_id,
            HabitCompletion.owner_id == owner_id,
            HabitCompletion.day == day,
        ).delete(synchronize_session=False)
        if not removed:
            return False

        self.event_repo.append_event(
            owner_id=owner_id,
            event_type="habit_completion_removed",
            payload=HabitCompletionEvent.remove(habit_id, format_day(day), removed),
        )
        self.db.commit()
        logger.info("Completion of habit %s on %s removed", habit_id, day)
        return True


class ToggleTodayCompletionUseCase:
    """Today's checkbox: DONE -> not done, not done -> DONE. Returns the new state."""
    def __init__(self, db: Session):
        self.db = db

    def execute(self, habit_id: str, owner_id: str, now: datetime | None = None) -> bool:
        if now is None:
            now = local_now()
        today = to_day(now)

        if _find(self.db, habit_id, owner_id, today):
            RemoveHabitCompletionUseCase(self.db).execute(habit_id, owner_id, today)
            return False

        MarkHabitCompleteUseCase(self.db).execute(habit_id, owner_id, day=today, now=now)
        return True


def _find(db: Session, habit_id: str, owner_id: str, day: date) -> HabitCompletion | None:
    return db.query(HabitCompletion).filter(
        HabitCompletion.habit_id == habit_id,
        HabitCompletion.owner_id == owner_id,
        HabitCompletion.day == day,
    ).first()


# --- Queries ---

def fetch_completions(db: Session, owner_id: str, start: date, end: date) -> list[HabitCompletion]:
    """Owner's completions with start <= day <= end."""
    return db.query(HabitCompletion).filter(
        HabitCompletion.owner_id == owner_id,
        HabitCompletion.day >= start,
        HabitCompletion.day <= end,
    ).order_by(HabitCompletion.day.asc(), HabitCompletion.id.asc()).all()


def fetch_today_completions(db: Session, owner_id: str, today: date | None = None) -> list[HabitCompletion]:
    if today is None:
        today = local_today()
    return fetch_completions(db, owner_id, today, today)
