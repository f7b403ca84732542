"""Habit store use cases and queries"""
import logging
import uuid
from datetime import datetime

from sqlalchemy.orm import Session

from habitgrid.infrastructure.eventlog.repository import EventLogRepository
from habitgrid.infrastructure.db.models import HabitModel, HabitCompletion
from habitgrid.domain.habit import Habit
from habitgrid.utils.dates import utc_now
from habitgrid.utils.validation import validate_and_normalize_habit_name

logger = logging.getLogger(__name__)


class HabitValidationError(ValueError):
    pass


class HabitNotFoundError(LookupError):
    pass


def _normalize_name(name: str | None) -> str:
    try:
        return validate_and_normalize_habit_name(name)
    except ValueError as e:
        raise HabitValidationError(str(e)) from e


def _require_habit(db: Session, owner_id: str, habit_id: str) -> HabitModel:
    habit = get_habit(db, owner_id, habit_id)
    if not habit:
        raise HabitNotFoundError(f"Habit {habit_id} not found")
    return habit


class CreateHabitUseCase:
    """Creates a habit for an owner; the name is stored trimmed."""
    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventLogRepository(db)

    def execute(self, owner_id: str, name: str, created_at: datetime | None = None) -> str:
        name = _normalize_name(name)
        habit_id = str(uuid.uuid4())

        self.db.add(HabitModel(
            habit_id=habit_id, owner_id=owner_id, name=name,
            created_at=created_at or utc_now(),
        ))
        self.event_repo.append_event(
            owner_id=owner_id,
            event_type="habit_created",
            payload=Habit.create(owner_id=owner_id, habit_id=habit_id, name=name),
        )
        self.db.commit()
        logger.info("Habit %s created for %s", habit_id, owner_id)
        return habit_id


class RenameHabitUseCase:
    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventLogRepository(db)

    def execute(self, habit_id: str, owner_id: str, name: str) -> HabitModel:
        name = _normalize_name(name)
        habit = _require_habit(self.db, owner_id, habit_id)

        old_name = habit.name
        habit.name = name
        self.event_repo.append_event(
            owner_id=owner_id,
            event_type="habit_renamed",
            payload=Habit.rename(habit_id, old_name, name),
        )
        self.db.commit()
        logger.info("Habit %s renamed", habit_id)
        return habit


class DeleteHabitUseCase:
    """Deletes a habit together with all of its completions."""
    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventLogRepository(db)

    def execute(self, habit_id: str, owner_id: str) -> None:
        habit = _require_habit(self.db, owner_id, habit_id)

        removed = self.db.query(HabitCompletion).filter(
            HabitCompletion.habit_id == habit_id,
            HabitCompletion.owner_id == owner_id,
        ).delete(synchronize_session=False)
        self.event_repo.append_event(
            owner_id=owner_id,
            event_type="habit_deleted",
            payload=Habit.delete(habit_id, habit.name, removed),
        )
        self.db.delete(habit)
        self.db.commit()
        logger.info("Habit %s deleted (%d completions removed)", habit_id, removed)


# --- Queries ---

def list_habits(db: Session, owner_id: str) -> list[HabitModel]:
    """Owner's habits, newest first."""
    return db.query(HabitModel).filter(
        HabitModel.owner_id == owner_id,
    ).order_by(HabitModel.created_at.desc(), HabitModel.habit_id).all()


def get_habit(db: Session, owner_id: str, habit_id: str) -> HabitModel | None:
    return db.query(HabitModel).filter(
        HabitModel.habit_id == habit_id,
        HabitModel.owner_id == owner_id,
    ).first()
