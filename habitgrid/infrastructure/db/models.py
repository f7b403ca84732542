"""
SQLAlchemy ORM models (habit store, completion store, event log)
"""
from datetime import date as date_type
from sqlalchemy import String, DateTime, Text, TIMESTAMP, Date, ForeignKey, JSON, func, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from habitgrid.infrastructure.db.session import Base


class EventLog(Base):
    """
    Append-only audit trail of every mutation made through the use cases
    """
    __tablename__ = "event_log"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    event_type: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    payload_json: Mapped[dict] = mapped_column(JSON, nullable=False)

    occurred_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        index=True
    )


class HabitModel(Base):
    """Habit records, scoped by owner"""
    __tablename__ = "habits"

    habit_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    name: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )


class HabitCompletion(Base):
    """One row per (habit, calendar day) the habit was done"""
    __tablename__ = "habit_completions"

    id: Mapped[int] = mapped_column(primary_key=True)
    habit_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("habits.habit_id", ondelete="CASCADE"), nullable=False, index=True
    )
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    # Calendar day in the reference timezone, no time component
    day: Mapped[date_type] = mapped_column(Date, nullable=False)
    completed_at: Mapped[DateTime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint('habit_id', 'day', name='uq_habit_completion_day'),
        Index('ix_habit_completion_owner_day', 'owner_id', 'day'),
    )
