"""
Event Log Repository - append-only audit trail

Every mutation of the habit and completion stores is recorded here as an
immutable event next to the row change itself.
"""
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
from sqlalchemy.orm import Session

from habitgrid.infrastructure.db.models import EventLog


class EventLogRepository:
    """
    Repository for the event_log table
    """

    def __init__(self, db: Session):
        self.db = db

    def append_event(
        self,
        owner_id: str,
        event_type: str,
        payload: Dict[str, Any],
        occurred_at: Optional[datetime] = None,
    ) -> int:
        """
        Append an event to the log (flushed, not committed)

        Args:
            owner_id: Owner the event belongs to
            event_type: Event type, e.g. "habit_created"
            payload: JSON-serialisable event data
            occurred_at: When it happened (default: now, UTC)

        Returns:
            event_id: ID of the stored event

        Example:
            >>> repo = EventLogRepository(db)
            >>> event_id = repo.append_event(
            ...     owner_id="user-123",
            ...     event_type="habit_created",
            ...     payload={"habit_id": "3f0c...", "name": "Leer"},
            ... )
        """
        if occurred_at is None:
            occurred_at = datetime.now(timezone.utc)

        event = EventLog(
            owner_id=owner_id,
            event_type=event_type,
            payload_json=payload,
            occurred_at=occurred_at,
        )

        self.db.add(event)
        self.db.flush()

        return event.id

    def list_events(
        self,
        owner_id: str,
        event_types: Optional[List[str]] = None,
        limit: int = 200,
    ) -> List[EventLog]:
        """
        Events of an owner in insertion order (ASC), optionally filtered by type
        """
        query = self.db.query(EventLog).filter(EventLog.owner_id == owner_id)

        if event_types:
            query = query.filter(EventLog.event_type.in_(event_types))

        return query.order_by(EventLog.id.asc()).limit(limit).all()

    def count_events(
        self,
        owner_id: str,
        event_types: Optional[List[str]] = None
    ) -> int:
        """
        Count events of an owner, optionally filtered by type
        """
        query = self.db.query(EventLog).filter(EventLog.owner_id == owner_id)

        if event_types:
            query = query.filter(EventLog.event_type.in_(event_types))

        return query.count()
