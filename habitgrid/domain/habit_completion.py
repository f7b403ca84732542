"""HabitCompletion domain entity - builds event payloads for completion actions"""
from datetime import datetime
from typing import Dict, Any


class HabitCompletionEvent:
    @staticmethod
    def complete(habit_id: str, day: str, completed_at: datetime) -> Dict[str, Any]:
        return {
            "habit_id": habit_id,
            "day": day,
            "completed_at": completed_at.isoformat(),
        }

    @staticmethod
    def remove(habit_id: str, day: str, removed: int) -> Dict[str, Any]:
        return {
            "habit_id": habit_id,
            "day": day,
            "removed": removed,
        }
