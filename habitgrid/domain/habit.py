"""Habit domain entity - builds event payloads for habit operations"""
from datetime import datetime, timezone
from typing import Dict, Any


class Habit:
    @staticmethod
    def create(owner_id: str, habit_id: str, name: str) -> Dict[str, Any]:
        return {
            "habit_id": habit_id,
            "owner_id": owner_id,
            "name": name,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }

    @staticmethod
    def rename(habit_id: str, old_name: str, name: str) -> Dict[str, Any]:
        return {
            "habit_id": habit_id,
            "old_name": old_name,
            "name": name,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }

    @staticmethod
    def delete(habit_id: str, name: str, removed_completions: int) -> Dict[str, Any]:
        return {
            "habit_id": habit_id,
            "name": name,
            "removed_completions": removed_completions,
            "deleted_at": datetime.now(timezone.utc).isoformat(),
        }
