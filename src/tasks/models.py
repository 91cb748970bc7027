"""Task record and its JSON wire representation."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping

MAX_VISIBLE_TASKS = 3
MIN_POMODOROS_PER_TASK = 1
MAX_POMODOROS_PER_TASK = 10


def new_task_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Task:
    """User-defined task. Identity is `id`; instances are never mutated."""
    name: str
    pomodoros_needed: int
    id: str = field(default_factory=new_task_id)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "pomodorosNeeded": self.pomodoros_needed,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Task":
        """Build a task from a decoded record, raising ValueError on bad shape."""
        if not isinstance(record, Mapping):
            raise ValueError("Task record must be an object.")

        task_id = record.get("id")
        name = record.get("name")
        pomodoros = record.get("pomodorosNeeded")
        if not isinstance(task_id, str) or not task_id:
            raise ValueError("Task record is missing a string id.")
        if not isinstance(name, str):
            raise ValueError("Task record is missing a string name.")
        if isinstance(pomodoros, bool) or not isinstance(pomodoros, int):
            raise ValueError("Task record pomodorosNeeded must be an integer.")
        return cls(name=name, pomodoros_needed=pomodoros, id=task_id)
