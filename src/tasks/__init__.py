from .models import (
    MAX_POMODOROS_PER_TASK,
    MAX_VISIBLE_TASKS,
    MIN_POMODOROS_PER_TASK,
    Task,
    new_task_id,
)
from .store import TaskStore

__all__ = [
    "MAX_POMODOROS_PER_TASK",
    "MAX_VISIBLE_TASKS",
    "MIN_POMODOROS_PER_TASK",
    "Task",
    "TaskStore",
    "new_task_id",
]
