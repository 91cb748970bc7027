"""In-memory task list owned by the app and persisted on every mutation."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from .models import Task


class TaskStore:
    """Ordered task list with add/delete.

    The store accepts any input: the visible-task limit and the non-empty
    name rule belong to the UI, which disables its submit action instead.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        on_change: Optional[Callable[[tuple[Task, ...]], None]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._tasks: list[Task] = list(tasks)
        self._on_change = on_change
        self._logger = logger or logging.getLogger("tasks")

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def add_task(self, name: str, pomodoros_needed: int) -> Task:
        task = Task(name=name, pomodoros_needed=pomodoros_needed)
        self._tasks.append(task)
        self._logger.info("Task added: id=%s pomodoros=%s", task.id, pomodoros_needed)
        self._changed()
        return task

    def delete_task(self, task_id: str) -> bool:
        remaining = [task for task in self._tasks if task.id != task_id]
        if len(remaining) == len(self._tasks):
            self._logger.debug("Task delete ignored, no match: id=%s", task_id)
            return False

        self._tasks = remaining
        self._logger.info("Task deleted: id=%s", task_id)
        self._changed()
        return True

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.tasks)
