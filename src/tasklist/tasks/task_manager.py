# src/tasklist/tasks/task_manager.py

from __future__ import annotations

import logging
from dataclasses import replace

from ..core.ports import TaskStorage
from .task_models import Task, new_task_id

logger = logging.getLogger(__name__)


class TaskListManager:
    """
    Owns the ordered task list.

    Tasks are frozen; toggling swaps in an updated copy, so anything handed
    out (including list_all() snapshots) never changes afterwards.

    Positions are zero-based and checked against 0 <= index < len(self)
    (no negative wraparound). The manager never persists on its own: callers
    pass list_all() to storage.save() after each mutation.
    """

    def __init__(self, storage: TaskStorage) -> None:
        self._storage = storage
        self._tasks: list[Task] = []
        self._load_from_storage()

    def _load_from_storage(self) -> None:
        tasks = self._storage.load()
        if tasks is None:
            logger.info("No tasks in storage; starting with an empty list")
            return
        self._tasks = list(tasks)
        logger.debug("TaskListManager loaded %d tasks", len(self._tasks))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._tasks):
            raise IndexError(f"task index {index} out of range (0..{len(self._tasks) - 1})")

    def _unique_id(self) -> str:
        taken = {t.id for t in self._tasks}
        while True:
            task_id = new_task_id()
            if task_id not in taken:
                return task_id

    def __len__(self) -> int:
        return len(self._tasks)

    def add_task(self, title: str, description: str) -> Task:
        task = Task(title=title, description=description, is_completed=False, id=self._unique_id())
        self._tasks.append(task)
        logger.debug("Task added id=%s position=%d", task.id, len(self._tasks) - 1)
        return task

    def remove_task(self, index: int) -> Task:
        self._check_index(index)
        task = self._tasks.pop(index)
        logger.debug("Task removed id=%s position=%d", task.id, index)
        return task

    def get_task(self, index: int) -> Task:
        self._check_index(index)
        return self._tasks[index]

    def toggle_completion(self, index: int) -> Task:
        self._check_index(index)
        task = replace(self._tasks[index], is_completed=not self._tasks[index].is_completed)
        self._tasks[index] = task
        logger.debug("Task toggled id=%s completed=%s", task.id, task.is_completed)
        return task

    def list_all(self) -> list[Task]:
        return list(self._tasks)
