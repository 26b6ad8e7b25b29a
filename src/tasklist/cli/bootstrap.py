# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- picks the storage backend named in settings,
- runs the one-time data file setup for the file backend,
- wires the backend into a TaskListManager and returns AppState.
"""

from __future__ import annotations

import logging

from ..config import Settings, StorageBackend
from ..core.ports import TaskStorage
from ..core.state import AppState
from ..tasks.task_manager import TaskListManager
from ..tasks.task_store import InMemoryTaskStore, JsonFileTaskStore

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> TaskStorage:
    backend = settings.storage_backend

    if backend == StorageBackend.FILE:
        store = JsonFileTaskStore(settings.tasks_path)
        store.ensure_initialized()
        return store

    if backend == StorageBackend.MEMORY:
        logger.info("Using in-memory storage; tasks will not survive this run.")
        return InMemoryTaskStore()

    raise ValueError(f"Unknown storage backend: {backend!r}")


def create_initial_state(*, settings: Settings, storage: TaskStorage | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    `storage` may be injected (tests); otherwise it is built from settings.
    """
    if storage is None:
        storage = build_storage(settings)

    manager = TaskListManager(storage)
    logger.info("Task list ready (%d tasks, backend=%s)", len(manager), settings.storage_backend)
    return AppState(settings=settings, storage=storage, manager=manager)
