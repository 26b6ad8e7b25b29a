# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..tasks.task_manager import TaskListManager
from .ports import TaskStorage


@dataclass
class AppState:
    # Settings travel with the state so handlers never read config globally.
    settings: Settings
    storage: TaskStorage
    manager: TaskListManager
