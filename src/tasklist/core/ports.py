# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task list manager depends on this Protocol instead of a concrete store.
This keeps storage swappable (JSON file, in-memory) and makes testing easier.
"""

from collections.abc import Sequence
from typing import Protocol

from ..tasks.task_models import Task


class TaskStorage(Protocol):
    """Persists the whole task list as one snapshot."""

    def save(self, tasks: Sequence[Task]) -> bool: ...

    # None means "nothing present": no snapshot, zero tasks, or undecodable data.
    def load(self) -> list[Task] | None: ...
