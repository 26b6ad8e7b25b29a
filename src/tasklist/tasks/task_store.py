# src/tasklist/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from ..config import TASKS_FILENAME, default_data_dir
from .task_models import Task

logger = logging.getLogger(__name__)


class JsonFileTaskStore:
    """
    JSON file task store.

    The file holds one snapshot: a JSON array of task records.
    - save() writes a temp file next to the target, then os.replace()s it,
      so a failed save never leaves a half-written snapshot behind
    - load() treats a missing, empty, or undecodable file the same way: None
    - every call opens and closes the file; no handle is kept between calls
    """

    def __init__(self, path: str | Path | None = None) -> None:
        # Resolved once; StorageLocationError propagates (startup-fatal).
        if path is None:
            path = default_data_dir() / TASKS_FILENAME
        self._path = Path(path)
        logger.debug("JsonFileTaskStore path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def _tmp_path(self) -> Path:
        return self._path.with_suffix(self._path.suffix + ".tmp")

    @staticmethod
    def _encode(tasks: Sequence[Task]) -> str:
        return json.dumps([t.to_record() for t in tasks], ensure_ascii=False, indent=2)

    @staticmethod
    def _decode(text: str) -> list[Task]:
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError(f"snapshot must be a JSON array, got {type(data).__name__}")
        return [Task.from_record(item) for item in data]

    # ---- public API ----

    def ensure_initialized(self) -> bool:
        """
        First-time setup: create the file with an empty list if it is missing.

        Never touches an existing file. Returns True only if the file was created.
        """
        if self._path.exists():
            logger.debug("Tasks file exists: %s", self._path)
            return False

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # "x" mode: never clobber a file that appeared in the meantime.
            with open(self._path, "x", encoding="utf-8") as f:
                f.write(self._encode([]))
        except FileExistsError:
            return False
        except Exception:
            logger.exception("Failed to create tasks file %s", self._path)
            return False

        logger.info("First-time setup complete: created %s", self._path)
        return True

    def save(self, tasks: Sequence[Task]) -> bool:
        tmp = self._tmp_path()
        try:
            payload = self._encode(tasks)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self._path)
        except Exception:
            logger.exception("Failed to save %d tasks to %s", len(tasks), self._path)
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            return False

        logger.info("Saved %d tasks to %s", len(tasks), self._path)
        return True

    def load(self) -> list[Task] | None:
        try:
            with open(self._path, encoding="utf-8") as f:
                text = f.read()
        except FileNotFoundError:
            logger.info("No tasks file at %s", self._path)
            return None
        except Exception:
            logger.exception("Failed to read tasks from %s", self._path)
            return None

        if not text.strip():
            logger.info("Tasks file %s is empty", self._path)
            return None

        try:
            tasks = self._decode(text)
        except Exception:
            # Corrupt data is reported the same way as absence; see DESIGN.md.
            logger.exception("Failed to decode tasks from %s", self._path)
            return None

        if not tasks:
            logger.debug("Tasks file %s holds no tasks", self._path)
            return None

        logger.info("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks


class InMemoryTaskStore:
    """
    Non-persistent task store for tests and throwaway sessions.

    NOTE: save() is compare-only. It returns True when the given tasks equal
    what the store already holds and never updates the held tasks, so after
    the first mutation every save reports False. Callers needing real
    in-memory persistence must seed the store through the constructor.
    """

    def __init__(self, tasks: Sequence[Task] | None = None) -> None:
        self._tasks: list[Task] = [replace(t) for t in tasks or ()]

    def save(self, tasks: Sequence[Task]) -> bool:
        if list(tasks) == self._tasks:
            logger.debug("Tasks match in-memory snapshot (%d tasks)", len(self._tasks))
            return True
        logger.warning(
            "In-memory store does not accept new data (held=%d given=%d)",
            len(self._tasks),
            len(tasks),
        )
        return False

    def load(self) -> list[Task] | None:
        if not self._tasks:
            logger.debug("No tasks in memory")
            return None
        return [replace(t) for t in self._tasks]
