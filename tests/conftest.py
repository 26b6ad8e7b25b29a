# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.cli.bootstrap import create_initial_state
from tasklist.config import StorageBackend
from tasklist.core.state import AppState
from tasklist.tasks.task_store import JsonFileTaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    A SimpleNamespace rather than Settings.from_env(), to keep unit tests
    isolated from the real environment and home directory.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        log_to_file=False,
        storage_backend=StorageBackend.FILE,
        data_dir=tmp_path,
        tasks_path=tmp_path / "todos.json",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> JsonFileTaskStore:
    return JsonFileTaskStore(settings.tasks_path)


@pytest.fixture()
def state(settings: SimpleNamespace, store: JsonFileTaskStore) -> AppState:
    """AppState wired with a real JSON store in tmp_path."""
    store.ensure_initialized()
    return create_initial_state(settings=settings, storage=store)


@pytest.fixture()
def scripted() -> Callable[..., Callable[[str], str | None]]:
    """
    Build an `ask` callable that replays answers in order.

    Once the answers run out it behaves like EOF (returns None).
    """

    def make(*answers: str) -> Callable[[str], str | None]:
        queue = list(answers)
        prompts: list[str] = []

        def ask(prompt: str) -> str | None:
            prompts.append(prompt)
            return queue.pop(0) if queue else None

        ask.prompts = prompts  # type: ignore[attr-defined]
        return ask

    return make


@pytest.fixture()
def restore_root_logging():
    """setup_logging() rewires the root logger; put pytest's handlers back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)
