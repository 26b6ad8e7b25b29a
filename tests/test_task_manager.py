# tests/test_task_manager.py

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from tasklist.tasks.task_manager import TaskListManager
from tasklist.tasks.task_models import Task
from tasklist.tasks.task_store import InMemoryTaskStore, JsonFileTaskStore


def _manager_with(*titles: str) -> TaskListManager:
    manager = TaskListManager(InMemoryTaskStore())
    for title in titles:
        manager.add_task(title, "")
    return manager


def test_scenario_add_toggle_remove() -> None:
    manager = TaskListManager(InMemoryTaskStore())
    assert manager.list_all() == []

    created = manager.add_task("Buy milk", "2%")
    tasks = manager.list_all()
    assert len(tasks) == 1
    assert tasks[0].title == "Buy milk"
    assert tasks[0].description == "2%"
    assert tasks[0].is_completed is False

    toggled = manager.toggle_completion(0)
    assert toggled.is_completed is True

    removed = manager.remove_task(0)
    assert removed.id == created.id
    assert manager.list_all() == []


def test_add_task_ids_are_unique() -> None:
    manager = _manager_with()
    a = manager.add_task("a", "")
    b = manager.add_task("a", "")
    assert a.id != b.id
    assert a != b


def test_remove_shifts_later_tasks_down() -> None:
    manager = _manager_with("t0", "t1", "t2", "t3")
    before = manager.list_all()

    removed = manager.remove_task(1)

    after = manager.list_all()
    assert removed == before[1]
    assert after[0] == before[0]
    assert len(after) == 3
    assert after[1:] == before[2:]


def test_toggle_is_self_inverse() -> None:
    manager = _manager_with("t0", "t1")
    original = manager.get_task(1).is_completed

    manager.toggle_completion(1)
    manager.toggle_completion(1)

    assert manager.get_task(1).is_completed is original
    assert manager.get_task(0).is_completed is False


@pytest.mark.parametrize("op", ["remove_task", "get_task", "toggle_completion"])
@pytest.mark.parametrize("index", [2, 3, -1, -2])
def test_out_of_range_index_fails(op: str, index: int) -> None:
    manager = _manager_with("t0", "t1")

    with pytest.raises(IndexError):
        getattr(manager, op)(index)

    assert [t.title for t in manager.list_all()] == ["t0", "t1"]


@pytest.mark.parametrize("op", ["remove_task", "get_task", "toggle_completion"])
def test_empty_list_rejects_index_zero(op: str) -> None:
    with pytest.raises(IndexError):
        getattr(_manager_with(), op)(0)


def test_manager_loads_existing_snapshot(store: JsonFileTaskStore) -> None:
    tasks = [Task(title="a"), Task(title="b", is_completed=True)]
    store.save(tasks)

    manager = TaskListManager(store)

    assert manager.list_all() == tasks
    assert len(manager) == 2


def test_manager_starts_empty_on_corrupt_storage(store: JsonFileTaskStore) -> None:
    store.path.write_text("garbage", "utf-8")
    manager = TaskListManager(store)
    assert manager.list_all() == []


def test_manager_does_not_persist_by_itself(store: JsonFileTaskStore) -> None:
    store.ensure_initialized()
    manager = TaskListManager(store)

    manager.add_task("unsaved", "")
    assert store.load() is None

    assert store.save(manager.list_all()) is True
    assert [t.title for t in store.load() or []] == ["unsaved"]


def test_list_all_returns_a_snapshot() -> None:
    manager = _manager_with("t0")
    snapshot = manager.list_all()
    snapshot.clear()
    assert len(manager) == 1


def test_snapshot_does_not_follow_later_toggles() -> None:
    manager = _manager_with("t0")
    snapshot = manager.list_all()
    fetched = manager.get_task(0)

    toggled = manager.toggle_completion(0)

    assert toggled.is_completed is True
    assert snapshot[0].is_completed is False
    assert fetched.is_completed is False
    assert manager.get_task(0).is_completed is True
    assert toggled.id == snapshot[0].id


def test_tasks_handed_out_cannot_be_changed() -> None:
    manager = _manager_with("a", "b")
    first, second = manager.list_all()

    with pytest.raises(FrozenInstanceError):
        first.is_completed = True  # type: ignore[misc]
    with pytest.raises(FrozenInstanceError):
        second.id = first.id  # type: ignore[misc]

    assert manager.get_task(0).is_completed is False
    assert manager.get_task(0).id != manager.get_task(1).id
