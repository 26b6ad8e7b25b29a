# src/tasklist/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any


def new_task_id() -> str:
    return str(uuid.uuid4()).upper()


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single to-do item.

    On disk the record uses the keys: description, id, title, isCompleted.
    """

    title: str
    description: str = ""
    is_completed: bool = False
    id: str = field(default_factory=new_task_id)

    def to_record(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "id": self.id,
            "title": self.title,
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_record(cls, raw: Any) -> Task:
        """
        Strict decode of one stored record.

        Raises ValueError if the record is not an object with all four keys
        of the expected types and a UUID-shaped id.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"task record must be an object, got {type(raw).__name__}")

        for key, typ in (("description", str), ("id", str), ("title", str), ("isCompleted", bool)):
            if key not in raw:
                raise ValueError(f"task record is missing {key!r}")
            if not isinstance(raw[key], typ):
                raise ValueError(f"task record field {key!r} must be {typ.__name__}")

        try:
            uuid.UUID(raw["id"])
        except ValueError as e:
            raise ValueError(f"task record id is not a UUID: {raw['id']!r}") from e

        return cls(
            title=raw["title"],
            description=raw["description"],
            is_completed=raw["isCompleted"],
            id=raw["id"],
        )
