# src/taskboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task lifecycle status, as spelled on the wire.

    The only transitions offered to the user are
    pending -> in-progress -> completed.
    """

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def from_wire(cls, raw: Any) -> TaskStatus:
        if not raw:
            return cls.PENDING
        try:
            return cls(str(raw))
        except ValueError:
            return cls.PENDING

    def next_status(self) -> TaskStatus | None:
        """Status reached by the card's transition action (None when final)."""
        if self is TaskStatus.PENDING:
            return TaskStatus.IN_PROGRESS
        if self is TaskStatus.IN_PROGRESS:
            return TaskStatus.COMPLETED
        return None


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> Task:
        """Decode one element of the list envelope (`_id` is the server id)."""
        task_id = raw.get("_id")
        if task_id is None:
            raise ValueError("task without _id")
        description = raw.get("description")
        return cls(
            id=str(task_id),
            title=str(raw.get("title") or ""),
            description="" if description is None else str(description),
            status=TaskStatus.from_wire(raw.get("status")),
        )

    def with_status(self, status: TaskStatus) -> Task:
        return Task(id=self.id, title=self.title, description=self.description, status=status)
