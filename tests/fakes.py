# tests/fakes.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from taskboard.core.ports import TaskApiError
from taskboard.tasks.task_models import Task, TaskStatus

FAIL_MESSAGES = {
    "list": "Failed to fetch tasks",
    "create": "Failed to create task",
    "update": "Failed to update status",
    "delete": "Failed to delete",
}


class FakeTaskApi:
    """
    In-memory TaskApi used by board tests.

    - Captures calls for assertions
    - `fail` holds operation names ("list", "create", "update", "delete")
      that raise TaskApiError
    - `gate`, when set, holds every call until the event is set, so tests
      can look at the optimistic state while a request is "in flight"
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks: list[Task] = list(tasks or [])
        self.calls: list[tuple] = []
        self.fail: set[str] = set()
        self.gate: asyncio.Event | None = None
        self._next_id = 100

    async def _enter(self, op: str, *args) -> None:
        self.calls.append((op, *args))
        if self.gate is not None:
            await self.gate.wait()
        if op in self.fail:
            raise TaskApiError(FAIL_MESSAGES[op], status_code=500)

    async def list_tasks(self, *, search: str = "", status: str = "") -> list[Task]:
        await self._enter("list", search, status)
        out = list(self.tasks)
        if search:
            out = [t for t in out if search.lower() in t.title.lower()]
        if status:
            out = [t for t in out if t.status.value == status]
        return out

    async def create_task(self, *, title: str, description: str) -> None:
        await self._enter("create", title, description)
        self._next_id += 1
        self.tasks.append(Task(id=str(self._next_id), title=title, description=description))

    async def update_status(self, task_id: str, status: TaskStatus) -> None:
        await self._enter("update", task_id, status)
        self.tasks = [t.with_status(status) if t.id == task_id else t for t in self.tasks]

    async def delete_task(self, task_id: str) -> None:
        await self._enter("delete", task_id)
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def ops(self) -> list[str]:
        return [c[0] for c in self.calls]


@dataclass(slots=True)
class FakePrompts:
    """Deterministic confirm/alert pair; records what the user was asked."""

    answer: bool = True
    confirms: list[str] = field(default_factory=list)
    alerts: list[str] = field(default_factory=list)

    def confirm(self, message: str) -> bool:
        self.confirms.append(message)
        return self.answer

    def alert(self, message: str) -> None:
        self.alerts.append(message)
