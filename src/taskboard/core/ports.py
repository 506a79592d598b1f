# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the board.

The synchronization engine depends on Protocols instead of concrete
implementations, so the HTTP adapter and the interactive prompts can be
swapped for fakes in tests.
"""

from collections.abc import Callable
from typing import Protocol

from ..tasks.task_models import Task, TaskStatus

Confirm = Callable[[str], bool]
# Blocking yes/no question; returning False aborts the action.

Alert = Callable[[str], None]
# Blocking notice shown to the user (validation failures).


class TaskApiError(Exception):
    """A task API call failed; str(err) is the message shown in the error banner."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TaskApi(Protocol):
    """Remote task collection. Every method raises TaskApiError on failure."""

    async def list_tasks(self, *, search: str = "", status: str = "") -> list[Task]: ...

    async def create_task(self, *, title: str, description: str) -> None: ...

    async def update_status(self, task_id: str, status: TaskStatus) -> None: ...

    async def delete_task(self, task_id: str) -> None: ...
