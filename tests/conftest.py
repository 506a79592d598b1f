# tests/conftest.py

from __future__ import annotations

import pytest

from taskboard.core.board import TaskBoard
from taskboard.tasks.task_models import Task, TaskStatus

from .fakes import FakePrompts, FakeTaskApi


@pytest.fixture()
def sample_tasks() -> list[Task]:
    return [
        Task(id="1", title="Write report", description="Q3 numbers", status=TaskStatus.PENDING),
        Task(id="2", title="Review PR", status=TaskStatus.IN_PROGRESS),
        Task(id="3", title="Ship release", status=TaskStatus.COMPLETED),
    ]


@pytest.fixture()
def api(sample_tasks: list[Task]) -> FakeTaskApi:
    return FakeTaskApi(sample_tasks)


@pytest.fixture()
def prompts() -> FakePrompts:
    return FakePrompts()


@pytest.fixture()
def board(api: FakeTaskApi, prompts: FakePrompts) -> TaskBoard:
    """
    TaskBoard wired with deterministic fakes.

    No debounce and no list fencing: the defaults the app ships with.
    """
    return TaskBoard(api, confirm=prompts.confirm, alert=prompts.alert)
