# src/taskboard/core/state.py

"""
Board view state and its pure transition functions.

BoardState is immutable: every transition returns a new value and leaves the
input untouched. That makes a "snapshot" nothing more than a reference to
the previous `tasks` tuple, and a rollback nothing more than putting that
tuple back.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from collections.abc import Iterable

from ..tasks.task_models import Task, TaskStatus


@dataclass(frozen=True, slots=True)
class BoardState:
    tasks: tuple[Task, ...] = ()
    is_loading: bool = True
    error: str | None = None

    # Form fields
    title: str = ""
    description: str = ""

    # Filters ("" means no filter)
    search_term: str = ""
    filter_status: str = ""


def initial_state() -> BoardState:
    return BoardState()


# ---- loading ----

def begin_loading(state: BoardState) -> BoardState:
    return replace(state, is_loading=True)


def finish_loading(state: BoardState) -> BoardState:
    return replace(state, is_loading=False)


def with_tasks(state: BoardState, tasks: Iterable[Task]) -> BoardState:
    return replace(state, tasks=tuple(tasks))


def with_error(state: BoardState, message: str) -> BoardState:
    """Record the latest error, replacing any previous one."""
    return replace(state, error=message)


# ---- form / filters ----

def with_form(
    state: BoardState,
    *,
    title: str | None = None,
    description: str | None = None,
) -> BoardState:
    return replace(
        state,
        title=state.title if title is None else title,
        description=state.description if description is None else description,
    )


def clear_form(state: BoardState) -> BoardState:
    return replace(state, title="", description="")


def with_filters(
    state: BoardState,
    *,
    search_term: str | None = None,
    filter_status: str | None = None,
) -> BoardState:
    return replace(
        state,
        search_term=state.search_term if search_term is None else search_term,
        filter_status=state.filter_status if filter_status is None else filter_status,
    )


# ---- optimistic patches ----

def patch_status(state: BoardState, task_id: str, status: TaskStatus) -> BoardState:
    return replace(
        state,
        tasks=tuple(t.with_status(status) if t.id == task_id else t for t in state.tasks),
    )


def drop_task(state: BoardState, task_id: str) -> BoardState:
    return replace(state, tasks=tuple(t for t in state.tasks if t.id != task_id))


def restore_tasks(state: BoardState, snapshot: tuple[Task, ...]) -> BoardState:
    """Put a snapshot back verbatim (whole sequence, not a merge)."""
    return replace(state, tasks=snapshot)


# ---- queries ----

def find_task(state: BoardState, ref: str) -> Task | None:
    """
    Resolve a user reference to a task.

    "#3" is always the third card; otherwise an exact id wins, and a bare
    number falls back to the card position.
    """
    ref = ref.strip()
    if not ref:
        return None

    if ref.startswith("#"):
        return _by_position(state, ref[1:])

    for t in state.tasks:
        if t.id == ref:
            return t

    return _by_position(state, ref)


def _by_position(state: BoardState, raw: str) -> Task | None:
    if not raw.isdigit():
        return None
    idx = int(raw) - 1
    if 0 <= idx < len(state.tasks):
        return state.tasks[idx]
    return None
