# src/taskboard/ui/render.py

"""Render surface: BoardState -> text. No I/O, no side effects."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from enum import Enum

from ..core.state import BoardState
from ..tasks.task_models import Task, TaskStatus

FILTER_LABELS: dict[str, str] = {
    "": "All",
    TaskStatus.PENDING.value: "Pending",
    TaskStatus.IN_PROGRESS.value: "In-Progress",
    TaskStatus.COMPLETED.value: "Completed",
}

CARD_WIDTH = 72

# target status -> (button label, console command)
TRANSITION_ACTIONS: dict[TaskStatus, tuple[str, str]] = {
    TaskStatus.IN_PROGRESS: ("Start Task", "start"),
    TaskStatus.COMPLETED: ("End Task", "end"),
}


class ActionKind(str, Enum):
    STATUS = "status"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class CardAction:
    label: str
    kind: ActionKind
    command: str
    target_status: TaskStatus | None = None


def card_actions(task: Task) -> list[CardAction]:
    """Actions offered on a card: one status transition (if any) plus Delete."""
    actions: list[CardAction] = []
    target = task.status.next_status()
    if target is not None:
        label, command = TRANSITION_ACTIONS[target]
        actions.append(CardAction(label, ActionKind.STATUS, command, target))
    actions.append(CardAction("Delete", ActionKind.DELETE, "delete"))
    return actions


def render_card(position: int, task: Task) -> list[str]:
    lines = [f"#{position} {task.title}  [{task.status.value}]"]
    if task.description:
        for part in textwrap.wrap(task.description, width=CARD_WIDTH - 4) or [""]:
            lines.append(f"    {part}")
    buttons = "  ".join(f"[{a.label}: /{a.command} {position}]" for a in card_actions(task))
    lines.append(f"    {buttons}")
    return lines


def render_board(state: BoardState, *, app_title: str = "Task Manager") -> str:
    lines: list[str] = [app_title, "=" * max(len(app_title), 12)]

    lines.append(f"Task Title:       {state.title or '-'}")
    lines.append(f"Task Description: {state.description or '-'}")
    lines.append("  (/title, /desc, then /add; or /add <title> | <description>)")
    lines.append("")

    status_label = FILTER_LABELS.get(state.filter_status, state.filter_status)
    lines.append(f"Search: {state.search_term or '-'}    Status: {status_label}")
    lines.append("-" * CARD_WIDTH)

    if state.is_loading:
        lines.append("Loading...")
    if state.error:
        lines.append(f"! {state.error}")

    if not state.tasks:
        if not state.is_loading:
            lines.append("(no tasks)")
    for position, task in enumerate(state.tasks, start=1):
        lines.extend(render_card(position, task))

    return "\n".join(lines)
