# src/taskboard/cli/commands.py

from __future__ import annotations

from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

from ..core.board import TaskBoard
from ..core.state import find_task
from ..tasks.task_models import TaskStatus
from ..ui.render import ActionKind, card_actions, render_board

Spawner = Callable[[Coroutine[Any, Any, Any]], None]


@dataclass(slots=True)
class CommandContext:
    """What a command handler may touch: the board and the task spawner."""

    board: TaskBoard
    spawn: Spawner
    app_title: str = "Task Manager"


CommandHandler = Callable[[CommandContext, list[str]], str | None]


class CommandRegistry:
    """Simple slash-command registry used by the console (/add, /start, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._raw_text: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        raw_text: bool = False,
    ) -> None:
        """
        raw_text=True hands the handler the rest of the line as a single
        argument, spacing preserved, instead of whitespace-split words.
        """
        aliases = aliases or []
        key = name.lower()
        names = [key, *(alias.lower() for alias in aliases)]
        self._help[key] = help_text
        for n in names:
            self._handlers[n] = handler
            if raw_text:
                self._raw_text.add(n)

    def handle(self, ctx: CommandContext, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string, or None when the command produced no text
        (its effect shows up on the board).
        """
        if not line.startswith("/"):
            return "Commands start with '/'. Use /help to list available commands."

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""
        if name in self._raw_text:
            args = [rest] if rest else []
        else:
            args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(ctx, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()

STATUS_ALIASES: dict[str, str] = {
    "all": "",
    "*": "",
    "p": TaskStatus.PENDING.value,
    "pending": TaskStatus.PENDING.value,
    "ip": TaskStatus.IN_PROGRESS.value,
    "in-progress": TaskStatus.IN_PROGRESS.value,
    "in_progress": TaskStatus.IN_PROGRESS.value,
    "c": TaskStatus.COMPLETED.value,
    "completed": TaskStatus.COMPLETED.value,
}


def cmd_help(ctx: CommandContext, args: list[str]) -> str:
    return registry.build_help()


def cmd_show(ctx: CommandContext, args: list[str]) -> str:
    return render_board(ctx.board.state, app_title=ctx.app_title)


def cmd_title(ctx: CommandContext, args: list[str]) -> str | None:
    ctx.board.set_form(title=args[0] if args else "")
    return None


def cmd_desc(ctx: CommandContext, args: list[str]) -> str | None:
    ctx.board.set_form(description=args[0] if args else "")
    return None


def cmd_add(ctx: CommandContext, args: list[str]) -> str | None:
    """
    /add                        -> submit the form as it is
    /add <title>                -> set title, submit
    /add <title> | <description>
    """
    if args:
        title, sep, description = args[0].partition("|")
        if sep:
            ctx.board.set_form(title=title.strip(), description=description.strip())
        else:
            ctx.board.set_form(title=title.strip())
    ctx.spawn(ctx.board.create_task())
    return None


def cmd_search(ctx: CommandContext, args: list[str]) -> str | None:
    ctx.spawn(ctx.board.set_search_term(args[0] if args else ""))
    return None


def cmd_filter(ctx: CommandContext, args: list[str]) -> str | None:
    raw = args[0].lower() if args else "all"
    status = STATUS_ALIASES.get(raw)
    if status is None:
        return "Usage: /filter all|pending|in-progress|completed (or p/ip/c)."
    ctx.spawn(ctx.board.set_filter_status(status))
    return None


def _card_command(ctx: CommandContext, args: list[str], command: str) -> str | None:
    if len(args) != 1:
        return f"Usage: /{command} <card number or task id>"

    task = find_task(ctx.board.state, args[0])
    if task is None:
        return f"No task {args[0]!r} on the board."

    for action in card_actions(task):
        if action.command != command:
            continue
        if action.kind is ActionKind.DELETE:
            ctx.spawn(ctx.board.remove(task.id))
        elif action.target_status is not None:
            ctx.spawn(ctx.board.update_status(task.id, action.target_status))
        return None

    return f'Task "{task.title}" is {task.status.value}; /{command} is not available.'


def cmd_start(ctx: CommandContext, args: list[str]) -> str | None:
    return _card_command(ctx, args, "start")


def cmd_end(ctx: CommandContext, args: list[str]) -> str | None:
    return _card_command(ctx, args, "end")


def cmd_delete(ctx: CommandContext, args: list[str]) -> str | None:
    return _card_command(ctx, args, "delete")


def cmd_refresh(ctx: CommandContext, args: list[str]) -> str | None:
    ctx.spawn(ctx.board.list_tasks())
    return None


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("show", cmd_show, help_text="Redraw the board.", aliases=["ls"])
registry.register(
    "title", cmd_title, help_text="Set the task title field: /title <text>.", raw_text=True
)
registry.register(
    "desc", cmd_desc, help_text="Set the task description field: /desc <text>.", raw_text=True
)
registry.register(
    "add", cmd_add, help_text="Add a task: /add [<title> [| <description>]].", raw_text=True
)
registry.register(
    "search", cmd_search, help_text="Search tasks: /search <text> (empty clears).", raw_text=True
)
registry.register(
    "filter", cmd_filter, help_text="Filter by status: /filter all|pending|in-progress|completed."
)
registry.register("start", cmd_start, help_text="Start a pending task: /start <n|id>.")
registry.register("end", cmd_end, help_text="Complete an in-progress task: /end <n|id>.")
registry.register(
    "delete", cmd_delete, help_text="Delete a task (asks first): /delete <n|id>.", aliases=["rm"]
)
registry.register("refresh", cmd_refresh, help_text="Re-fetch tasks from the server.")
