# src/taskboard/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import queue
import threading
from collections.abc import Coroutine
from datetime import datetime
from typing import Any

from ..cli.commands import CommandContext
from ..cli.commands import registry as command_registry
from ..core.board import TaskBoard
from ..core.state import BoardState
from ..ui.render import render_board

logger = logging.getLogger(__name__)

PROMPT = ">>> "


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def console_confirm(message: str) -> bool:
    """Blocking yes/no prompt (the console's confirm dialog)."""
    try:
        answer = input(f"{message} [y/N] ").strip().lower()
    except EOFError:
        return False
    return answer in {"y", "yes"}


def console_alert(message: str) -> None:
    """Blocking notice; waits for Enter like a modal alert."""
    print(f"\n*** {message} ***")
    try:
        input("Press Enter to continue...")
    except EOFError:
        pass


def _resolve(fut: asyncio.Future[str], line: str | None, err: Exception | None) -> None:
    if fut.done():
        return
    if err is not None:
        fut.set_exception(err)
    else:
        fut.set_result(line or "")


class _LineReader:
    """
    Reads stdin in a daemon thread, one line per request.

    The thread only touches stdin while a readline() is pending, so the
    synchronous confirm/alert prompts can use input() in between.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop
        self._requests: queue.Queue[tuple[str, asyncio.Future[str]]] = queue.Queue()
        self._thread = threading.Thread(target=self._run, name="taskboard-stdin", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while True:
            prompt, fut = self._requests.get()
            try:
                line = input(prompt)
            except Exception as e:  # EOFError, closed stdin
                self._loop.call_soon_threadsafe(_resolve, fut, None, e)
                continue
            self._loop.call_soon_threadsafe(_resolve, fut, line, None)

    async def readline(self, prompt: str) -> str:
        fut: asyncio.Future[str] = self._loop.create_future()
        self._requests.put((prompt, fut))
        return await fut


class ConsoleSession:
    """
    Interactive board in the terminal.

    Board operations run as asyncio tasks, so a slow request never blocks
    the next command. Every burst of store changes triggers one redraw.
    """

    def __init__(self, board: TaskBoard, *, app_title: str = "Task Manager") -> None:
        self.board = board
        self.app_title = app_title
        self._tasks: set[asyncio.Task[Any]] = set()
        self._redraw_scheduled = False
        self._loop: asyncio.AbstractEventLoop | None = None

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        err = task.exception()
        if err is not None:
            logger.error("Board operation crashed", exc_info=err)

    def _on_change(self, _state: BoardState) -> None:
        if self._redraw_scheduled or self._loop is None:
            return
        self._redraw_scheduled = True
        self._loop.call_soon(self._redraw)

    def _redraw(self) -> None:
        self._redraw_scheduled = False
        print("\n" + render_board(self.board.state, app_title=self.app_title), flush=True)

    async def run(self) -> None:
        self._loop = asyncio.get_running_loop()
        unsubscribe = self.board.store.subscribe(self._on_change)
        reader = _LineReader(self._loop)
        ctx = CommandContext(board=self.board, spawn=self.spawn, app_title=self.app_title)

        logger.info("Console connector started.")
        _print_ts("Type /help for commands. Use /exit to quit.")
        self.spawn(self.board.start())

        try:
            while True:
                # Let freshly spawned operations run their synchronous prefix
                # (confirm prompt, optimistic patch) before stdin is read again.
                await asyncio.sleep(0)
                try:
                    line = (await reader.readline(PROMPT)).strip()
                except EOFError:
                    logger.info("Console EOF received, exiting.")
                    break

                if not line:
                    continue

                if line.lower() in ("/exit", "/quit"):
                    logger.info("Console exit command received.")
                    break

                try:
                    reply = command_registry.handle(ctx, line)
                except Exception:
                    logger.exception("Command handler crashed.")
                    reply = "Internal error while handling a command."

                if reply is not None:
                    print(reply)
        finally:
            unsubscribe()
            # Requests have no timeout; do not wait for them on the way out.
            pending = list(self._tasks)
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
            await self.board.aclose()
            logger.info("Console connector finished.")


async def run_console_loop(board: TaskBoard, *, app_title: str = "Task Manager") -> None:
    await ConsoleSession(board, app_title=app_title).run()
