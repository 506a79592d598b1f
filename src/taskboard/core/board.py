# src/taskboard/core/board.py

from __future__ import annotations

"""
TaskBoard: keeps the board state in sync with the remote task collection.

- list: loading flag set before the request and always cleared after it;
  on failure the previous tasks stay and the error banner is set.
- create: no optimistic insert; a successful POST clears the form and
  re-lists.
- update_status / remove: optimistic. The whole task tuple is captured
  before the patch and put back verbatim when the request fails.

Nothing raises out of these operations; failures end up in `state.error`.
Overlapping requests are not aborted. Unless list fencing is enabled, the
last list response to arrive wins, and a failed mutation's rollback may
overwrite another mutation's patch or a list that completed meanwhile.
"""

import asyncio
import logging

from ..tasks.task_models import Task, TaskStatus
from .ports import Alert, Confirm, TaskApi, TaskApiError
from .state import (
    BoardState,
    begin_loading,
    clear_form,
    drop_task,
    finish_loading,
    patch_status,
    restore_tasks,
    with_error,
    with_filters,
    with_form,
    with_tasks,
)
from .store import BoardStore

logger = logging.getLogger(__name__)

CONFIG_ERROR = "TASKBOARD_API_URL is undefined! Check your .env file."
EMPTY_TITLE_PROMPT = "Please enter a title"
DELETE_PROMPT = "Delete this task?"

FILTER_STATUSES: tuple[str, ...] = ("", *(s.value for s in TaskStatus))


class TaskBoard:
    def __init__(
        self,
        api: TaskApi | None,
        *,
        confirm: Confirm,
        alert: Alert,
        store: BoardStore | None = None,
        search_debounce_seconds: float = 0.0,
        fence_list_requests: bool = False,
    ) -> None:
        self._api = api
        self._confirm = confirm
        self._alert = alert
        self._store = store if store is not None else BoardStore()
        self._debounce_s = max(0.0, float(search_debounce_seconds))
        self._fence = bool(fence_list_requests)

        self._list_generation = 0
        self._debounce_handle: asyncio.TimerHandle | None = None
        self._background: set[asyncio.Task[tuple[Task, ...]]] = set()

    @property
    def store(self) -> BoardStore:
        return self._store

    @property
    def state(self) -> BoardState:
        return self._store.state

    @property
    def configured(self) -> bool:
        return self._api is not None

    # ---- lifecycle ----

    async def start(self) -> None:
        """First load. A missing API is reported once in the banner, not raised."""
        if self._api is None:
            logger.error("Task API URL is not configured.")
            self._store.apply(with_error, CONFIG_ERROR)
            self._store.apply(finish_loading)
            return
        await self.list_tasks()

    async def aclose(self) -> None:
        if self._debounce_handle is not None:
            self._debounce_handle.cancel()
            self._debounce_handle = None
        pending = list(self._background)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    # ---- list ----

    async def list_tasks(self) -> tuple[Task, ...]:
        """Fetch tasks matching the current search term / status filter."""
        if self._api is None:
            self._store.apply(with_error, CONFIG_ERROR)
            self._store.apply(finish_loading)
            return self.state.tasks

        self._list_generation += 1
        generation = self._list_generation
        search = self.state.search_term
        status = self.state.filter_status

        self._store.apply(begin_loading)
        try:
            tasks = await self._api.list_tasks(search=search, status=status)
        except Exception as e:
            if self._is_superseded(generation):
                logger.debug("Ignoring superseded list failure generation=%s: %s", generation, e)
            else:
                self._record_failure("list", e)
        else:
            if self._is_superseded(generation):
                logger.debug("Dropping superseded list response generation=%s", generation)
            else:
                self._store.apply(with_tasks, tasks)
                logger.debug("Listed %d tasks (search=%r status=%r)", len(tasks), search, status)
        finally:
            if not self._is_superseded(generation):
                self._store.apply(finish_loading)
        return self.state.tasks

    def _is_superseded(self, generation: int) -> bool:
        return self._fence and generation != self._list_generation

    # ---- create ----

    def set_form(self, *, title: str | None = None, description: str | None = None) -> None:
        self._store.apply(with_form, title=title, description=description)

    async def create_task(self) -> bool:
        """Submit the form. Returns True when the server accepted the task."""
        state = self.state
        if not state.title:
            self._alert(EMPTY_TITLE_PROMPT)
            return False

        if self._api is None:
            self._store.apply(with_error, CONFIG_ERROR)
            return False

        try:
            await self._api.create_task(title=state.title, description=state.description)
        except Exception as e:
            self._record_failure("create", e)
            return False

        logger.info("Created task title=%r", state.title)
        self._store.apply(clear_form)
        await self.list_tasks()
        return True

    # ---- optimistic mutations ----

    async def update_status(self, task_id: str, new_status: TaskStatus | str) -> bool:
        new_status = TaskStatus(new_status)
        if self._api is None:
            self._store.apply(with_error, CONFIG_ERROR)
            return False

        snapshot = self.state.tasks
        self._store.apply(patch_status, task_id, new_status)
        try:
            await self._api.update_status(task_id, new_status)
        except Exception as e:
            self._store.apply(restore_tasks, snapshot)
            self._record_failure("update_status", e)
            return False

        logger.info("Task %s -> %s", task_id, new_status.value)
        return True

    async def remove(self, task_id: str) -> bool:
        if not self._confirm(DELETE_PROMPT):
            return False

        if self._api is None:
            self._store.apply(with_error, CONFIG_ERROR)
            return False

        snapshot = self.state.tasks
        self._store.apply(drop_task, task_id)
        try:
            await self._api.delete_task(task_id)
        except Exception as e:
            self._store.apply(restore_tasks, snapshot)
            self._record_failure("remove", e)
            return False

        logger.info("Deleted task %s", task_id)
        return True

    # ---- filters ----

    async def set_search_term(self, term: str) -> None:
        if term == self.state.search_term:
            return
        self._store.apply(with_filters, search_term=term)
        await self._filters_changed()

    async def set_filter_status(self, status: str) -> None:
        status = str(status)
        if status not in FILTER_STATUSES:
            raise ValueError(f"unknown status filter: {status!r}")
        if status == self.state.filter_status:
            return
        self._store.apply(with_filters, filter_status=status)
        await self._filters_changed()

    async def _filters_changed(self) -> None:
        if self._api is None or self._debounce_s <= 0:
            await self.list_tasks()
            return

        # Only the pending start is cancelled; a fetch already in flight keeps running.
        if self._debounce_handle is not None:
            self._debounce_handle.cancel()
        loop = asyncio.get_running_loop()
        self._debounce_handle = loop.call_later(self._debounce_s, self._spawn_list)

    def _spawn_list(self) -> None:
        self._debounce_handle = None
        task = asyncio.get_running_loop().create_task(self.list_tasks())
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    # ---- errors ----

    def _record_failure(self, action: str, err: Exception) -> None:
        if isinstance(err, TaskApiError):
            message = str(err)
            logger.warning("%s failed: %s", action, message)
        else:
            message = str(err) or err.__class__.__name__
            logger.error("%s failed unexpectedly", action, exc_info=err)
        self._store.apply(with_error, message)
