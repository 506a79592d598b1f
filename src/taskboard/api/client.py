# src/taskboard/api/client.py

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..core.ports import TaskApiError
from ..tasks.task_models import Task, TaskStatus

logger = logging.getLogger(__name__)

LIST_FAILED = "Failed to fetch tasks"
CREATE_FAILED = "Failed to create task"
UPDATE_FAILED = "Failed to update status"
DELETE_FAILED = "Failed to delete"


def _make_timeout_obj(timeout_s: float | None) -> httpx.Timeout:
    """None keeps requests open indefinitely (no timeout configured)."""
    if timeout_s is None:
        return httpx.Timeout(None)
    return httpx.Timeout(timeout_s, connect=min(timeout_s, 5.0))


def build_list_params(search: str, status: str) -> list[tuple[str, str]]:
    """Query params for the list call; empty filters are omitted, order is search, status."""
    params: list[tuple[str, str]] = []
    if search:
        params.append(("search", search))
    if status:
        params.append(("status", str(status)))
    return params


class HttpTaskApi:
    """
    TaskApi over HTTP (httpx.AsyncClient).

    - GET    {base}?search=..&status=..   -> {"data": [...]}
    - POST   {base}                       <- {"title", "description"}
    - PATCH  {base}/{id}                  <- {"status"}
    - DELETE {base}/{id}

    Every failure (non-2xx, transport error, undecodable body) is raised as
    TaskApiError with a user-facing message.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url or not base_url.strip():
            raise ValueError("base_url is required")
        self._base_url = base_url.strip()
        self._client = httpx.AsyncClient(
            timeout=_make_timeout_obj(timeout_seconds),
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpTaskApi:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _item_url(self, task_id: str) -> str:
        return f"{self._base_url}/{quote(str(task_id), safe='')}"

    async def _send(self, method: str, url: str, failure: str, **kwargs: Any) -> httpx.Response:
        try:
            res = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.info("%s %s: transport error %s", method, url, e.__class__.__name__)
            reason = str(e).strip() or e.__class__.__name__
            raise TaskApiError(f"{failure}: {reason}") from e

        if not res.is_success:
            logger.info("%s %s -> HTTP %s", method, url, res.status_code)
            raise TaskApiError(failure, status_code=res.status_code)
        return res

    # ---- TaskApi ----

    async def list_tasks(self, *, search: str = "", status: str = "") -> list[Task]:
        params = build_list_params(search, status)
        res = await self._send("GET", self._base_url, LIST_FAILED, params=params or None)

        try:
            payload = res.json()
        except ValueError as e:
            raise TaskApiError(LIST_FAILED, status_code=res.status_code) from e

        raw_items: Any = payload.get("data") if isinstance(payload, dict) else None
        if not raw_items:
            return []
        if not isinstance(raw_items, list):
            raise TaskApiError(LIST_FAILED, status_code=res.status_code)

        tasks: list[Task] = []
        for raw in raw_items:
            if not isinstance(raw, dict):
                raise TaskApiError(LIST_FAILED, status_code=res.status_code)
            try:
                tasks.append(Task.from_json(raw))
            except ValueError as e:
                raise TaskApiError(LIST_FAILED, status_code=res.status_code) from e
        return tasks

    async def create_task(self, *, title: str, description: str) -> None:
        await self._send(
            "POST",
            self._base_url,
            CREATE_FAILED,
            json={"title": title, "description": description},
        )

    async def update_status(self, task_id: str, status: TaskStatus) -> None:
        await self._send(
            "PATCH",
            self._item_url(task_id),
            UPDATE_FAILED,
            json={"status": TaskStatus(status).value},
        )

    async def delete_task(self, task_id: str) -> None:
        await self._send("DELETE", self._item_url(task_id), DELETE_FAILED)
