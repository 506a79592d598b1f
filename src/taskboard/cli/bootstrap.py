# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- builds the HTTP task API (or none, when the URL is missing),
- wires the API and the console prompts into a TaskBoard.
"""

from __future__ import annotations

import logging

from ..api.client import HttpTaskApi
from ..config import Settings, get_settings
from ..core.board import TaskBoard
from ..core.ports import Alert, Confirm, TaskApi

logger = logging.getLogger(__name__)


def create_task_api(settings: Settings) -> HttpTaskApi | None:
    """HttpTaskApi for the configured URL; None when no URL is set."""
    logger.info("API_URL: %s", settings.api_url)
    if not settings.api_url:
        return None
    return HttpTaskApi(settings.api_url, timeout_seconds=settings.http_timeout_seconds)


def create_board(
    *,
    confirm: Confirm,
    alert: Alert,
    settings: Settings | None = None,
    api: TaskApi | None = None,
) -> TaskBoard:
    """
    Create a TaskBoard from the provided settings.

    `api` is injectable for tests; when omitted the caller is expected to
    have built it with create_task_api() (so it can also close it).
    """
    if settings is None:
        settings = get_settings()

    return TaskBoard(
        api,
        confirm=confirm,
        alert=alert,
        search_debounce_seconds=settings.search_debounce_seconds,
        fence_list_requests=settings.fence_list_requests,
    )
