# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time: a missing API URL is reported by the
  board at start-up, not raised here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKBOARD"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Task API ----
    api_url: str | None
    http_timeout_seconds: float | None

    # ---- Board behaviour ----
    search_debounce_seconds: float
    fence_list_requests: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Task Manager").strip() or "Task Manager"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskboard"))

        # Accept the bare names too, so an existing frontend .env can be reused.
        api_url = _first_env(_k("API_URL"), "API_URL", "NEXT_PUBLIC_API_URL", default=None)
        if api_url is not None:
            api_url = api_url.strip()

        http_timeout_seconds = _env_float(_k("HTTP_TIMEOUT_SECONDS"), None)
        if http_timeout_seconds is not None and http_timeout_seconds <= 0:
            http_timeout_seconds = None

        debounce_ms = _env_float(_k("SEARCH_DEBOUNCE_MS"), 0.0) or 0.0
        search_debounce_seconds = max(0.0, debounce_ms / 1000.0)

        fence_list_requests = _env_bool(_k("FENCE_LIST_REQUESTS"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            api_url=api_url or None,
            http_timeout_seconds=http_timeout_seconds,
            search_debounce_seconds=search_debounce_seconds,
            fence_list_requests=fence_list_requests,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide Settings, reading the environment on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _load_dotenv_if_available()
        _SETTINGS = Settings.from_env()
    return _SETTINGS
