# src/incident_sync/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No network access or secrets required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "INCIDENT_SYNC"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float) -> float:
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

    # ---- Remote service ----
    base_url: str
    user_agent: str

    # ---- HTTP timeouts (seconds) ----
    http_timeout_s: float
    http_connect_timeout_s: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "incident-sync").strip() or "incident-sync"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/incident_sync"))

        base_url = _env(_k("BASE_URL"), "").strip()
        user_agent = _env(_k("USER_AGENT"), f"{app_name}/1.0")

        # The remote service is not trusted to answer promptly; never wait forever.
        http_timeout_s = max(0.1, _env_float(_k("HTTP_TIMEOUT_SECONDS"), 30.0))
        http_connect_timeout_s = max(0.1, _env_float(_k("HTTP_CONNECT_TIMEOUT_SECONDS"), 5.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            base_url=base_url,
            user_agent=user_agent,
            http_timeout_s=http_timeout_s,
            http_connect_timeout_s=min(http_connect_timeout_s, http_timeout_s),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
