# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from incident_sync.config import Settings

from .fakes import RecordingCoordinator

BASE_URL = "http://service.local"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings built explicitly rather than from the environment,
    to keep unit tests isolated and deterministic.
    """
    return Settings(
        app_name="incident-sync-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        base_url=BASE_URL,
        user_agent="incident-sync-test/1.0",
        http_timeout_s=2.0,
        http_connect_timeout_s=1.0,
    )


@pytest.fixture()
def coordinator() -> RecordingCoordinator:
    return RecordingCoordinator()
