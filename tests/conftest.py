# tests/conftest.py
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from scan_attendance.config import Settings
from scan_attendance.database import DatabaseManager
from scan_attendance.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(DB_URL=f"sqlite:///{tmp_path / 'scans.db'}", DB_POOL_SIZE=2)


@pytest.fixture
def db(settings) -> DatabaseManager:
    manager = DatabaseManager(settings)
    manager.create_schema()
    yield manager
    manager.dispose()


@pytest.fixture
def client(db) -> TestClient:
    return TestClient(create_app(db=db))


class FixedClock:
    """Deterministic clock; each call advances by `step` seconds."""

    def __init__(self, start: datetime, step: float = 0.0):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = datetime.fromtimestamp(now.timestamp() + self.step, tz=timezone.utc)
        return now


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(datetime(2024, 1, 15, 9, 0, 0, tzinfo=timezone.utc))
