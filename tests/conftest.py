from __future__ import annotations

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app

# 2024-12-31T00:00:00Z
NOW_MS = 1_735_603_200_000


class FakeSessionOracle:
    def __init__(self, logged_in: bool = False) -> None:
        self.logged_in = logged_in
        self.calls = 0

    def is_authenticated(self, request) -> bool:
        self.calls += 1
        return self.logged_in


class FakeExpiryResolver:
    def __init__(self, records: dict[str, int] | None = None, error: Exception | None = None) -> None:
        self.records = records or {}
        self.error = error
        self.calls: list[str] = []

    def get_client_expiry_by_uuid(self, uuid: str) -> tuple[int, bool]:
        self.calls.append(uuid)
        if self.error is not None:
            raise self.error
        if uuid in self.records:
            return self.records[uuid], True
        return 0, False


class FakeBackupService:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls = 0

    def send_backup_to_admins(self) -> None:
        self.calls += 1
        if self.error is not None:
            raise self.error


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(inbounds_file=tmp_path / "inbounds.json")


@pytest.fixture
def session() -> FakeSessionOracle:
    return FakeSessionOracle(logged_in=False)


@pytest.fixture
def resolver() -> FakeExpiryResolver:
    return FakeExpiryResolver()


@pytest.fixture
def backup() -> FakeBackupService:
    return FakeBackupService()


@pytest.fixture
def make_client(settings, session, resolver, backup) -> Callable[..., TestClient]:
    """Build a TestClient; keyword overrides replace the default fakes."""

    def _make(app_settings: Settings | None = None, **overrides) -> TestClient:
        kwargs = {
            "session_oracle": session,
            "expiry_resolver": resolver,
            "backup_service": backup,
            "clock": lambda: NOW_MS,
        }
        kwargs.update(overrides)
        return TestClient(create_app(app_settings or settings, **kwargs))

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
