from __future__ import annotations

import pytest

from blacklist_api.app.core.config import Settings
from blacklist_api.app.core.state import RegistryState
from blacklist_api.app.main import create_app
from blacklist_api.app.services.registry_service import RegistryService

ADMIN_PASSWORD = "secret"


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(clock) -> RegistryService:
    state = RegistryState(public_mode=True, min_public_signups=3)
    return RegistryService(state, admin_password=ADMIN_PASSWORD, admin_token_ttl_minutes=0, clock=clock)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        admin_password=ADMIN_PASSWORD,
        public_mode=True,
        min_public_signups=2,
        static_dir=str(tmp_path / "no-frontend"),
        max_body_bytes=1024,
    )


@pytest.fixture
def client(settings):
    from fastapi.testclient import TestClient

    return TestClient(create_app(settings))


@pytest.fixture
def admin_headers(client) -> dict:
    res = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert res.status_code == 200
    return {"x-admin-token": res.json()["token"]}
