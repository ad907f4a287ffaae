"""
Shared test fixtures for the QR Docs test suite.
"""

import os
from typing import AsyncGenerator

import pytest

# Override environment BEFORE importing application modules
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["CORS_ORIGINS"] = '["*"]'

from httpx import ASGITransport, AsyncClient

from qrdocs.core.config import Settings
from qrdocs.core.roles import Role
from qrdocs.main import create_app
from qrdocs.models.session import Session
from qrdocs.services.desk import Desk


class FakeClock:
    """Manually advanced wall clock for lockout tests."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def staff_session(role: Role) -> Session:
    return Session(role=role, identity=role.value)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def desk(clock: FakeClock) -> Desk:
    return Desk(Settings(), clock=clock)


@pytest.fixture
def top_session() -> Session:
    return staff_session(Role.ROLE24)


@pytest.fixture
async def async_client(desk: Desk) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to a fresh app."""
    transport = ASGITransport(app=create_app(desk=desk))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def login(client: AsyncClient, role: str, password: str = "", phone: str = "") -> dict:
    """Log in and return auth headers for the issued token."""
    resp = await client.post(
        "/api/v1/auth/login", json={"role": role, "password": password, "phone": phone}
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
