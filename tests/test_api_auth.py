"""Tests for the /auth endpoints."""

import asyncio

import pytest
from httpx import AsyncClient

from tests.conftest import FakeClock, login


@pytest.mark.asyncio
async def test_login_roles_listed(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/auth/roles")
    assert resp.status_code == 200
    roles = {r["role"]: r for r in resp.json()}
    assert set(roles) == {"client", "cashier", "head-cashier", "admin", "creator", "nikitovsky"}
    assert roles["client"]["password_required"] is False
    assert roles["cashier"]["level"] == 1


@pytest.mark.asyncio
async def test_cashier_login_and_me(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/auth/login", json={"role": "cashier", "password": "25"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["role"] == "cashier"
    assert "HttpOnly" in resp.headers.get("set-cookie")

    headers = {"Authorization": f"Bearer {data['access_token']}"}
    me = await async_client.get("/api/v1/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["level"] == 1


@pytest.mark.asyncio
async def test_wrong_passwords_lock_login(async_client: AsyncClient, clock: FakeClock):
    for pw, remaining in (("a", 2), ("b", 1)):
        resp = await async_client.post("/api/v1/auth/login", json={"role": "admin", "password": pw})
        assert resp.status_code == 401
        assert resp.json()["kind"] == "InvalidCredential"
        assert resp.json()["params"]["attempts_remaining"] == remaining

    resp = await async_client.post("/api/v1/auth/login", json={"role": "admin", "password": "c"})
    assert resp.status_code == 429
    assert resp.json()["kind"] == "TooManyAttempts"
    assert resp.json()["params"]["remaining_seconds"] == 90

    resp = await async_client.post("/api/v1/auth/login", json={"role": "admin", "password": "2025"})
    assert resp.status_code == 429
    assert resp.json()["kind"] == "LockedOut"

    status = await async_client.get("/api/v1/auth/lockout")
    assert status.json() == {"failed_attempts": 3, "locked": True, "remaining_seconds": 90}

    clock.advance(91)
    resp = await async_client.post("/api/v1/auth/login", json={"role": "admin", "password": "2025"})
    assert resp.status_code == 200
    status = await async_client.get("/api/v1/auth/lockout")
    assert status.json()["failed_attempts"] == 0


@pytest.mark.asyncio
async def test_logout_revokes_token(async_client: AsyncClient):
    headers = await login(async_client, "cashier", "25")
    resp = await async_client.post("/api/v1/auth/logout", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    me = await async_client.get("/api/v1/auth/me", headers=headers)
    assert me.status_code == 401


@pytest.mark.asyncio
async def test_client_login_unknown_phone(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/auth/login", json={"role": "client", "phone": "+7000"})
    assert resp.status_code == 401
    assert resp.json()["kind"] == "AccountNotFound"

    resp = await async_client.post("/api/v1/auth/login", json={"role": "client"})
    assert resp.status_code == 422
    assert resp.json()["params"]["field"] == "phone"


@pytest.mark.asyncio
async def test_unknown_role_rejected(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/auth/login", json={"role": "role24", "password": "x"})
    assert resp.status_code == 422
    assert resp.json()["kind"] == "InvalidField"


@pytest.mark.asyncio
async def test_garbage_token_rejected(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/items", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_lockout_ticker_expires_windows(desk, clock: FakeClock):
    from qrdocs.core.errors import DeskError
    from qrdocs.main import _lockout_ticker

    for _ in range(3):
        with pytest.raises(DeskError):
            desk.auth.authenticate("admin", "wrong")
    clock.advance(91)

    task = asyncio.create_task(_lockout_ticker(desk, 0.01))
    await asyncio.sleep(0.05)
    task.cancel()
    assert desk.lockout._states == {}
