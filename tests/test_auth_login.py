"""Tests for auth login + me endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, make_company):
    """Login with valid credentials returns JWT + account + role."""
    company = await make_company("login-ok")

    resp = await client.post("/v1/auth/login", json={
        "email": "admin@login-ok.test",
        "password": "adminpass1",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["token_type"] == "bearer"
    assert "." in data["access_token"]  # JWT has dots
    assert data["user"]["email"] == "admin@login-ok.test"
    assert data["role"] == "admin"
    assert data["profile"]["company_id"] == str(company.id)


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, make_company):
    """Login with wrong password returns 401."""
    await make_company("login-bad-pw")

    resp = await client.post("/v1/auth/login", json={
        "email": "admin@login-bad-pw.test",
        "password": "wrongpassword",
    })
    assert resp.status_code == 401
    assert "Invalid" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_login_unknown_email(client: AsyncClient):
    """Login with nonexistent email returns 401."""
    resp = await client.post("/v1/auth/login", json={
        "email": "nobody@nowhere.com",
        "password": "whatever123",
    })
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_me_with_jwt(client: AsyncClient, make_company):
    """GET /v1/auth/me works with JWT from login."""
    await make_company("me-jwt")

    resp = await client.post("/v1/auth/login", json={
        "email": "admin@me-jwt.test",
        "password": "adminpass1",
    })
    jwt_headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}

    resp = await client.get("/v1/auth/me", headers=jwt_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["user"]["email"] == "admin@me-jwt.test"
    assert data["role"] == "admin"


@pytest.mark.asyncio
async def test_me_superadmin(client: AsyncClient, superadmin_headers):
    resp = await client.get("/v1/auth/me", headers=superadmin_headers)
    assert resp.status_code == 200
    assert resp.json()["role"] == "superadmin"


@pytest.mark.asyncio
async def test_invalid_token_rejected(client: AsyncClient):
    """A garbage token should return 401."""
    resp = await client.get(
        "/v1/auth/me",
        headers={"Authorization": "Bearer totally.fake.token"},
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_missing_auth_rejected(client: AsyncClient):
    """No Authorization header → 401 or 403 depending on FastAPI version."""
    resp = await client.get("/v1/auth/me")
    assert resp.status_code in (401, 403)
