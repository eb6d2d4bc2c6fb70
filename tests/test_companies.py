"""Tests for company endpoints: slug lookup and superadmin provisioning."""

import pytest
from httpx import AsyncClient

from punchease.services.companies import slugify


def _company_payload(name: str, **extra) -> dict:
    slug = slugify(name)
    return {
        "company_name": name,
        "admin_email": f"admin@{slug}.test",
        "admin_password": "adminpass1",
        "admin_first_name": "Ada",
        "admin_last_name": "Admin",
        **extra,
    }


@pytest.mark.asyncio
async def test_lookup_by_slug(client: AsyncClient, make_company):
    company = await make_company("norr-cafe")

    resp = await client.get("/v1/companies/by-slug/norr-cafe")
    assert resp.status_code == 200
    assert resp.json() == {"id": str(company.id), "name": "Norr-Cafe AB", "slug": "norr-cafe"}


@pytest.mark.asyncio
async def test_lookup_is_case_sensitive(client: AsyncClient, make_company):
    await make_company("case-co")

    resp = await client.get("/v1/companies/by-slug/Case-Co")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_lookup_unknown_slug(client: AsyncClient):
    resp = await client.get("/v1/companies/by-slug/missing")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_superadmin_creates_company(client: AsyncClient, superadmin_headers):
    resp = await client.post(
        "/v1/companies",
        json=_company_payload("Café Nord", tenant_username="cafenord", tenant_password="pw1234"),
        headers=superadmin_headers,
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["company"]["slug"] == "cafe-nord"
    assert data["tenant_username"] == "cafenord"

    # The tenant login works straight away
    resp = await client.post("/v1/functions/verify-tenant-password", json={
        "username": "cafenord", "password": "pw1234",
    })
    assert resp.json()["valid"] is True
    assert resp.json()["companyId"] == data["company"]["id"]

    # And the admin can log in, scoped to the new company
    resp = await client.post("/v1/auth/login", json={
        "email": "admin@cafe-nord.test", "password": "adminpass1",
    })
    assert resp.status_code == 200
    assert resp.json()["role"] == "admin"
    assert resp.json()["profile"]["company_id"] == data["company"]["id"]


@pytest.mark.asyncio
async def test_generated_slugs_are_unique(client: AsyncClient, superadmin_headers):
    first = await client.post(
        "/v1/companies", json=_company_payload("Twin Co"), headers=superadmin_headers
    )
    second = await client.post(
        "/v1/companies",
        json=_company_payload("Twin Co", admin_email="other@twin.test"),
        headers=superadmin_headers,
    )
    assert first.json()["company"]["slug"] == "twin-co"
    assert second.json()["company"]["slug"] == "twin-co-2"


@pytest.mark.asyncio
async def test_duplicate_explicit_slug_rejected(client: AsyncClient, superadmin_headers, make_company):
    await make_company("taken")

    resp = await client.post(
        "/v1/companies",
        json=_company_payload("Taken Again", slug="taken"),
        headers=superadmin_headers,
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_duplicate_tenant_username_rejected(client: AsyncClient, superadmin_headers, make_company):
    await make_company("first-co", tenant_username="shared", tenant_password="pw")

    resp = await client.post(
        "/v1/companies",
        json=_company_payload("Second Co", tenant_username="shared", tenant_password="pw"),
        headers=superadmin_headers,
    )
    assert resp.status_code == 409

    resp = await client.get("/v1/companies/by-slug/second-co")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_duplicate_admin_email_rolls_back_company(client: AsyncClient, superadmin_headers):
    payload = _company_payload("Dup Admin", admin_email="dup@admin.test")
    assert (await client.post("/v1/companies", json=payload, headers=superadmin_headers)).status_code == 201

    payload = _company_payload("Other Co", admin_email="dup@admin.test")
    resp = await client.post("/v1/companies", json=payload, headers=superadmin_headers)
    assert resp.status_code == 409

    resp = await client.get("/v1/companies/by-slug/other-co")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_list_companies(client: AsyncClient, superadmin_headers, make_company):
    await make_company("beta")
    await make_company("alpha")

    resp = await client.get("/v1/companies", headers=superadmin_headers)
    assert resp.status_code == 200
    assert [c["slug"] for c in resp.json()] == ["alpha", "beta"]


@pytest.mark.asyncio
async def test_admin_cannot_create_company(client: AsyncClient, make_company):
    await make_company("admins-co")
    resp = await client.post("/v1/auth/login", json={
        "email": "admin@admins-co.test", "password": "adminpass1",
    })
    headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}

    resp = await client.post("/v1/companies", json=_company_payload("Sneaky"), headers=headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_company_endpoints_require_auth(client: AsyncClient):
    resp = await client.get("/v1/companies")
    assert resp.status_code in (401, 403)


def test_slugify():
    assert slugify("Café Nord AB") == "cafe-nord-ab"
    assert slugify("  Björk & Söner  ") == "bjork-soner"
    assert slugify("!!!") == "company"
