"""Tests for the tenant login form, including a run against the real app."""

import asyncio
import uuid

import pytest
from httpx import ASGITransport, AsyncClient

from punchease.core.errors import DatabaseFault
from punchease.main import app
from punchease.portal.backend import PunchEaseBackend, VerificationResult
from punchease.portal.login import INVALID_CREDENTIALS_MESSAGE, LoginStatus, TenantLoginForm
from punchease.portal.storage import MemorySessionStore
from punchease.portal.tenant import TENANT_STORAGE_KEY, TenantContext


class StubVerifier:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    async def verify_tenant_password(self, username, password):
        if self.error:
            raise self.error
        return self.result


@pytest.mark.asyncio
async def test_successful_login_updates_session():
    company_id, tenant_id = uuid.uuid4(), uuid.uuid4()
    store = MemorySessionStore()
    tenant = TenantContext(store)
    form = TenantLoginForm(
        StubVerifier(VerificationResult(valid=True, company_id=company_id, tenant_id=tenant_id)),
        tenant,
    )

    outcome = await form.submit("acme", "pw", remember_me=True)

    assert outcome.ok
    assert outcome.redirect_to == "/auth"
    assert tenant.company_id == company_id
    assert tenant.tenant_id == tenant_id
    assert store.get(TENANT_STORAGE_KEY) is not None
    assert form.should_redirect is True


@pytest.mark.asyncio
async def test_rejected_login_is_generic():
    tenant = TenantContext(MemorySessionStore())
    form = TenantLoginForm(StubVerifier(VerificationResult(valid=False)), tenant)

    outcome = await form.submit("acme", "bad")

    assert outcome.status == LoginStatus.INVALID
    assert outcome.message == INVALID_CREDENTIALS_MESSAGE
    assert tenant.is_authenticated is False


@pytest.mark.asyncio
async def test_backend_error_is_reported_not_raised():
    tenant = TenantContext(MemorySessionStore())
    form = TenantLoginForm(StubVerifier(error=DatabaseFault("Database error")), tenant)

    outcome = await form.submit("acme", "pw")

    assert outcome.status == LoginStatus.ERROR
    assert outcome.message == "Database error"
    assert form.pending is False


@pytest.mark.asyncio
async def test_pending_while_request_outstanding():
    gate = asyncio.Event()

    class SlowVerifier:
        async def verify_tenant_password(self, username, password):
            await gate.wait()
            return VerificationResult(valid=False)

    form = TenantLoginForm(SlowVerifier(), TenantContext(MemorySessionStore()))
    task = asyncio.create_task(form.submit("acme", "pw"))
    await asyncio.sleep(0)

    assert form.pending is True
    second = await form.submit("acme", "pw")
    assert second.status == LoginStatus.ERROR

    gate.set()
    await task
    assert form.pending is False


@pytest.mark.asyncio
async def test_login_against_app(client, make_company):
    """Form -> HTTP -> verify-tenant-password -> session, end to end."""
    company = await make_company("e2e-co", tenant_username="e2e", tenant_password="pw123")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        backend = PunchEaseBackend(client=http)
        tenant = TenantContext(MemorySessionStore())
        form = TenantLoginForm(backend, tenant)

        assert (await form.submit("e2e", "wrong")).status == LoginStatus.INVALID
        assert (await form.submit("e2e", "pw123")).ok

    assert tenant.company_id == company.id
    assert tenant.tenant_username == "e2e"
