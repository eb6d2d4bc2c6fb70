"""Tests for the portal provider scopes."""

import uuid

import pytest

from punchease.core.config import Settings
from punchease.core.errors import ConfigurationError
from punchease.portal.backend import PunchEaseBackend
from punchease.portal.company_slug import CompanySlugContext
from punchease.portal.context import (
    provide_company_slug,
    provide_tenant,
    use_company_slug,
    use_tenant,
)
from punchease.portal.root import create_portal
from punchease.portal.storage import MemorySessionStore
from punchease.portal.tenant import TenantContext


class _NoBackend:
    async def fetch_company_by_slug(self, slug):
        raise AssertionError("not expected")


def test_use_tenant_outside_provider_fails_fast():
    with pytest.raises(ConfigurationError, match="provide_tenant"):
        use_tenant()


def test_use_company_slug_outside_provider_fails_fast():
    with pytest.raises(ConfigurationError, match="provide_company_slug"):
        use_company_slug()


def test_providers_expose_their_context():
    tenant = TenantContext(MemorySessionStore())
    company = CompanySlugContext(_NoBackend(), lambda path: None)

    with provide_tenant(tenant), provide_company_slug(company):
        assert use_tenant() is tenant
        assert use_company_slug() is company

    with pytest.raises(ConfigurationError):
        use_tenant()


def test_nested_providers_restore_outer():
    outer = TenantContext(MemorySessionStore())
    inner = TenantContext(MemorySessionStore())

    with provide_tenant(outer):
        with provide_tenant(inner):
            assert use_tenant() is inner
        assert use_tenant() is outer


def test_create_portal_wires_shared_tenant(tmp_path):
    settings = Settings(tenant_session_file=str(tmp_path / "session.json"))
    portal = create_portal(
        navigate=lambda path: None,
        settings=settings,
        backend=PunchEaseBackend(base_url="http://backend"),
    )

    assert portal.login_form.should_redirect is False
    portal.tenant.login_tenant("acme", uuid.uuid4(), uuid.uuid4(), True)
    assert portal.login_form.should_redirect is True
    assert (tmp_path / "session.json").exists()


def test_create_portal_survives_unreadable_session_file(tmp_path):
    settings = Settings(tenant_session_file=str(tmp_path))
    portal = create_portal(
        navigate=lambda path: None,
        settings=settings,
        backend=PunchEaseBackend(base_url="http://backend"),
    )

    assert portal.tenant.is_authenticated is False
