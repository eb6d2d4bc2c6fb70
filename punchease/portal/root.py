"""Portal root: builds the contexts once and hands them down."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from punchease.core.config import Settings, get_settings
from punchease.portal.backend import PunchEaseBackend
from punchease.portal.company_slug import CompanySlugContext
from punchease.portal.login import TenantLoginForm
from punchease.portal.storage import JsonFileSessionStore, SessionStore
from punchease.portal.tenant import TenantContext


@dataclass(frozen=True)
class Portal:
    backend: PunchEaseBackend
    company_slug: CompanySlugContext
    tenant: TenantContext
    login_form: TenantLoginForm


def create_portal(
    navigate: Callable[[str], None],
    settings: Settings | None = None,
    store: SessionStore | None = None,
    backend: PunchEaseBackend | None = None,
) -> Portal:
    settings = settings or get_settings()
    backend = backend or PunchEaseBackend(base_url=settings.api_base_url)
    tenant = TenantContext(store or JsonFileSessionStore(settings.tenant_session_file))
    return Portal(
        backend=backend,
        company_slug=CompanySlugContext(backend, navigate),
        tenant=tenant,
        login_form=TenantLoginForm(backend, tenant),
    )
