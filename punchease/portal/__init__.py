"""Tenant portal client core: slug resolution, tenant session, login."""

from punchease.portal.backend import PunchEaseBackend, VerificationResult
from punchease.portal.company_slug import CompanySlugContext
from punchease.portal.context import (
    provide_company_slug,
    provide_tenant,
    use_company_slug,
    use_tenant,
)
from punchease.portal.login import LoginOutcome, LoginStatus, TenantLoginForm
from punchease.portal.root import Portal, create_portal
from punchease.portal.storage import JsonFileSessionStore, MemorySessionStore, SessionStore
from punchease.portal.tenant import TENANT_STORAGE_KEY, TenantContext, TenantSession, TenantState

__all__ = [
    "CompanySlugContext",
    "JsonFileSessionStore",
    "LoginOutcome",
    "LoginStatus",
    "MemorySessionStore",
    "Portal",
    "PunchEaseBackend",
    "SessionStore",
    "TENANT_STORAGE_KEY",
    "TenantContext",
    "TenantLoginForm",
    "TenantSession",
    "TenantState",
    "VerificationResult",
    "create_portal",
    "provide_company_slug",
    "provide_tenant",
    "use_company_slug",
    "use_tenant",
]
