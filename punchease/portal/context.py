"""Provider scopes for the portal contexts.

The portal builds one ``CompanySlugContext`` and one ``TenantContext`` at its
root and passes them down explicitly. Code far from the root can reach them
through ``use_company_slug()`` / ``use_tenant()`` while inside the matching
``provide_*`` block; outside one, those calls raise ``ConfigurationError``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from punchease.core.errors import ConfigurationError
from punchease.portal.company_slug import CompanySlugContext
from punchease.portal.tenant import TenantContext

_company_slug: ContextVar[CompanySlugContext | None] = ContextVar("company_slug", default=None)
_tenant: ContextVar[TenantContext | None] = ContextVar("tenant", default=None)


@contextmanager
def provide_company_slug(ctx: CompanySlugContext) -> Iterator[CompanySlugContext]:
    token = _company_slug.set(ctx)
    try:
        yield ctx
    finally:
        _company_slug.reset(token)


@contextmanager
def provide_tenant(ctx: TenantContext) -> Iterator[TenantContext]:
    token = _tenant.set(ctx)
    try:
        yield ctx
    finally:
        _tenant.reset(token)


def use_company_slug() -> CompanySlugContext:
    ctx = _company_slug.get()
    if ctx is None:
        raise ConfigurationError("use_company_slug must be used within provide_company_slug")
    return ctx


def use_tenant() -> TenantContext:
    ctx = _tenant.get()
    if ctx is None:
        raise ConfigurationError("use_tenant must be used within provide_tenant")
    return ctx
