"""Company lookup and provisioning."""

import logging
import re
import unicodedata

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from punchease.core.errors import Conflict, NotFound
from punchease.core.security import hash_password
from punchease.models.account import Account
from punchease.models.company import Company
from punchease.models.company_settings import CompanySettings
from punchease.models.profile import Profile
from punchease.models.user_role import AppRole, UserRoleAssignment
from punchease.services.accounts import create_account

logger = logging.getLogger(__name__)


def slugify(name: str) -> str:
    """Lower-case ASCII slug: "Café Nord AB" -> "cafe-nord-ab"."""
    normalized = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode()
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
    return slug or "company"


async def get_company_by_slug(session: AsyncSession, slug: str) -> Company | None:
    """Exact, case-sensitive slug match."""
    result = await session.execute(select(Company).where(Company.slug == slug))
    return result.scalars().first()


async def resolve_company(session: AsyncSession, slug: str) -> Company:
    company = await get_company_by_slug(session, slug)
    if company is None:
        raise NotFound("Company not found")
    return company


async def _unique_slug(session: AsyncSession, base: str) -> str:
    slug, n = base, 1
    while await get_company_by_slug(session, slug) is not None:
        n += 1
        slug = f"{base}-{n}"
    return slug


async def provision_company(
    session: AsyncSession,
    *,
    company_name: str,
    admin_email: str,
    admin_password: str,
    admin_first_name: str,
    admin_last_name: str,
    slug: str | None = None,
    tenant_username: str | None = None,
    tenant_password: str | None = None,
    **contact: str | None,
) -> tuple[Company, Account]:
    """Create a company, its settings row, and its first admin in one commit.

    Raises ``Conflict`` on a taken slug, tenant username or admin email.
    """
    if slug is not None:
        if await get_company_by_slug(session, slug) is not None:
            raise Conflict(f"Slug '{slug}' is already taken")
    else:
        slug = await _unique_slug(session, slugify(company_name))

    if tenant_username:
        existing = await session.execute(
            select(CompanySettings).where(CompanySettings.tenant_username == tenant_username)
        )
        if existing.scalars().first() is not None:
            raise Conflict(f"Tenant username '{tenant_username}' is already taken")

    # 1. Company
    company = Company(name=company_name, slug=slug, **contact)
    session.add(company)
    await session.flush()

    # 2. Settings, with the tenant-portal credential when both halves are given
    password_hash = None
    if tenant_username and tenant_password:
        password_hash = hash_password(tenant_password)
    session.add(CompanySettings(
        company_id=company.id,
        company_name=company_name,
        tenant_username=tenant_username or None,
        tenant_password_hash=password_hash,
        **contact,
    ))

    # 3. Admin account, profile and role
    admin = await create_account(
        session,
        email=admin_email,
        password=admin_password,
        first_name=admin_first_name,
        last_name=admin_last_name,
    )
    session.add(Profile(
        user_id=admin.id,
        email=admin_email,
        first_name=admin_first_name,
        last_name=admin_last_name,
        company_id=company.id,
    ))
    session.add(UserRoleAssignment(user_id=admin.id, role=AppRole.ADMIN))

    await session.commit()
    await session.refresh(company)
    logger.info("Company %s created with slug %s", company.id, company.slug)
    return company, admin
