"""Employee accounts created by a company admin."""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from punchease.core.errors import NotFound
from punchease.models.account import Account
from punchease.models.profile import Profile
from punchease.models.user_role import AppRole, UserRoleAssignment
from punchease.services.accounts import create_account

logger = logging.getLogger(__name__)

NO_ADMIN_COMPANY_MESSAGE = "Could not determine admin company"


async def get_admin_company_id(session: AsyncSession, admin_id: uuid.UUID) -> uuid.UUID:
    """Company of the admin's profile. Raises ``NotFound`` if there is none."""
    result = await session.execute(select(Profile.company_id).where(Profile.user_id == admin_id))
    company_id = result.scalar_one_or_none()
    if company_id is None:
        raise NotFound(NO_ADMIN_COMPANY_MESSAGE)
    return company_id


async def create_employee(
    session: AsyncSession,
    admin_id: uuid.UUID,
    *,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
    phone: str | None = None,
    personal_number: str | None = None,
) -> Account:
    """Create an employee account, profile and role in the admin's company.

    Everything is committed together. Raises ``NotFound`` when the admin has
    no company and ``Conflict`` when the email is taken.
    """
    company_id = await get_admin_company_id(session, admin_id)

    account = await create_account(
        session,
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
    )
    session.add(Profile(
        user_id=account.id,
        email=email,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        personal_number=personal_number,
        company_id=company_id,
    ))
    session.add(UserRoleAssignment(user_id=account.id, role=AppRole.EMPLOYEE))

    await session.commit()
    logger.info("Employee %s created in company %s by %s", account.id, company_id, admin_id)
    return account
