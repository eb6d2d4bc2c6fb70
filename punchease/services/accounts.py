"""Backend account creation shared by company provisioning and bootstrap."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from punchease.core.errors import Conflict, InvalidCredential
from punchease.core.security import hash_password, verify_password
from punchease.models.account import Account
from punchease.models.user_role import AppRole, UserRoleAssignment

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "A user with this email address has already been registered"


async def get_account_by_email(session: AsyncSession, email: str) -> Account | None:
    result = await session.execute(select(Account).where(Account.email == email))
    return result.scalar_one_or_none()


async def authenticate_account(session: AsyncSession, email: str, password: str) -> Account:
    """Return the account for ``email`` if ``password`` matches.

    Raises ``InvalidCredential`` for an unknown email or a wrong password alike.
    """
    account = await get_account_by_email(session, email)
    if account is None or not verify_password(password, account.password_hash):
        raise InvalidCredential("Invalid email or password")
    return account


async def create_account(
    session: AsyncSession,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
    email_confirm: bool = True,
) -> Account:
    """Add a new account to the session (flushed, not committed).

    Raises ``Conflict`` if the email is already registered.
    """
    if await get_account_by_email(session, email) is not None:
        raise Conflict(DUPLICATE_EMAIL_MESSAGE)

    account = Account(
        email=email,
        password_hash=hash_password(password),
        email_confirmed=email_confirm,
        user_metadata={"first_name": first_name, "last_name": last_name},
    )
    session.add(account)
    await session.flush()
    logger.info("Account created: %s", account.id)
    return account


async def get_roles(session: AsyncSession, account_id) -> list[AppRole]:
    result = await session.execute(
        select(UserRoleAssignment.role).where(UserRoleAssignment.user_id == account_id)
    )
    return [AppRole(r) for r in result.scalars().all()]


def primary_role(roles: list[AppRole]) -> AppRole:
    """Highest role held; accounts without an assignment are employees."""
    for role in (AppRole.SUPERADMIN, AppRole.ADMIN):
        if role in roles:
            return role
    return AppRole.EMPLOYEE
