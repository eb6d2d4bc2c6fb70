"""One-shot provisioning of the superadmin identity.

The three steps (account, profile, role) are committed one at a time. A
failure part-way leaves the earlier rows in place; the raised
``BootstrapStepError`` names the failed step so an operator can reconcile.
Running it again for an existing email fails at the account step without
touching profiles or roles.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from punchease.core.config import Settings
from punchease.core.errors import BootstrapStepError, Conflict
from punchease.models.account import Account
from punchease.models.profile import Profile
from punchease.models.user_role import AppRole, UserRoleAssignment
from punchease.services.accounts import create_account

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Superadmin user created successfully"


@dataclass(frozen=True)
class SuperadminIdentity:
    email: str
    password: str
    first_name: str
    last_name: str
    company_id: uuid.UUID

    @classmethod
    def from_settings(cls, settings: Settings) -> SuperadminIdentity:
        if not settings.superadmin_email or not settings.superadmin_password:
            raise BootstrapStepError(
                "config", "SUPERADMIN_EMAIL and SUPERADMIN_PASSWORD must be configured"
            )
        return cls(
            email=settings.superadmin_email,
            password=settings.superadmin_password,
            first_name=settings.superadmin_first_name,
            last_name=settings.superadmin_last_name,
            company_id=settings.superadmin_company_id,
        )


async def bootstrap_superadmin(session: AsyncSession, identity: SuperadminIdentity) -> Account:
    # 1. Account
    try:
        account = await create_account(
            session,
            email=identity.email,
            password=identity.password,
            first_name=identity.first_name,
            last_name=identity.last_name,
        )
        await session.commit()
    except Conflict as exc:
        await session.rollback()
        logger.error("Error creating superadmin account: %s", exc)
        raise BootstrapStepError("account", str(exc)) from exc
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Error creating superadmin account")
        raise BootstrapStepError("account", str(exc)) from exc

    account_id = account.id

    # 2. Profile
    try:
        session.add(Profile(
            user_id=account_id,
            first_name=identity.first_name,
            last_name=identity.last_name,
            email=identity.email,
            company_id=identity.company_id,
        ))
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Error creating profile for superadmin %s", account_id)
        raise BootstrapStepError("profile", str(exc)) from exc
    logger.info("Profile created for user %s", account_id)

    # 3. Role
    try:
        session.add(UserRoleAssignment(user_id=account_id, role=AppRole.SUPERADMIN))
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Error assigning superadmin role to %s", account_id)
        raise BootstrapStepError("role", str(exc)) from exc
    logger.info("Superadmin role assigned to user %s", account_id)

    return account
