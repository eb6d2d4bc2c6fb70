"""Tenant-portal password check against the company settings row."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from punchease.core.errors import DatabaseFault
from punchease.core.security import verify_password
from punchease.models.company_settings import CompanySettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    valid: bool
    company_id: uuid.UUID | None = None
    tenant_id: uuid.UUID | None = None


INVALID = VerificationResult(valid=False)


async def verify_tenant_password(
    session: AsyncSession, username: str, password: str
) -> VerificationResult:
    """Check a tenant username + password without exposing the stored hash.

    A missing record and a record without a hash are both reported as plain
    ``INVALID``, the same as a wrong password. Raises ``DatabaseFault`` when
    the lookup itself fails.

    The session must be the service session: the caller has no identity yet,
    so row-level security would hide every settings row.
    """
    stmt = select(CompanySettings).where(CompanySettings.tenant_username == username)
    try:
        result = await session.execute(stmt)
        settings_row = result.scalars().first()
    except SQLAlchemyError as exc:
        logger.exception("Error fetching company settings for tenant login")
        raise DatabaseFault("Database error") from exc

    if settings_row is None or not settings_row.tenant_password_hash:
        logger.info("No tenant credential found for username %s", username)
        return INVALID

    if not verify_password(password, settings_row.tenant_password_hash):
        logger.info("Tenant password verification failed for username %s", username)
        return INVALID

    logger.info("Tenant password verification succeeded for username %s", username)
    return VerificationResult(
        valid=True,
        company_id=settings_row.company_id,
        tenant_id=settings_row.id,
    )

