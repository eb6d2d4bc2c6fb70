"""Tenant-portal login form logic (no rendering)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from punchease.core.errors import DatabaseFault, MalformedRequest
from punchease.portal.backend import VerificationResult
from punchease.portal.tenant import TenantContext

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"

# Where an authenticated tenant continues to
AFTER_LOGIN_PATH = "/auth"


class PasswordVerifier(Protocol):
    async def verify_tenant_password(self, username: str, password: str) -> VerificationResult: ...


class LoginStatus(StrEnum):
    SUCCESS = "success"
    INVALID = "invalid"
    ERROR = "error"


@dataclass(frozen=True)
class LoginOutcome:
    status: LoginStatus
    message: str | None = None
    redirect_to: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == LoginStatus.SUCCESS


class TenantLoginForm:
    """Submits tenant credentials and records a successful login.

    ``pending`` is true while a submission is in flight; a UI disables its
    submit control on it. A second submit while pending is ignored.
    """

    def __init__(self, backend: PasswordVerifier, tenant: TenantContext) -> None:
        self._backend = backend
        self._tenant = tenant
        self.pending = False

    @property
    def should_redirect(self) -> bool:
        """An already-authenticated tenant skips the form."""
        return self._tenant.is_authenticated

    async def submit(self, username: str, password: str, remember_me: bool = False) -> LoginOutcome:
        if self.pending:
            return LoginOutcome(LoginStatus.ERROR, "A login is already in progress")

        self.pending = True
        try:
            result = await self._backend.verify_tenant_password(username, password)
        except MalformedRequest as exc:
            return LoginOutcome(LoginStatus.ERROR, str(exc))
        except DatabaseFault as exc:
            logger.error("Tenant login error: %s", exc)
            return LoginOutcome(LoginStatus.ERROR, str(exc) or UNEXPECTED_ERROR_MESSAGE)
        finally:
            self.pending = False

        if not result.valid or result.company_id is None or result.tenant_id is None:
            return LoginOutcome(LoginStatus.INVALID, INVALID_CREDENTIALS_MESSAGE)

        self._tenant.login_tenant(username, result.company_id, result.tenant_id, remember_me)
        return LoginOutcome(LoginStatus.SUCCESS, redirect_to=AFTER_LOGIN_PATH)
