"""Tenant-portal session: who is logged in to the company portal."""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from enum import StrEnum

from punchease.portal.storage import SessionStore

logger = logging.getLogger(__name__)

TENANT_STORAGE_KEY = "punchease_tenant"


class TenantState(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class TenantSession:
    username: str | None = None
    tenant_id: uuid.UUID | None = None
    company_id: uuid.UUID | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.company_id is not None

    def to_record(self) -> str:
        return json.dumps({
            "username": self.username,
            "companyId": str(self.company_id) if self.company_id else None,
            "tenantId": str(self.tenant_id) if self.tenant_id else None,
        })

    @classmethod
    def from_record(cls, raw: str) -> TenantSession:
        """Parse a stored record. Raises ValueError or TypeError if malformed."""
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise TypeError("tenant record is not an object")
        return cls(
            username=data.get("username"),
            company_id=_optional_uuid(data.get("companyId")),
            tenant_id=_optional_uuid(data.get("tenantId")),
        )


ANONYMOUS = TenantSession()


def _optional_uuid(value) -> uuid.UUID | None:
    return uuid.UUID(str(value)) if value else None


class TenantContext:
    """Holds the tenant login for this client and mirrors it to ``store``.

    The stored record is read once, synchronously, at construction, so a
    remembered login is authenticated before anything consumes the context.
    """

    def __init__(self, store: SessionStore) -> None:
        self._store = store
        self._session = self._restore()

    def _restore(self) -> TenantSession:
        try:
            raw = self._store.get(TENANT_STORAGE_KEY)
        except OSError:
            logger.exception("Error reading tenant data; starting unauthenticated")
            return ANONYMOUS
        if raw is None:
            return ANONYMOUS
        try:
            return TenantSession.from_record(raw)
        except (ValueError, TypeError):
            logger.exception("Error loading tenant data; discarding stored record")
            self._store.clear(TENANT_STORAGE_KEY)
            return ANONYMOUS

    @property
    def session(self) -> TenantSession:
        return self._session

    @property
    def tenant_username(self) -> str | None:
        return self._session.username

    @property
    def tenant_id(self) -> uuid.UUID | None:
        return self._session.tenant_id

    @property
    def company_id(self) -> uuid.UUID | None:
        return self._session.company_id

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    @property
    def state(self) -> TenantState:
        if self.is_authenticated:
            return TenantState.AUTHENTICATED
        return TenantState.UNAUTHENTICATED

    def login_tenant(
        self,
        username: str,
        company_id: uuid.UUID,
        tenant_id: uuid.UUID,
        remember_me: bool,
    ) -> None:
        """Replace the session in one step; persist it only if ``remember_me``.

        With ``remember_me=False`` an earlier stored record is left as is.
        """
        self._session = TenantSession(
            username=username,
            company_id=company_id,
            tenant_id=tenant_id,
        )
        if remember_me:
            self._store.set(TENANT_STORAGE_KEY, self._session.to_record())

    def logout_tenant(self) -> None:
        self._session = ANONYMOUS
        self._store.clear(TENANT_STORAGE_KEY)
