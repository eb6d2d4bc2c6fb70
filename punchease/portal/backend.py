"""HTTP client for the PunchEase backend, as used by the tenant portal."""

from __future__ import annotations

import logging
import uuid
from types import TracebackType
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from punchease.core.errors import DatabaseFault, MalformedRequest
from punchease.models.company import CompanyIdentity

logger = logging.getLogger(__name__)


class VerificationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    valid: bool
    company_id: uuid.UUID | None = Field(default=None, alias="companyId")
    tenant_id: uuid.UUID | None = Field(default=None, alias="tenantId")


class PunchEaseBackend:
    """Thin async wrapper over the backend's public endpoints.

    Pass ``client`` to share a pre-configured ``httpx.AsyncClient`` (tests
    use a ``MockTransport``); otherwise one is created for ``base_url``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        if client is None and base_url is None:
            raise ValueError("base_url or client is required")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> PunchEaseBackend:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_company_by_slug(self, slug: str) -> CompanyIdentity | None:
        """Return the company for ``slug``, or ``None`` if there is none.

        Raises ``DatabaseFault`` when the backend cannot answer.
        """
        try:
            resp = await self._client.get(f"/v1/companies/by-slug/{quote(slug, safe='')}")
        except httpx.HTTPError as exc:
            raise DatabaseFault(f"Company lookup failed: {exc}") from exc

        if resp.status_code == httpx.codes.NOT_FOUND:
            return None
        if resp.is_error:
            raise DatabaseFault(f"Company lookup failed with status {resp.status_code}")
        try:
            return CompanyIdentity.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise DatabaseFault("Company lookup returned an unreadable body") from exc

    async def verify_tenant_password(self, username: str, password: str) -> VerificationResult:
        """Call the verify-tenant-password function.

        Raises ``MalformedRequest`` on a 400 and ``DatabaseFault`` on any
        other failure; a rejected password is ``valid=False``, not an error.
        """
        try:
            resp = await self._client.post(
                "/v1/functions/verify-tenant-password",
                json={"username": username, "password": password},
            )
        except httpx.HTTPError as exc:
            raise DatabaseFault(f"Password check failed: {exc}") from exc

        if resp.status_code == httpx.codes.BAD_REQUEST:
            raise MalformedRequest(_error_message(resp))
        if resp.is_error:
            raise DatabaseFault(_error_message(resp))
        try:
            return VerificationResult.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise DatabaseFault("Password check returned an unreadable body") from exc


def _error_message(resp: httpx.Response) -> str:
    try:
        return str(resp.json().get("error") or resp.reason_phrase)
    except (ValueError, AttributeError):
        return resp.reason_phrase or f"HTTP {resp.status_code}"
