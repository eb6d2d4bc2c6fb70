"""Single-purpose backend functions: tenant password check and superadmin bootstrap.

These are the only routes that run on the service session, which bypasses
row-level security. Their wire format is fixed: errors are ``{"error": ...}``
bodies rather than FastAPI's ``{"detail": ...}``, and every response carries
permissive CORS headers so the portal can call them from any origin.
"""

import json
import logging
import uuid

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from punchease.api.deps import AppSettings, ServiceSession
from punchease.core.errors import BootstrapStepError, DatabaseFault
from punchease.services.superadmin import (
    SUCCESS_MESSAGE,
    SuperadminIdentity,
    bootstrap_superadmin,
)
from punchease.services.tenant_credentials import verify_tenant_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["functions"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

CREDENTIALS_REQUIRED = "Username and password are required"


# ── Schemas ──────────────────────────────────────────────────

class VerifyTenantPasswordRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class VerifyTenantPasswordResponse(BaseModel):
    valid: bool
    company_id: uuid.UUID | None = Field(default=None, serialization_alias="companyId")
    tenant_id: uuid.UUID | None = Field(default=None, serialization_alias="tenantId")


class SuperadminUser(BaseModel):
    id: uuid.UUID
    email: str


class CreateSuperadminResponse(BaseModel):
    success: bool = True
    message: str
    user: SuperadminUser


def _json(content: dict, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def _error(message: str, status_code: int) -> JSONResponse:
    return _json({"error": message}, status_code=status_code)


def _preflight() -> Response:
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


# ── verify-tenant-password ───────────────────────────────────

@router.options("/verify-tenant-password", include_in_schema=False)
async def verify_tenant_password_preflight() -> Response:
    return _preflight()


@router.post(
    "/verify-tenant-password",
    response_model=VerifyTenantPasswordResponse,
    responses={400: {}, 500: {}},
)
async def verify_tenant_password_route(request: Request, session: ServiceSession) -> JSONResponse:
    """Check a tenant-portal username + password.

    Unknown username, missing hash and wrong password all answer
    ``{"valid": false}`` with status 200.
    """
    try:
        payload = await request.json()
        body = VerifyTenantPasswordRequest.model_validate(payload)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError):
        return _error(CREDENTIALS_REQUIRED, status.HTTP_400_BAD_REQUEST)

    try:
        result = await verify_tenant_password(session, body.username, body.password)
    except DatabaseFault:
        return _error("Database error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    response = VerifyTenantPasswordResponse(
        valid=result.valid,
        company_id=result.company_id,
        tenant_id=result.tenant_id,
    )
    return _json(response.model_dump(mode="json", by_alias=True, exclude_none=True))


# ── create-superadmin ────────────────────────────────────────

@router.options("/create-superadmin", include_in_schema=False)
async def create_superadmin_preflight() -> Response:
    return _preflight()


@router.post(
    "/create-superadmin",
    response_model=CreateSuperadminResponse,
    responses={400: {}, 404: {}},
)
async def create_superadmin_route(settings: AppSettings, session: ServiceSession) -> JSONResponse:
    """Provision the configured superadmin account, profile and role.

    Identity comes from settings, never from the request. Steps are not
    rolled back on failure; the error message names what failed.
    """
    if not settings.superadmin_bootstrap_enabled:
        return _error("Superadmin bootstrap is disabled", status.HTTP_404_NOT_FOUND)

    try:
        identity = SuperadminIdentity.from_settings(settings)
        account = await bootstrap_superadmin(session, identity)
    except BootstrapStepError as exc:
        logger.error("Superadmin bootstrap failed at %s step: %s", exc.step, exc.message)
        return _error(exc.message, status.HTTP_400_BAD_REQUEST)

    response = CreateSuperadminResponse(
        message=SUCCESS_MESSAGE,
        user=SuperadminUser(id=account.id, email=account.email),
    )
    return _json(response.model_dump(mode="json"))
