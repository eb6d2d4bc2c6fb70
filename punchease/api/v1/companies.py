"""Company endpoints — public slug lookup, superadmin provisioning, admin staffing."""

import uuid

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field
from sqlmodel import select

from punchease.api.deps import CompanyAdmin, Session, Superadmin
from punchease.core.errors import Conflict, NotFound
from punchease.models.company import Company, CompanyIdentity
from punchease.services.companies import provision_company, resolve_company
from punchease.services.employees import create_employee

router = APIRouter(prefix="/companies", tags=["companies"])

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


# ── Provisioning request / response schemas ──────────────────

class CompanyCreateRequest(BaseModel):
    """Everything needed to create a company and its first admin."""
    company_name: str = Field(min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=100, pattern=SLUG_PATTERN)
    email: str | None = Field(default=None, max_length=320)
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=255)
    postal_code: str | None = Field(default=None, max_length=20)
    city: str | None = Field(default=None, max_length=100)
    org_number: str | None = Field(default=None, max_length=50)

    admin_email: str = Field(min_length=3, max_length=320)
    admin_password: str = Field(min_length=6, max_length=128)
    admin_first_name: str = Field(min_length=1, max_length=100)
    admin_last_name: str = Field(min_length=1, max_length=100)

    # Optional tenant-portal login; stored only when both are given
    tenant_username: str | None = Field(default=None, max_length=100)
    tenant_password: str | None = Field(default=None, max_length=128)


class CompanyCreateResponse(BaseModel):
    company: CompanyIdentity
    admin_email: str
    tenant_username: str | None


class EmployeeCreateRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=6, max_length=128)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    personal_number: str | None = Field(default=None, max_length=20)


class EmployeeUser(BaseModel):
    id: uuid.UUID
    email: str


class EmployeeCreateResponse(BaseModel):
    success: bool = True
    user: EmployeeUser


# ── Routes ────────────────────────────────────────────────────

@router.get(
    "/by-slug/{slug}",
    response_model=CompanyIdentity,
    summary="Resolve a URL slug to a company",
)
async def get_company_by_slug_route(slug: str, session: Session) -> CompanyIdentity:
    """Unauthenticated: tenant-scoped pages resolve their slug before login."""
    try:
        company = await resolve_company(session, slug)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return CompanyIdentity.model_validate(company)


@router.get("", response_model=list[CompanyIdentity])
async def list_companies(auth: Superadmin, session: Session) -> list[CompanyIdentity]:
    stmt = select(Company).order_by(Company.name.asc())  # type: ignore[attr-defined]
    result = await session.execute(stmt)
    return [CompanyIdentity.model_validate(c) for c in result.scalars().all()]


@router.post(
    "",
    response_model=CompanyCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a company with its admin and tenant login",
)
async def create_company(
    body: CompanyCreateRequest,
    auth: Superadmin,
    session: Session,
) -> CompanyCreateResponse:
    try:
        company, admin = await provision_company(session, **body.model_dump())
    except Conflict as exc:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    return CompanyCreateResponse(
        company=CompanyIdentity.model_validate(company),
        admin_email=admin.email,
        tenant_username=body.tenant_username or None,
    )


@router.post(
    "/me/employees",
    response_model=EmployeeCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an employee in the caller's company",
)
async def create_employee_route(
    body: EmployeeCreateRequest,
    auth: CompanyAdmin,
    session: Session,
) -> EmployeeCreateResponse:
    """Admin only. The employee joins the company on the admin's profile."""
    try:
        account = await create_employee(session, auth.user_id, **body.model_dump())
    except (NotFound, Conflict) as exc:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return EmployeeCreateResponse(user=EmployeeUser(id=account.id, email=account.email))
