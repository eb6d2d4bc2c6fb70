"""Authentication endpoints — account login + current user."""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel
from sqlmodel import select

from punchease.api.deps import Auth, Session
from punchease.core.errors import InvalidCredential
from punchease.core.security import create_jwt
from punchease.models.account import Account, AccountRead
from punchease.models.profile import Profile, ProfileRead
from punchease.models.user_role import AppRole
from punchease.services.accounts import authenticate_account, get_roles, primary_role

router = APIRouter(prefix="/auth", tags=["auth"])


# ── Schemas ──────────────────────────────────────────────────

class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: AccountRead
    role: AppRole
    profile: ProfileRead | None


class MeResponse(BaseModel):
    user: AccountRead
    role: AppRole
    profile: ProfileRead | None


# ── Routes ───────────────────────────────────────────────────

@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, session: Session) -> LoginResponse:
    """Authenticate with email + password, receive a JWT."""
    try:
        account = await authenticate_account(session, body.email, body.password)
    except InvalidCredential as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    if not account.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is disabled",
        )

    role = primary_role(await get_roles(session, account.id))
    profile = await _get_profile(session, account)
    # Superadmin profiles carry a placeholder company; the token stays unscoped
    company_id = profile.company_id if profile and role != AppRole.SUPERADMIN else None

    token = create_jwt(
        subject=str(account.id),
        role=role,
        company_id=str(company_id) if company_id else None,
    )

    return LoginResponse(
        access_token=token,
        user=AccountRead.model_validate(account),
        role=role,
        profile=ProfileRead.model_validate(profile) if profile else None,
    )


@router.get("/me", response_model=MeResponse)
async def get_me(auth: Auth, session: Session) -> MeResponse:
    """Return the current authenticated account, its role and profile."""
    account = await session.get(Account, auth.user_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    profile = await _get_profile(session, account)
    return MeResponse(
        user=AccountRead.model_validate(account),
        role=auth.role,
        profile=ProfileRead.model_validate(profile) if profile else None,
    )


async def _get_profile(session, account: Account) -> Profile | None:
    result = await session.execute(select(Profile).where(Profile.user_id == account.id))
    return result.scalar_one_or_none()
