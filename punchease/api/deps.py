"""FastAPI dependencies for authentication and row-level scoping."""

import uuid
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from punchease.core.config import Settings, get_settings
from punchease.core.database import get_service_session, get_session
from punchease.core.rls import apply_request_scope
from punchease.core.security import decode_jwt
from punchease.models.user_role import AppRole

bearer_scheme = HTTPBearer()


class AuthContext:
    """Resolved identity carried through a request."""

    __slots__ = ("user_id", "role", "company_id")

    def __init__(
        self,
        user_id: uuid.UUID,
        role: AppRole,
        company_id: uuid.UUID | None = None,
    ) -> None:
        self.user_id = user_id
        self.role = role
        self.company_id = company_id

    @property
    def is_superadmin(self) -> bool:
        return self.role == AppRole.SUPERADMIN


def _resolve_jwt(token: str) -> AuthContext:
    """Decode a JWT and extract user, role and company."""
    try:
        payload = decode_jwt(token)
    except JWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired JWT",
        ) from exc

    try:
        cid = payload.get("cid")
        return AuthContext(
            user_id=uuid.UUID(payload["sub"]),
            role=AppRole(payload.get("role", AppRole.EMPLOYEE)),
            company_id=uuid.UUID(cid) if cid else None,
        )
    except (KeyError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Malformed JWT payload",
        ) from exc


async def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> AuthContext:
    """Resolve a bearer JWT and scope the request session to its company."""
    auth = _resolve_jwt(credentials.credentials)
    await apply_request_scope(session, auth.company_id, auth.role)
    return auth


async def require_superadmin(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
) -> AuthContext:
    if not auth.is_superadmin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only superadmins can manage companies",
        )
    return auth


async def require_company_admin(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
) -> AuthContext:
    if auth.role != AppRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can create employees",
        )
    return auth


# Typed shorthand for use in route signatures
Auth = Annotated[AuthContext, Depends(get_auth_context)]
Superadmin = Annotated[AuthContext, Depends(require_superadmin)]
CompanyAdmin = Annotated[AuthContext, Depends(require_company_admin)]
Session = Annotated[AsyncSession, Depends(get_session)]
ServiceSession = Annotated[AsyncSession, Depends(get_service_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]
