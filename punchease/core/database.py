"""Async database engines and session factories.

Two engines exist. The regular one serves every tenant-scoped request and is
subject to row-level security. The service engine bypasses it and is reserved
for the backend functions that must read before the caller has an identity.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from punchease.core.config import get_settings
from punchease.core.rls import RLS_INFO_KEY, SERVICE_SCOPE

settings = get_settings()


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"echo": False}
    return {"echo": False, "pool_size": 20, "max_overflow": 10}


engine = create_async_engine(settings.database_url, **_engine_kwargs(settings.database_url))

service_engine = create_async_engine(
    settings.effective_service_database_url,
    **_engine_kwargs(settings.effective_service_database_url),
)

async_session_factory = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

service_session_factory = sessionmaker(
    service_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    info={RLS_INFO_KEY: SERVICE_SCOPE},
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields an async DB session."""
    async with async_session_factory() as session:
        yield session


async def get_service_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields a session with RLS bypassed.

    Only the verify-tenant-password and create-superadmin functions depend
    on this.
    """
    async with service_session_factory() as session:
        yield session


async def init_db() -> None:
    """Create all tables. Use Alembic migrations in production."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
