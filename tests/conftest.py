"""Shared test fixtures — async SQLite in-memory DB + test client."""

import os
from collections.abc import AsyncGenerator

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

# Import all models so metadata is populated
import punchease.models  # noqa: E402, F401
from punchease.core.config import Settings, get_settings  # noqa: E402
from punchease.core.database import get_service_session, get_session  # noqa: E402
from punchease.main import app  # noqa: E402
from punchease.services.companies import provision_company  # noqa: E402
from punchease.services.superadmin import SuperadminIdentity, bootstrap_superadmin  # noqa: E402

SUPERADMIN_EMAIL = "root@superadmin.test"
SUPERADMIN_PASSWORD = "superadmin-pass"


@pytest.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite://", echo=False, poolclass=StaticPool)
    async with eng.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def test_session_factory(engine):
    """Session factory bound to the test SQLite engine."""
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with test_session_factory() as sess:
        yield sess
        await sess.rollback()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        superadmin_bootstrap_enabled=True,
        superadmin_email=SUPERADMIN_EMAIL,
        superadmin_password=SUPERADMIN_PASSWORD,
        superadmin_first_name="Root",
        superadmin_last_name="Admin",
    )


@pytest.fixture
async def client(session, settings) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX async test client with DB session and settings overrides.

    The regular and the service session share one test session.
    """

    async def _override_session():
        yield session

    app.dependency_overrides[get_session] = _override_session
    app.dependency_overrides[get_service_session] = _override_session
    app.dependency_overrides[get_settings] = lambda: settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def superadmin_headers(client: AsyncClient, session: AsyncSession, settings) -> dict:
    """Provision the superadmin and return bearer headers for it."""
    await bootstrap_superadmin(session, SuperadminIdentity.from_settings(settings))
    resp = await client.post("/v1/auth/login", json={
        "email": SUPERADMIN_EMAIL,
        "password": SUPERADMIN_PASSWORD,
    })
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def make_company(session: AsyncSession):
    """Factory: provision a company directly, bypassing the API."""

    async def _make(
        slug: str,
        tenant_username: str | None = None,
        tenant_password: str | None = None,
    ):
        company, _ = await provision_company(
            session,
            company_name=f"{slug.title()} AB",
            slug=slug,
            admin_email=f"admin@{slug}.test",
            admin_password="adminpass1",
            admin_first_name="Ada",
            admin_last_name="Admin",
            tenant_username=tenant_username,
            tenant_password=tenant_password,
        )
        return company

    return _make
