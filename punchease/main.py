"""FastAPI application entrypoint."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from punchease.api.v1 import v1_router
from punchease.core.config import get_settings
from punchease.core.database import init_db
from punchease.core.logging_config import configure_logging

# Backend functions answer their own preflights with fixed permissive headers
FUNCTIONS_PATH = "/v1/functions"


class ScopedCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that leaves requests under ``exclude_paths`` untouched."""

    def __init__(self, app: ASGIApp, exclude_paths: tuple[str, ...] = (), **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.exclude_paths = exclude_paths

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].startswith(self.exclude_paths):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup: ensure tables exist (use Alembic in production)
    configure_logging()
    await init_db()
    yield


app = FastAPI(
    title="PunchEase",
    version="0.1.0",
    description="Multi-tenant workforce management backend",
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────
_settings = get_settings()
app.add_middleware(
    ScopedCORSMiddleware,
    exclude_paths=(FUNCTIONS_PATH,),
    allow_origins=[o.strip() for o in _settings.allowed_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── API routes ───────────────────────────────────────────────
app.include_router(v1_router)


@app.get("/health", tags=["system"])
async def health_check() -> dict:
    return {"status": "ok"}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run("punchease.main:app", host="0.0.0.0", port=8000)
