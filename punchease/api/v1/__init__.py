"""V1 API router aggregation."""

from fastapi import APIRouter

from punchease.api.v1.auth import router as auth_router
from punchease.api.v1.companies import router as companies_router
from punchease.api.v1.functions import router as functions_router

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(auth_router)
v1_router.include_router(companies_router)
v1_router.include_router(functions_router)
