"""API routes for the FastAPI application."""

from fastapi import APIRouter

from quotaguard.api.v1.endpoints import health, usage

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(usage.router, prefix="/usage", tags=["usage"])
