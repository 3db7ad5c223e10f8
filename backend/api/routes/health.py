"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.store.interfaces import IStore
from ..dependencies import get_container, get_store

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    storage: str
    users: int
    orders: int
    coupons: int
    notifications: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_container().settings.app_version)


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check(store: IStore = Depends(get_store)) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Loads the store (which reads every collection) and reports record counts.
    """
    container = get_container()
    return ReadinessResponse(
        status="ready",
        storage=container.settings.storage_backend,
        users=len(store.get_all_users()),
        orders=len(store.get_all_orders()),
        coupons=len(store.get_all_coupons()),
        notifications="configured" if container.notifier.is_configured else "disabled",
    )
