from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    """
    HealthCheckResponse — liveness payload for `GET /health-check`.
    """

    status: str = "ok"


def build_health_check_router() -> APIRouter:
    """
    Build router exposing process liveness endpoint.

    Args:
        None.
    Returns:
        APIRouter: Router with `GET /health-check`.
    Assumptions:
        Endpoint does not touch storage and answers while process is alive.
    Raises:
        None.
    Side Effects:
        None.
    """
    router = APIRouter(tags=["health"])

    @router.get("/health-check", response_model=HealthCheckResponse)
    def get_health_check() -> HealthCheckResponse:
        return HealthCheckResponse()

    return router
