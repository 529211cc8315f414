"""Liveness endpoint."""

from fastapi import APIRouter

from leadtrack.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/api/health")
async def health() -> HealthResponse:
    return HealthResponse()
