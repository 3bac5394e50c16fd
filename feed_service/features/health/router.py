"""Health check endpoint.

``GET /health`` is a liveness probe: it answers as long as the process can
serve HTTP and does not touch the database.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter
from pydantic import BaseModel, Field

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str = Field(default="OK", description="Always OK while the process is serving")
    timestamp: datetime = Field(description="Server time (UTC)")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def health() -> HealthResponse:
    return HealthResponse(status="OK", timestamp=datetime.now(UTC))
