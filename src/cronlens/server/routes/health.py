"""Health endpoint."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from cronlens import __version__

health_router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    job_source: str
    uptime_seconds: float


@health_router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    job_source = request.app.state.job_source
    started_at = getattr(request.app.state, "started_at", datetime.now(UTC))
    uptime = (datetime.now(UTC) - started_at).total_seconds()
    return HealthResponse(
        status="ok",
        version=__version__,
        job_source=job_source.name,
        uptime_seconds=round(max(uptime, 0.0), 1),
    )
