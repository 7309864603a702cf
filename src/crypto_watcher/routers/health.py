"""Liveness route."""
import time

from fastapi import APIRouter, Request

from crypto_watcher.schemas import HealthStatus

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
def health(request: Request) -> HealthStatus:
    """Return liveness status and process uptime in seconds."""
    started_at = request.app.state.started_at
    return HealthStatus(uptime=round(time.monotonic() - started_at, 3))
