"""
Health endpoint.

Key behaviors:
- /health: liveness with a UTC timestamp and the service name
- Never rate limited and never touches the upstream providers
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from studio_eighty7.adapters.clock import SystemClock
from studio_eighty7.core.ports.time import TimePort


def build_health_payload(service: str, time_port: TimePort) -> dict[str, Any]:
    return {
        "status": "ok",
        "timestamp": time_port.now_utc().isoformat().replace("+00:00", "Z"),
        "service": service,
    }


def create_health_router(
    service: str = "studio-eighty7-backend",
    time_port: TimePort | None = None,
) -> APIRouter:
    """
    Create FastAPI router for the health endpoint.

    Args:
        service: Name reported in the payload
        time_port: Clock for the timestamp (system clock if None)
    """
    router = APIRouter(tags=["health"])
    clock = time_port or SystemClock()

    @router.get(
        "/health",
        response_model=None,
        responses={200: {"description": "Service is running"}},
    )
    def health_check() -> JSONResponse:
        return JSONResponse(
            content=build_health_payload(service, clock),
            status_code=status.HTTP_200_OK,
        )

    return router
