"""Health check endpoints."""

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Request
from pydantic import BaseModel

from core import __version__


router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
    version: str
    tool_count: int
    services: Dict[str, str]


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Report liveness and how many tools are enabled.

    The ERPNext instance is not contacted; ``erpnext`` only says whether
    an HTTP session is open.
    """
    dispatcher = request.app.state.dispatcher
    session_open = getattr(dispatcher.client, "_session", None) is not None
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
        tool_count=dispatcher.count,
        services={
            "api": "up",
            "erpnext": "connected" if session_open else "disconnected",
        },
    )
