"""In-memory metrics endpoint."""

from typing import Any, Dict

from fastapi import APIRouter

from core.observability import get_metrics


router = APIRouter()


@router.get("/metrics")
async def metrics_summary() -> Dict[str, Any]:
    """Tool and request counters with timing stats since process start."""
    return get_metrics().get_summary()
