"""API Routes Package."""

from api.routes import health, metrics, tools

__all__ = [
    "health",
    "metrics",
    "tools",
]
