"""API Package.

FastAPI server exposing the ERPNext tools over HTTP.
"""

from api.server import create_app

__all__ = [
    "create_app",
]
