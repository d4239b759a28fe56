"""FastAPI server for the ERPNext tool service.

Main entry point for the HTTP surface. One FrappeClient and one
ToolDispatcher live for the lifetime of the application.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import health, metrics
from api.routes import tools as tool_routes
from connectors.frappe import FrappeApiError, FrappeClient
from core import __version__
from core.observability import configure_logging
from core.settings import Settings, load_settings
from tools.dispatcher import ToolDispatcher
from tools.errors import MissingFieldError, UnknownToolError

logger = logging.getLogger(__name__)


# =============================================================================
# Error mapping
# =============================================================================

async def unknown_tool_handler(request: Request, exc: UnknownToolError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "unknown_tool", "message": str(exc)})


async def missing_field_handler(request: Request, exc: MissingFieldError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "error": "missing_field",
            "tool": exc.tool_name,
            "field": exc.field,
            "message": exc.message,
        },
    )


async def frappe_error_handler(request: Request, exc: FrappeApiError) -> JSONResponse:
    """Remote 4xx keep their status; everything else is a bad gateway."""
    status = exc.status_code if 400 <= exc.status_code < 500 else 502
    return JSONResponse(
        status_code=status,
        content={
            "error": type(exc).__name__,
            "message": str(exc),
            "remote_status": exc.status_code,
            "server_message": exc.server_message,
            "exc_type": exc.exc_type,
            "has_field_messages": exc.has_field_messages,
        },
    )


# =============================================================================
# Application
# =============================================================================

def create_app(
    settings: Optional[Settings] = None,
    client: Optional[FrappeClient] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Service settings; loaded from the environment at startup when omitted
        client: Pre-built client, mostly for tests; built from settings when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Open the ERPNext session on startup and close it on shutdown."""
        active = settings or (None if client is not None else load_settings())
        if active is not None:
            configure_logging(
                level=getattr(logging, active.log_level, logging.INFO),
                json_format=active.json_logs,
            )

        frappe = client or FrappeClient(active.client)
        await frappe.connect()
        app.state.dispatcher = ToolDispatcher(frappe, categories=active.categories if active else None)
        logger.info(f"ERPNext tool service started with {app.state.dispatcher.count} tools")

        yield

        await frappe.disconnect()
        logger.info("ERPNext tool service stopped")

    app = FastAPI(
        title="ERPNext Tool Service",
        description="ERPNext CRUD, workflow and analytics tools over HTTP",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(UnknownToolError, unknown_tool_handler)
    app.add_exception_handler(MissingFieldError, missing_field_handler)
    app.add_exception_handler(FrappeApiError, frappe_error_handler)

    app.include_router(health.router, tags=["Health"])
    app.include_router(metrics.router, tags=["Metrics"])
    app.include_router(tool_routes.router, prefix="/tools", tags=["Tools"])

    return app


if __name__ == "__main__":
    import uvicorn

    service_settings = load_settings()
    uvicorn.run(create_app(service_settings), host=service_settings.http_host, port=service_settings.http_port)
