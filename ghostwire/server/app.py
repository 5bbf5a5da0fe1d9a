"""FastAPI Application.

HTTP host for the workbench: the desktop UI talks to these routes
instead of calling into the core directly.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ghostwire import __version__
from ghostwire.runtime import HttpCliExecutor
from ghostwire.server.state import get_workbench

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Ghostwire server...")

    workbench = get_workbench()
    if isinstance(workbench.executor, HttpCliExecutor) and not workbench.executor.check_installed():
        logger.warning(
            f"Executor '{workbench.executor.executable}' not found on PATH; sends will fail"
        )

    yield

    logger.info("Shutting down Ghostwire server...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Ghostwire",
        description="HTTP request workbench backed by httpcli",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware for desktop app
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": str(exc), "type": type(exc).__name__},
        )

    # Register routes
    from ghostwire.server.routes import collections, history, requests, transfer

    app.include_router(requests.router, prefix="/api/request", tags=["request"])
    app.include_router(collections.router, prefix="/api/collections", tags=["collections"])
    app.include_router(history.router, prefix="/api/history", tags=["history"])
    app.include_router(transfer.router, prefix="/api/transfer", tags=["transfer"])

    # Health check
    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": __version__,
        }

    return app


# Create the default app instance
app = create_app()
