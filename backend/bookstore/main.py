"""
FastAPI application entrypoint.

- Configures CORS.
- Registers standardized error handlers.
- Initializes structured logging and per-request access logs (X-Request-ID).
- Includes infra routes (health/version) and aggregates API sub-routers.
- Creates tables and default roles on startup.

Run locally:
  uvicorn bookstore.main:app --reload --port 8000
"""

from __future__ import annotations

import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from bookstore.api.router import router as api_router
from bookstore.core.config import get_settings
from bookstore.core.errors import register_exception_handlers
from bookstore.core.logging import get_logger, init_logging
from bookstore.db.init_db import init_db

log = get_logger("bookstore.api")


def _create_infra_router() -> APIRouter:
    """
    Create a minimal API router with non-business endpoints (health, version).
    """
    router = APIRouter(prefix="/api", tags=["infra"])

    @router.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @router.get("/version")
    def version() -> dict:
        return {"version": get_settings().app_version}

    return router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    log.info("bookstore_started", extra={"env": get_settings().app_env})
    yield


def get_application() -> FastAPI:
    """
    Construct the FastAPI app with CORS, logging, routers, and error handlers.
    """
    init_logging()
    settings = get_settings()

    app = FastAPI(title="Bookstore API", version=settings.app_version, lifespan=_lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = req_id
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-ID"] = req_id
            return response
        finally:
            # Unhandled errors propagate to the 500 handler; still log the request
            log.info(
                "request_done",
                extra={
                    "request_id": req_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
                },
            )

    app.include_router(_create_infra_router())
    app.include_router(api_router)

    register_exception_handlers(app)

    @app.get("/")
    def root() -> dict:
        return {"message": "Bookstore API", "health": "/api/health", "docs": "/docs"}

    return app


# ASGI application
app = get_application()
