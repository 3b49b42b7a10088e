"""Factory for constructing the FastAPI application."""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from users_backend.api.errors import request_validation_exception_handler
from users_backend.api.routers import users_router
from users_backend.logs import configure_logging
from users_backend.settings import BackendSettings, get_settings

logger = structlog.get_logger(__name__)


def create_api(settings: BackendSettings | None = None) -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    config = settings or get_settings()
    configure_logging(config.log_level, json_output=config.log_json)

    app = FastAPI(title="Users API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Pagination"],
    )
    app.add_exception_handler(
        RequestValidationError, request_validation_exception_handler
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    app.include_router(users_router, prefix=config.api_prefix)
    if config.serve_unprefixed and config.api_prefix:
        app.include_router(users_router, include_in_schema=False)
    return app
