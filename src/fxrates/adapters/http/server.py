# src/fxrates/adapters/http/server.py
"""
HTTP Server - FastAPI Application Builder and Middlewares

This module builds the FastAPI application around a rate store: it attaches
the store to the app state, registers the routers, tags each request with an
id for logging, and maps domain errors onto JSON error responses.

Files that USE this module:
- fxrates.app (build_application for the running service)
- tests.test_http_api (builds apps over temporary stores)

Files that this module USES:
- fxrates.adapters.http.handlers (build_routers)
- fxrates.adapters.persistence.file_store (RateFileStore)
- fxrates.domain.errors (error to status mapping)
- fxrates.shared.logging_conf (request_id_var)
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fxrates import __version__
from fxrates.adapters.http.handlers import build_routers
from fxrates.adapters.http.schemas import ErrorResponse
from fxrates.adapters.persistence.file_store import RateFileStore
from fxrates.domain.errors import (
    InvalidRecordError,
    RateNotFoundError,
    StorageUnavailableError,
)
from fxrates.shared.logging_conf import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the store once at startup so problems show up in the logs early."""
    store: RateFileStore = app.state.rate_store
    try:
        records = store.load_all()
        logger.info("Loaded %d dates from %s", len(records), store.path)
    except StorageUnavailableError as e:
        logger.critical("Rate store unavailable at startup: %s", e.message)
    yield
    logger.info("FX rates service shutting down")


def build_application(store: RateFileStore) -> FastAPI:
    """
    Build FastAPI application with configured middlewares and handlers.

    Args:
        store: Rate store every request reads from and appends to

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title="FX Rates API",
        description="Historical USD-based exchange rates and currency conversion.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.rate_store = store

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        token = request_id_var.set(request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "%s %s -> %d (%.2f ms)",
                request.method, request.url.path, response.status_code, elapsed_ms,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)

    @app.exception_handler(RateNotFoundError)
    async def not_found_handler(request: Request, exc: RateNotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(InvalidRecordError)
    async def invalid_record_handler(request: Request, exc: InvalidRecordError):
        logger.warning("Rejected record for %s %s: %s", request.method, request.url.path, exc.message)
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(StorageUnavailableError)
    async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError):
        logger.error("Storage failure for %s %s: %s", request.method, request.url.path, exc.message)
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.critical(
            "Unhandled exception for request %s %s", request.method, request.url, exc_info=exc
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    for router in build_routers():
        app.include_router(router)

    return app
