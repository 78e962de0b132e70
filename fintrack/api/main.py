"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fintrack.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fintrack.api.dependencies import get_request_id
from fintrack.api.v1 import accounts, categories, dashboard, statistics, transactions
from fintrack.domain.exceptions import DataStoreError, InvalidPeriodError, InvalidRowError, NotFoundError
from fintrack.infrastructure.database.session import init_db
from fintrack.infrastructure.observability.logging import setup_logging
from fintrack.infrastructure.observability.metrics import store_fetch_failures_counter
from fintrack.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The local database has no migration step; create tables on startup
    if settings.store_backend == "sql":
        init_db()
    yield


async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Store failures leave the client's last render in place; report unavailability"""
    store_fetch_failures_counter.inc()
    logging.error(f"Store error: {exc}", extra={"request_id": get_request_id(request)})
    return JSONResponse(status_code=503, content={"detail": "Data store unavailable"})


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logging.warning(f"Not found: {exc}", extra={"request_id": get_request_id(request)})
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def invalid_period_handler(request: Request, exc: InvalidPeriodError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; runs outside the middleware stack so it sets X-Request-ID itself"""
    request_id = get_request_id(request)
    logging.error(f"Unexpected error: {exc}", exc_info=exc, extra={"request_id": request_id})
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
        headers={"X-Request-ID": request_id},
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="fintrack",
        description="Personal finance dashboard: balances, statistics and budgets",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DataStoreError, store_error_handler)
    app.add_exception_handler(InvalidRowError, store_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InvalidPeriodError, invalid_period_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(statistics.router, prefix="/v1", tags=["statistics"])
    app.include_router(accounts.router, prefix="/v1", tags=["accounts"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(categories.router, prefix="/v1", tags=["categories"])

    return app


app = create_app()
