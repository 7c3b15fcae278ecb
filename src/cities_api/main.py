"""FastAPI application entry point."""

import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cities_api.config import settings
from cities_api.database import Store
from cities_api.exceptions import INTERNAL_ERROR, UNPROCESSABLE_ENTITY, CitiesError
from cities_api.routes import cities_router
from cities_api.schemas import StatusResponse

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = "Route {} {} not found"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the store on startup unless one was injected, and close it on shutdown."""
    owned = getattr(app.state, "store", None) is None
    if owned:
        app.state.store = Store.from_url(settings.database_url, settings.pool_size)
    await app.state.store.create_schema()
    logger.info("Store schema ready")
    try:
        yield
    finally:
        if owned:
            await app.state.store.dispose()
            logger.info("Store connections closed")


def create_app(store: Store | None = None) -> FastAPI:
    """Build the application.

    ``store`` is used as-is when given; otherwise one is created from the
    settings at startup.
    """
    app = FastAPI(
        title="Cities API",
        description="Import cities and find them by id or by distance",
        version="0.1.0",
        lifespan=lifespan,
    )
    if store is not None:
        app.state.store = store

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.include_router(cities_router)

    @app.get("/", response_model=StatusResponse)
    async def root() -> StatusResponse:
        """Status endpoint."""
        return StatusResponse(message=f"Server running on port {settings.port}")

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    register_exception_handlers(app)
    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Map every error to a JSON ``{"error": ...}`` response."""

    @app.exception_handler(CitiesError)
    async def cities_error_handler(request: Request, exc: CitiesError):
        """Handle domain errors.

        Server-side failures are logged with their detail; the client only
        gets a generic message.
        """
        if exc.status_code >= 500:
            logger.error(
                f"{type(exc).__name__} on {request.method} {request.url}: {exc}\n"
                f"{traceback.format_exc()}"
            )
        else:
            logger.warning(f"{exc.status_code} on {request.method} {request.url}: {exc}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.public_message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Handle malformed request bodies.

        Returns 422 Unprocessable Entity.
        """
        detail = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        logger.warning(f"Validation error on {request.method} {request.url}: {detail}")
        return JSONResponse(
            status_code=422,
            content={"error": UNPROCESSABLE_ENTITY.format(detail)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Handle routing errors (unknown route, wrong method)."""
        if exc.status_code == 404:
            message = ROUTE_NOT_FOUND.format(request.method, request.url.path)
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler: log the failure and return a 500."""
        logger.error(
            f"Unhandled exception on {request.method} {request.url}: {exc}\n"
            f"{traceback.format_exc()}"
        )
        return JSONResponse(
            status_code=500,
            content={"error": INTERNAL_ERROR},
        )


app = create_app()
