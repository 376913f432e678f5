"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shortlinks import __version__
from shortlinks.lib.errors import (
    CodeAllocationError,
    ExpiredError,
    InvalidInputError,
    NotFoundError,
    ShortLinkError,
    StoreUnavailableError,
)
from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware

logger = logging.getLogger("shortlinks.web")

# Most specific first
_ERROR_STATUS = (
    (InvalidInputError, status.HTTP_400_BAD_REQUEST, "invalid_input"),
    (ExpiredError, status.HTTP_400_BAD_REQUEST, "expired"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE, "store_unavailable"),
    (CodeAllocationError, status.HTTP_500_INTERNAL_SERVER_ERROR, "allocation_failed"),
)


def _error_response(status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "detail": detail})


async def short_link_error_handler(request: Request, exc: ShortLinkError) -> JSONResponse:
    """Map core errors to HTTP responses."""
    for error_type, status_code, error in _ERROR_STATUS:
        if isinstance(exc, error_type):
            if status_code >= 500:
                logger.error(f"{request.method} {request.url.path} failed: {exc}")
            return _error_response(status_code, error, str(exc))

    logger.error(f"Unmapped error on {request.method} {request.url.path}: {exc!r}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400."""
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
    return _error_response(status.HTTP_400_BAD_REQUEST, "invalid_input", "; ".join(messages))


def create_app(registry, config) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        registry: LinkRegistry instance (may be None until the lifespan sets it)
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Short Links",
        description="Short-code assignment and resolution service",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Store instances in app state for access in routes
    app.state.registry = registry
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(ShortLinkError, short_link_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
