# src/radical_api/main.py
"""Main entry point for the Radical application."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from radical_api.api.router import api_router, site_router
from radical_api.core.errors import ApiError
from radical_api.core.http_policy import HttpPolicy, load_http_policy
from radical_api.core.settings import settings
from radical_api.db.session import create_tables
from radical_api.services.static_site import get_static_site_client

logger = logging.getLogger(__name__)

# Validation error types reported as missing input rather than malformed input.
MISSING_ERROR_TYPES = frozenset({"missing", "string_too_short", "too_short"})

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Civic engagement API for proposals, votes and petitions",
    version=settings.app_version,
)
app.state.http_policy = load_http_policy()

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)


@app.middleware("http")
async def apply_http_policy(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Answer preflights and stamp CORS and cache headers on every response."""
    policy: HttpPolicy = request.app.state.http_policy
    if request.method == "OPTIONS":
        response: Response = Response(status_code=status.HTTP_204_NO_CONTENT)
    else:
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            response = JSONResponse(
                {"error": "Internal server error"},
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    response.headers.update(policy.cors_headers)
    if "cache-control" not in response.headers:
        response.headers["Cache-Control"] = policy.cache_control_for(
            request.method,
            request.url.path,
            response.status_code,
        )
    return response


@app.exception_handler(ApiError)
async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    error_types = {error.get("type") for error in errors}
    if "json_invalid" in error_types:
        message = "Invalid request format"
    elif error_types & MISSING_ERROR_TYPES:
        message = "Missing required fields"
    else:
        message = "Invalid request"

    details = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        field = ".".join(location[1:]) or ".".join(location)
        details.append({"field": field, "message": error.get("msg"), "type": error.get("type")})
    return JSONResponse(
        {"error": message, "details": details},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    payload: dict[str, object] = {"error": "Database operation failed"}
    if settings.debug:
        payload["details"] = str(exc)
    return JSONResponse(payload, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        {"error": exc.detail},
        status_code=exc.status_code,
        headers=exc.headers,
    )


# Include routers
app.include_router(api_router)
app.include_router(site_router)


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.auto_create_tables:
        create_tables()
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await get_static_site_client().close()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("radical_api.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
