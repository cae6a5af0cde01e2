"""JSON error envelope and CORS handling for the directory API.

Every failing request is answered as ``{"error": message}``.
"""

import structlog
from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import RequestResponseEndpoint

from src.infrastructure.observability import get_current_trace_id

logger = structlog.get_logger()

METHOD_NOT_ALLOWED = "Method not allowed"
INVALID_BODY = "Invalid request body"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


async def cors_middleware(
    request: Request,
    call_next: RequestResponseEndpoint,
) -> Response:
    """Answer preflight requests directly and add CORS headers to the rest."""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> Response:
    """Render HTTP errors with the error envelope.

    Unknown routes and unsupported methods both answer 405, since the
    directory only serves the listed method/path pairs.
    """
    if exc.status_code in (404, 405):
        logger.info(
            "unsupported_request",
            method=request.method,
            path=request.url.path,
        )
        return JSONResponse(status_code=405, content={"error": METHOD_NOT_ALLOWED})

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> Response:
    """Render unparseable request bodies as a 400."""
    logger.info(
        "request_validation_failed",
        path=request.url.path,
        errors=len(exc.errors()),
    )
    return JSONResponse(status_code=400, content={"error": INVALID_BODY})


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    """Log unexpected failures and answer with a generic 500."""
    logger.exception(
        "unhandled_exception",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        trace_id=get_current_trace_id(),
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
        headers=CORS_HEADERS,
    )
