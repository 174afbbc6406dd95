"""Global exception handlers producing ``{"error": message}`` bodies."""

from __future__ import annotations

import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sociomap.errors import SocioMapError

logger = logging.getLogger("sociomap.errors")


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON instead of Starlette's plain-text 404/405 bodies."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON or wrongly-typed fields -> 400 with the first problem."""
    errors = exc.errors()
    message = "Invalid request body"
    if errors:
        first = errors[0]
        where = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = first.get("msg", "")
        message = f"{message}: {where}: {detail}" if where else f"{message}: {detail}"
    return JSONResponse(status_code=400, content={"error": message})


async def sociomap_error_handler(request: Request, exc: SocioMapError) -> JSONResponse:
    """Application errors carry their own status code and message."""
    if exc.status_code >= 500:
        logger.warning(
            "%s on %s %s: %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Catch-all for unhandled exceptions.

    Logs the full traceback server-side and returns a generic 500 with no
    internal details.
    """
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        "".join(traceback.format_exception(exc)),
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
