"""JSON error responses shared by every route."""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mock_server.config.settings import get_settings

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"query", "path", "body", "header", "cookie"}


def format_validation_errors(exc: RequestValidationError) -> list[str]:
    """One ``"<field>: <message>"`` string per failed field."""
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in _LOCATION_PREFIXES]
        field = ".".join(loc) or "request"
        details.append(f"{field}: {err.get('msg', 'invalid value')}")
    return details


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = format_validation_errors(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, "; ".join(details))
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Validation failed", "details": details},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown routes and unsupported methods both read as a missing route
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "error": "Route not found",
                "message": f"Cannot {request.method} {request.url.path}",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    content = {"success": False, "error": str(exc) or "Internal server error"}
    if get_settings().is_development:
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
