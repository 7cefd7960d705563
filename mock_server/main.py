"""FastAPI application for the AI mock server — REST endpoints and SSE streaming."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from mock_server.config.settings import get_settings
from mock_server.errors import register_exception_handlers
from mock_server.routes import ai_mock_router, health_router, util_router

settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version=settings.app_version)

# CORS: ALLOWED_ORIGINS is a comma-separated list, "*" by default
_origins = settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials="*" not in _origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(util_router, prefix="/api/util", tags=["util"])
app.include_router(ai_mock_router, prefix="/api/ai-mock", tags=["ai-mock"])


@app.get("/")
async def root():
    """Service info and endpoint map."""
    return {
        "message": "AI Mock Server is running!",
        "name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        "port": settings.port,
        "endpoints": {
            "health": "/health",
            "util": "/api/util",
            "aiMock": "/api/ai-mock",
        },
    }


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    logger.info(f"AI Mock Server is running on port {settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
