"""Health, readiness and liveness probes."""

from __future__ import annotations

import os
import platform
import resource
import sys
import time
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends

from mock_server.config.settings import Settings, get_settings

router = APIRouter()

_STARTED_AT = time.monotonic()


def _now() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def uptime_seconds() -> float:
    return time.monotonic() - _STARTED_AT


def format_uptime(uptime: float) -> str:
    """Format seconds as ``"<d>d <h>h <m>m <s>s"``."""
    total = int(uptime)
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{days}d {hours}h {minutes}m {seconds}s"


def _max_rss_mb() -> int:
    rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is bytes on macOS, kilobytes elsewhere
    if sys.platform == "darwin":
        return round(rss / 1024 / 1024)
    return round(rss / 1024)


@router.get("")
async def health():
    """Basic health check."""
    return {"status": "healthy", "uptime": uptime_seconds(), "timestamp": _now()}


@router.get("/detailed")
async def health_detailed(settings: Annotated[Settings, Depends(get_settings)]):
    uptime = uptime_seconds()
    return {
        "status": "healthy",
        "timestamp": _now(),
        "uptime": {"seconds": uptime, "formatted": format_uptime(uptime)},
        "memory": {"max_rss": f"{_max_rss_mb()} MB"},
        "process": {
            "pid": os.getpid(),
            "version": platform.python_version(),
            "platform": sys.platform,
            "arch": platform.machine(),
        },
        "environment": settings.environment,
    }


@router.get("/ready")
async def ready():
    return {"status": "ready", "timestamp": _now()}


@router.get("/live")
async def live():
    return {"status": "alive", "timestamp": _now()}
