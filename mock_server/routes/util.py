"""Utility endpoints useful for exercising clients: echo and delayed responses."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request

router = APIRouter()

MAX_DELAY_SECONDS = 10
_ECHO_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


async def _read_body(request: Request):
    raw = await request.body()
    if not raw:
        return {}
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            return json.loads(raw)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid JSON in request body")
    if "application/x-www-form-urlencoded" in content_type:
        return dict(await request.form())
    return raw.decode(errors="ignore")


def clamp_delay(raw: str) -> int:
    """Parse a delay in whole seconds, defaulting to 1 and clamping to [0, 10]."""
    try:
        seconds = int(raw)
    except ValueError:
        seconds = 1
    return min(max(seconds, 0), MAX_DELAY_SECONDS)


@router.api_route("/echo", methods=_ECHO_METHODS)
async def echo(request: Request):
    """Echo back the request as JSON."""
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return {
        "method": request.method,
        "url": url,
        "headers": dict(request.headers),
        "body": await _read_body(request),
        "query": dict(request.query_params),
        "params": dict(request.path_params),
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
    }


@router.get("/delay/{seconds}")
async def delay(seconds: str):
    """Sleep for up to 10 seconds before responding."""
    wait = clamp_delay(seconds)
    await asyncio.sleep(wait)
    return {
        "success": True,
        "message": f"Response delayed by {wait} seconds",
        "delay": wait,
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
    }
