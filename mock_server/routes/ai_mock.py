"""AI mock endpoints: dataset catalog and the simulated rl_train / rl_test SSE streams."""

from __future__ import annotations

import random
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from mock_server.config.settings import Settings, get_settings
from mock_server.models.params import TestingParams, TrainingParams
from mock_server.streaming import TestingSession, TrainingSession

router = APIRouter()

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

_DATASETS = [{"id": 1, "name": "Dataset 1"}]


def get_rng() -> random.Random:
    """Random source for synthetic metrics; overridden in tests with a seeded one."""
    return random.Random()


@router.get("/datasets")
async def list_datasets():
    return {"success": True, "message": "Datasets", "data": _DATASETS}


@router.get("/rl_train")
async def rl_train(
    params: Annotated[TrainingParams, Query()],
    settings: Annotated[Settings, Depends(get_settings)],
    rng: Annotated[random.Random, Depends(get_rng)],
):
    """SSE endpoint — streams 10 synthetic training steps, then an end event."""
    session = TrainingSession(params, interval=settings.tick_interval_seconds, rng=rng)
    return StreamingResponse(session.events(), media_type="text/event-stream", headers=SSE_HEADERS)


@router.get("/rl_test")
async def rl_test(
    params: Annotated[TestingParams, Query()],
    settings: Annotated[Settings, Depends(get_settings)],
    rng: Annotated[random.Random, Depends(get_rng)],
):
    """SSE endpoint — streams 5 mock test results, then an end event."""
    session = TestingSession(
        params,
        interval=settings.tick_interval_seconds,
        rng=rng,
        artifacts_root=settings.mock_image_url_prefix,
    )
    return StreamingResponse(session.events(), media_type="text/event-stream", headers=SSE_HEADERS)
