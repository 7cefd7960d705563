"""Tests for FastAPI endpoints — SSE streams, validation, health, util, CORS, 404."""

import json
import random

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from mock_server.config.settings import Settings, get_settings
from mock_server.errors import register_exception_handlers
from mock_server.main import app
from mock_server.routes.ai_mock import get_rng
from mock_server.routes.util import clamp_delay

TRAIN_QUERY = {"algorithm_name": "ppo", "validation_config": "cfg.yaml", "modal": "vision"}
TEST_QUERY = {**TRAIN_QUERY, "model_path": "/models/ppo.pt", "env_id": "Classification"}


@pytest.fixture
def fast_streams():
    """Shrink the tick interval and seed the random source."""
    app.dependency_overrides[get_settings] = lambda: Settings(tick_interval_seconds=0.001)
    app.dependency_overrides[get_rng] = lambda: random.Random(42)
    yield
    app.dependency_overrides.clear()


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


def _frames(body: str) -> list[str]:
    return [chunk for chunk in body.split("\n\n") if chunk]


class TestTrainingStream:
    @pytest.mark.asyncio
    async def test_streams_started_progress_and_end(self, fast_streams):
        """GET /rl_train returns text/event-stream with 12 frames in order."""
        async with _client() as client:
            resp = await client.get("/api/ai-mock/rl_train", params=TRAIN_QUERY)

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/event-stream")
        assert resp.headers["cache-control"] == "no-cache"
        frames = _frames(resp.text)
        assert len(frames) == 12
        assert json.loads(frames[0][len("data: "):])["message"] == "Training started"
        assert frames[1].startswith("data: global_step=1, ")
        assert frames[10].startswith("data: global_step=10, ")
        assert frames[-1] == "event: end\ndata: Stream finished"

    @pytest.mark.asyncio
    async def test_missing_algorithm_name_is_rejected(self, fast_streams):
        """Missing algorithm_name gives a 400 error body and no stream."""
        query = {k: v for k, v in TRAIN_QUERY.items() if k != "algorithm_name"}
        async with _client() as client:
            resp = await client.get("/api/ai-mock/rl_train", params=query)

        assert resp.status_code == 400
        body = resp.json()
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert any(d.startswith("algorithm_name:") for d in body["details"])
        assert "data:" not in resp.text

    @pytest.mark.asyncio
    async def test_empty_parameter_is_rejected(self, fast_streams):
        """Blank values count as missing."""
        async with _client() as client:
            resp = await client.get("/api/ai-mock/rl_train", params={**TRAIN_QUERY, "modal": "  "})
        assert resp.status_code == 400
        assert any(d.startswith("modal:") for d in resp.json()["details"])

    @pytest.mark.asyncio
    async def test_cors_header_on_stream(self, fast_streams):
        """Cross-origin callers get an allow-origin header."""
        async with _client() as client:
            resp = await client.get(
                "/api/ai-mock/rl_train",
                params=TRAIN_QUERY,
                headers={"Origin": "http://localhost:3000"},
            )
        assert resp.headers.get("access-control-allow-origin") == "*"


class TestTestingStream:
    @pytest.mark.asyncio
    async def test_streams_five_results(self, fast_streams):
        """GET /rl_test echoes parameters, sends 5 results, then end."""
        async with _client() as client:
            resp = await client.get("/api/ai-mock/rl_test", params=TEST_QUERY)

        frames = _frames(resp.text)
        assert len(frames) == 7
        started = json.loads(frames[0][len("data: "):])
        assert started["env_id"] == "Classification"
        assert started["model_path"] == "/models/ppo.pt"
        first = json.loads(frames[1][len("data: "):])
        assert first["image"] == "/mock_image/Classification/result.png"
        assert frames[-1] == "event: end\ndata: Stream finished"

    @pytest.mark.asyncio
    async def test_multi_artifact_env(self, fast_streams):
        async with _client() as client:
            resp = await client.get("/api/ai-mock/rl_test", params={**TEST_QUERY, "env_id": "SomethingElse"})
        result = json.loads(_frames(resp.text)[1][len("data: "):])
        assert len(result["image"]) == 2
        assert len(result["vis_files"]) == 2

    @pytest.mark.asyncio
    async def test_requires_test_only_fields(self, fast_streams):
        """model_path and env_id are required on /rl_test."""
        async with _client() as client:
            resp = await client.get("/api/ai-mock/rl_test", params=TRAIN_QUERY)
        assert resp.status_code == 400
        fields = {d.split(":")[0] for d in resp.json()["details"]}
        assert fields == {"model_path", "env_id"}


class TestRoutes:
    @pytest.mark.asyncio
    async def test_root_lists_endpoints(self):
        async with _client() as client:
            resp = await client.get("/")
        body = resp.json()
        assert body["message"] == "AI Mock Server is running!"
        assert body["endpoints"]["aiMock"] == "/api/ai-mock"

    @pytest.mark.asyncio
    async def test_health_check_endpoints(self):
        """Health probes return their fixed status strings."""
        async with _client() as client:
            health = await client.get("/health")
            ready = await client.get("/health/ready")
            live = await client.get("/health/live")
            detailed = await client.get("/health/detailed")
        assert health.status_code == 200
        assert health.json()["status"] == "healthy"
        assert ready.json()["status"] == "ready"
        assert live.json()["status"] == "alive"
        assert detailed.json()["uptime"]["formatted"].endswith("s")

    @pytest.mark.asyncio
    async def test_datasets_catalog(self):
        async with _client() as client:
            resp = await client.get("/api/ai-mock/datasets")
        assert resp.json() == {"success": True, "message": "Datasets", "data": [{"id": 1, "name": "Dataset 1"}]}

    @pytest.mark.asyncio
    async def test_echo_reflects_query_and_body(self):
        async with _client() as client:
            resp = await client.post("/api/util/echo?x=1", json={"hello": "world"})
        body = resp.json()
        assert body["method"] == "POST"
        assert body["query"] == {"x": "1"}
        assert body["body"] == {"hello": "world"}

    @pytest.mark.asyncio
    async def test_echo_rejects_malformed_json(self):
        async with _client() as client:
            resp = await client.post(
                "/api/util/echo",
                content=b"{not json",
                headers={"Content-Type": "application/json"},
            )
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Invalid JSON in request body"}

    @pytest.mark.asyncio
    async def test_delay_zero_responds_immediately(self):
        async with _client() as client:
            resp = await client.get("/api/util/delay/-5")
        assert resp.json()["delay"] == 0

    def test_delay_is_clamped(self):
        assert clamp_delay("3") == 3
        assert clamp_delay("99") == 10
        assert clamp_delay("-1") == 0
        assert clamp_delay("soon") == 1

    @pytest.mark.asyncio
    async def test_unknown_route_returns_json_404(self):
        async with _client() as client:
            resp = await client.get("/api/nope")
        assert resp.status_code == 404
        assert resp.json() == {
            "success": False,
            "error": "Route not found",
            "message": "Cannot GET /api/nope",
        }

    @pytest.mark.asyncio
    async def test_unhandled_error_returns_json_500(self):
        """Uncaught exceptions become a JSON 500 body."""
        broken = FastAPI()
        register_exception_handlers(broken)

        @broken.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        transport = ASGITransport(app=broken, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/boom")
        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["error"] == "kaboom"
