import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient

import controller.controller_dependencies as deps
from controller.video_controller import tick_rate_limiter
from core.seedance_client import SeedanceClient
from main import app
from repository.gallery_repository import GalleryRepository
from service.tick_service import TickService
from util.errors import ConfigError

STORE_URL = "https://script.example.test/exec"
ARK_URL = "https://ark.example.test/api/v3"


async def _no_limit():
    return None


@pytest.fixture()
def client():
    app.dependency_overrides[tick_rate_limiter] = _no_limit
    yield TestClient(app)
    app.dependency_overrides.clear()


def _wire(tick_config, handler):
    """Real clients over a mock transport; returns the list of sent requests."""
    seen = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(record))
    service = TickService(
        tick_config,
        GalleryRepository(http, base_url=STORE_URL),
        SeedanceClient(http, api_key="test-key", base_url=ARK_URL),
    )
    app.dependency_overrides[deps.get_tick_service] = lambda: service
    return seen


def test_tick_end_to_end_success(client, tick_config):
    gallery = {
        "items": [
            {
                "id": "p1",
                "videoStatus": "processing",
                "videoTaskId": "t1",
                "sessionFolderId": "folder-1",
            },
            {"id": "q1", "videoStatus": "queued", "videoResolution": "720p"},
        ]
    }

    def handler(request):
        if request.url.host == "script.example.test":
            if request.method == "GET":
                return httpx.Response(200, json=gallery)
            return httpx.Response(200, json={"ok": True, "fileId": "f1"})
        if request.method == "GET":
            return httpx.Response(
                200, json={"status": "succeeded", "content": {"video_url": "http://x"}}
            )
        return httpx.Response(200, json={"id": "cgt-new"})

    seen = _wire(tick_config, handler)

    res = client.get("/api/video/tick")

    assert res.status_code == 200
    assert res.json() == {
        "ok": True,
        "report": {"processed": 1, "started": 1, "errors": []},
    }
    store_posts = [
        json.loads(r.content)
        for r in seen
        if r.url.host == "script.example.test" and r.method == "POST"
    ]
    assert [(p["action"], p.get("status")) for p in store_posts] == [
        ("updateVideoStatus", "ready_url"),
        ("finalizeVideoUpload", None),
        ("updateVideoStatus", "processing"),
    ]
    assert store_posts[0]["providerUrl"] == "http://x"
    assert store_posts[2]["taskId"] == "cgt-new"


def test_tick_snapshot_500_returns_error_and_makes_no_other_calls(client, tick_config):
    seen = _wire(tick_config, lambda r: httpx.Response(500, text="oops"))

    res = client.get("/api/video/tick")

    assert res.status_code == 502
    body = res.json()
    assert body["ok"] is False
    assert body["error"] == "snapshot_failed"
    assert len(seen) == 1


def test_tick_reports_partial_failures_with_200(client, tick_config):
    gallery = {"items": [{"id": "p1", "videoStatus": "processing", "videoTaskId": "t1"}]}

    def handler(request):
        if request.url.host == "script.example.test":
            if request.method == "GET":
                return httpx.Response(200, json=gallery)
            payload = json.loads(request.content)
            if payload["action"] == "finalizeVideoUpload":
                return httpx.Response(200, json={"ok": False, "error": "Drive quota"})
            return httpx.Response(200, json={"ok": True})
        return httpx.Response(200, json={"data": {"status": "success", "video_url": "http://v"}})

    _wire(tick_config, handler)

    res = client.get("/api/video/tick")

    assert res.status_code == 200
    assert res.json()["report"] == {
        "processed": 1,
        "started": 0,
        "errors": ["Upload Failed: Drive quota"],
    }


def test_tick_missing_config_fails_before_any_call(client, monkeypatch):
    def missing():
        raise ConfigError(["ARK_API_KEY"])

    monkeypatch.setattr(deps, "get_tick_config", missing)

    res = client.get("/api/video/tick")

    assert res.status_code == 500
    assert res.json() == {"ok": False, "error": "config_missing", "message": "Config missing"}


def test_tick_unexpected_exception_is_internal_error(client, tick_config):
    class Exploding:
        async def run_within_budget(self):
            raise RuntimeError("kaboom")

    app.dependency_overrides[deps.get_tick_service] = lambda: Exploding()

    res = client.get("/api/video/tick")

    assert res.status_code == 500
    assert res.json()["error"] == "internal_error"
    assert res.json()["message"] == "kaboom"


def test_tick_timeout_maps_to_504(client):
    class Slow:
        async def run_within_budget(self):
            raise asyncio.TimeoutError()

    app.dependency_overrides[deps.get_tick_service] = lambda: Slow()

    res = client.get("/api/video/tick")

    assert res.status_code == 504
    assert res.json()["error"] == "tick_timeout"


def test_tick_rejects_post(client):
    assert client.post("/api/video/tick").status_code == 405


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": True}
