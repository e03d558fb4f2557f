"""Tests for the development relay — upstream stubbed with httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from sitegate.infrastructure.relay.app import create_relay_app, rewrite_urls

TARGET = "http://tiles.upstream:8080"
PUBLIC = "http://localhost:8082"


def _upstream(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/styles/basic/style.json":
        return httpx.Response(200, json={
            "sources": {"osm": {"url": f"{TARGET}/data/osm.json"}},
            "sprite": f"{TARGET}/styles/basic/sprite",
        })
    if request.url.path == "/tiles/1/2/3.png":
        return httpx.Response(200, content=b"\x89PNG...", headers={"content-type": "image/png"})
    if request.url.path == "/users/me":
        return httpx.Response(200, json={
            "auth": request.headers.get("authorization"),
            "query": dict(request.url.params),
        })
    if request.url.path == "/buildsite/createComment":
        return httpx.Response(201, json={"echo": json.loads(request.content)})
    return httpx.Response(404, json={"detail": "missing"})


def _failing_upstream(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("no route to host", request=request)


def _client(**kwargs) -> AsyncClient:
    options = {"transport": httpx.MockTransport(_upstream)}
    options.update(kwargs)
    app = create_relay_app(TARGET, PUBLIC, **options)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://relay")


def test_rewrite_urls_replaces_all_occurrences():
    body = f'{{"a": "{TARGET}/x", "b": "{TARGET}/"}}'
    assert rewrite_urls(body, TARGET + "/", PUBLIC) == f'{{"a": "{PUBLIC}/x", "b": "{PUBLIC}/"}}'


@pytest.mark.asyncio
async def test_health():
    async with _client() as client:
        resp = await client.get("/health")
    data = resp.json()
    assert data["status"] == "ok"
    assert data["proxy"] == PUBLIC
    assert data["target"] == TARGET


@pytest.mark.asyncio
async def test_json_urls_are_rewritten():
    async with _client() as client:
        resp = await client.get("/styles/basic/style.json")
    assert resp.status_code == 200
    data = resp.json()
    assert data["sources"]["osm"]["url"] == f"{PUBLIC}/data/osm.json"
    assert data["sprite"] == f"{PUBLIC}/styles/basic/sprite"


@pytest.mark.asyncio
async def test_rewrite_can_be_disabled():
    async with _client(rewrite_json_urls=False) as client:
        resp = await client.get("/styles/basic/style.json")
    assert resp.json()["sprite"] == f"{TARGET}/styles/basic/sprite"


@pytest.mark.asyncio
async def test_binary_responses_pass_through():
    async with _client() as client:
        resp = await client.get("/tiles/1/2/3.png")
    assert resp.status_code == 200
    assert resp.content == b"\x89PNG..."
    assert resp.headers["content-type"] == "image/png"


@pytest.mark.asyncio
async def test_prefix_is_stripped_and_headers_forwarded():
    async with _client(mount_prefix="/api") as client:
        resp = await client.get(
            "/api/users/me?page=2",
            headers={"Authorization": "Bearer tok"},
        )
    data = resp.json()
    assert data["auth"] == "Bearer tok"
    assert data["query"] == {"page": "2"}


@pytest.mark.asyncio
async def test_paths_outside_prefix_are_not_forwarded():
    async with _client(mount_prefix="/api") as client:
        resp = await client.get("/users/me")
    assert resp.status_code == 404
    assert "auth" not in resp.json()


@pytest.mark.asyncio
async def test_request_body_and_status_forwarded():
    async with _client(mount_prefix="/api") as client:
        resp = await client.post("/api/buildsite/createComment", json={"type": 1})
    assert resp.status_code == 201
    assert resp.json() == {"echo": {"type": 1}}


@pytest.mark.asyncio
async def test_upstream_failure_is_reported_as_proxy_error():
    async with _client(transport=httpx.MockTransport(_failing_upstream)) as client:
        resp = await client.get("/styles/basic/style.json")
    assert resp.status_code == 500
    data = resp.json()
    assert data["error"] == "Proxy error"
    assert "no route to host" in data["details"]


@pytest.mark.asyncio
async def test_cors_headers_added():
    async with _client() as client:
        resp = await client.get(
            "/styles/basic/style.json",
            headers={"Origin": "http://localhost:19006"},
        )
    assert "access-control-allow-origin" in resp.headers


@pytest.mark.asyncio
async def test_proxy_status_available():
    async with _client(probe_path="/styles/basic/style.json") as client:
        resp = await client.get("/proxy-status")
    assert resp.json() == {"proxy": "running", "target": "available", "statusCode": 200}


@pytest.mark.asyncio
async def test_proxy_status_unavailable():
    async with _client(transport=httpx.MockTransport(_failing_upstream)) as client:
        resp = await client.get("/proxy-status")
    data = resp.json()
    assert data["proxy"] == "running"
    assert data["target"] == "unavailable"


@pytest.mark.asyncio
@pytest.mark.parametrize("path, verify", [("/proxy-status", False), ("/tiles/1/2/3.png", False), ("/proxy-status", True)])
async def test_tls_verification_setting_reaches_upstream_client(monkeypatch, path, verify):
    seen: list = []

    class RecordingClient(httpx.AsyncClient):
        def __init__(self, *args, **kwargs):
            seen.append(kwargs.get("verify"))
            super().__init__(*args, **kwargs)

    client = _client(verify=verify)
    monkeypatch.setattr(httpx, "AsyncClient", RecordingClient)
    async with client:
        resp = await client.get(path)

    assert resp.status_code == 200
    assert seen == [verify]
