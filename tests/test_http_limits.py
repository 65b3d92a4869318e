import json

import anyio
import httpx
import pytest
from gitlab_mcp.transports.http import HttpConfig, build_http_app
from gitlab_mcp.transports.http.config import ERROR_PAYLOAD_TOO_LARGE, ERROR_TIMEOUT
from gitlab_mcp.transports.http.middleware import ContextMiddleware

INIT_PAYLOAD = {
    "jsonrpc": "2.0",
    "id": "1",
    "method": "initialize",
    "params": {
        "protocolVersion": "2025-06-18",
        "capabilities": {},
        "clientInfo": {"name": "test-client", "version": "0.0.0"},
    },
}


def _client(app, headers=None):
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(
        transport=transport, base_url="http://testserver", headers=headers or {}
    )


def _headers(body: str | None = None):
    headers = {
        "accept": "application/json, text/event-stream",
        "content-type": "application/json",
        "X-GitLab-Token": "glpat-dummy",
        "X-Request-Id": "limits-1",
    }
    if body is not None:
        headers["content-length"] = str(len(body.encode()))
    return headers


@pytest.mark.asyncio
async def test_content_length_over_limit_returns_413():
    body = json.dumps(INIT_PAYLOAD)
    cfg = HttpConfig(max_body_bytes=len(body.encode()) - 1)
    app = build_http_app(cfg)

    async with app.router.lifespan_context(app):
        async with _client(app, _headers(body)) as client:
            resp = await client.post(cfg.path, content=body)

    assert resp.status_code == 413
    payload = resp.json()
    assert payload["error"] == ERROR_PAYLOAD_TOO_LARGE
    assert payload["request_id"] == "limits-1"
    assert resp.headers["X-Request-Id"] == "limits-1"


@pytest.mark.asyncio
async def test_at_limit_passes():
    body = json.dumps(INIT_PAYLOAD)
    cfg = HttpConfig(max_body_bytes=len(body.encode()))
    app = build_http_app(cfg)

    async with app.router.lifespan_context(app):
        async with _client(app, _headers(body)) as client:
            resp = await client.post(cfg.path, content=body)

    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_timeout_returns_configured_status(monkeypatch):
    original = ContextMiddleware.dispatch

    async def slow_dispatch(self, request, call_next):
        await anyio.sleep(0.05)
        return await original(self, request, call_next)

    monkeypatch.setattr(ContextMiddleware, "dispatch", slow_dispatch)

    cfg = HttpConfig(request_timeout_s=0.01, timeout_status=408)
    app = build_http_app(cfg)

    async with app.router.lifespan_context(app):
        async with _client(app, _headers()) as client:
            resp = await client.post(cfg.path, json=INIT_PAYLOAD)

    assert resp.status_code == 408
    payload = resp.json()
    assert payload["error"] == ERROR_TIMEOUT
    assert payload["request_id"] == "limits-1"


@pytest.mark.asyncio
async def test_ops_endpoints_skip_limits():
    cfg = HttpConfig(max_body_bytes=1, request_timeout_s=0.01)
    app = build_http_app(cfg)

    async with _client(app) as client:
        resp = await client.get("/health")

    assert resp.status_code == 200


def test_zero_disables_limits(monkeypatch):
    monkeypatch.setenv("MCP_MAX_BODY_BYTES", "0")
    monkeypatch.setenv("MCP_REQUEST_TIMEOUT_S", "0")
    cfg = HttpConfig.from_env()
    assert cfg.max_body_bytes == 0
    assert cfg.request_timeout_s == 0


def test_negative_limit_rejected():
    with pytest.raises(ValueError):
        HttpConfig(max_body_bytes=-1)
