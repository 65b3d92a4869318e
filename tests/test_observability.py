import logging

import httpx
import pytest
import respx
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.credentials import PrivateToken, TenantCredentials
from gitlab_mcp.core.errors import GitLabApiError, GitLabNetworkError
from gitlab_mcp.core.logging import LogfmtFormatter, logfmt_value, setup_logging
from gitlab_mcp.core.observability import log_event
from gitlab_mcp.transports.http.request_id_middleware import RequestIdMiddleware
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

API = "https://gitlab.example.com/api/v4"
OBS_LOGGER = "gitlab_mcp.observability"


def _gitlab(request_id="rid-1") -> GitLabClient:
    return GitLabClient(
        TenantCredentials(auth=PrivateToken("glpat-secret"), base_url=API),
        request_id=request_id,
    )


def _app(handler):
    return Starlette(
        routes=[Route("/mcp", handler, methods=["POST"])],
        middleware=[Middleware(RequestIdMiddleware)],
    )


def test_request_id_logged_success(caplog):
    async def handler(request):
        return JSONResponse({"ok": True})

    app = _app(handler)
    with (
        TestClient(app) as client,
        caplog.at_level(logging.INFO, logger=OBS_LOGGER),
    ):
        resp = client.post("/mcp", json={"hello": "world"})

    assert resp.status_code == 200
    record = next(r for r in caplog.records if r.getMessage() == "http_request")
    assert record.request_id == resp.headers["X-Request-Id"]
    assert record.status == 200
    assert record.path == "/mcp"
    assert record.duration_ms >= 0


def test_inbound_request_id_echoed(caplog):
    async def handler(request):
        return JSONResponse({"rid": request.state.request_id})

    app = _app(handler)
    with TestClient(app) as client:
        resp = client.post("/mcp", json={}, headers={"X-Correlation-Id": "corr-9"})

    assert resp.json() == {"rid": "corr-9"}
    assert resp.headers["X-Request-Id"] == "corr-9"


def test_request_id_logged_on_exception(caplog):
    async def handler(request):
        raise ValueError("boom")

    app = _app(handler)
    with (
        TestClient(app, raise_server_exceptions=False) as client,
        caplog.at_level(logging.INFO, logger=OBS_LOGGER),
    ):
        resp = client.post("/mcp", json={})

    assert resp.status_code == 500
    record = next(r for r in caplog.records if r.getMessage() == "http_request")
    assert record.status == "exception"
    assert record.request_id


@pytest.mark.asyncio
async def test_op_call_logged_success(caplog):
    caplog.set_level(logging.INFO, logger=OBS_LOGGER)
    async with respx.mock:
        respx.get(f"{API}/projects/5").mock(
            return_value=httpx.Response(200, json={"id": 5})
        )
        await _gitlab().get_project(5)

    record = next(r for r in caplog.records if r.getMessage() == "op_call")
    assert record.request_id == "rid-1"
    assert record.tool == "get_project"
    assert record.method == "GET"
    assert record.endpoint == "/projects/5"
    assert record.status == 200
    assert record.error_type is None


@pytest.mark.asyncio
async def test_op_call_logged_on_http_error(caplog):
    caplog.set_level(logging.INFO, logger=OBS_LOGGER)
    async with respx.mock:
        respx.get(f"{API}/projects/5").mock(
            return_value=httpx.Response(502, json={"message": "bad gateway"})
        )
        with pytest.raises(GitLabApiError):
            await _gitlab().get_project(5)

    record = next(r for r in caplog.records if r.getMessage() == "op_call")
    assert record.status == 502


@pytest.mark.asyncio
async def test_op_call_logged_on_network_error(caplog):
    caplog.set_level(logging.INFO, logger=OBS_LOGGER)
    async with respx.mock:
        respx.get(f"{API}/projects/5").mock(side_effect=httpx.ConnectTimeout("slow"))
        with pytest.raises(GitLabNetworkError):
            await _gitlab().get_project(5)

    record = next(r for r in caplog.records if r.getMessage() == "op_call")
    assert record.status == "network_error"
    assert record.error_type == "ConnectTimeout"


@pytest.mark.asyncio
async def test_token_never_logged(caplog):
    caplog.set_level(logging.DEBUG)
    async with respx.mock:
        respx.get(f"{API}/user").mock(
            return_value=httpx.Response(200, json={"id": 1, "username": "root"})
        )
        await _gitlab().get_current_user()

    formatter = LogfmtFormatter()
    for record in caplog.records:
        assert "glpat-secret" not in formatter.format(record)
        assert "glpat-secret" not in record.getMessage()


def test_logfmt_formatter_quotes_and_skips_missing(caplog):
    caplog.set_level(logging.INFO, logger=OBS_LOGGER)
    log_event("op_call", tool="list_projects", endpoint="/projects", status=200, message="x")

    record = next(r for r in caplog.records if r.getMessage() == "op_call")
    line = LogfmtFormatter().format(record)
    assert line.startswith("level=info logger=gitlab_mcp.observability event=op_call")
    assert "tool=list_projects" in line
    assert "status=200" in line
    assert "request_id" not in line


def test_logfmt_value_quotes_spaces_and_empty():
    assert logfmt_value(12) == "12"
    assert logfmt_value("plain") == "plain"
    assert logfmt_value("two words") == '"two words"'
    assert logfmt_value("") == '""'
    assert logfmt_value('say "hi"') == '"say \\"hi\\""'


def test_setup_logging_reads_level_from_env(monkeypatch):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    monkeypatch.setenv("GITLAB_MCP_LOG_LEVEL", "debug")
    try:
        setup_logging()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, LogfmtFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
