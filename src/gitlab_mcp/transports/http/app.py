from __future__ import annotations

import logging
from typing import List, Sequence

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings
from starlette.applications import Starlette
from starlette.responses import JSONResponse

from gitlab_mcp.core.context import client_from_context
from gitlab_mcp.core.registry import register_discovered_tools
from gitlab_mcp.transports.http.config import HttpConfig
from gitlab_mcp.transports.http.max_body_middleware import MaxBodyMiddleware
from gitlab_mcp.transports.http.middleware import ContextMiddleware
from gitlab_mcp.transports.http.ops import (
    HEALTH_PATH,
    INFO_PATH,
    SERVER_NAME,
    build_health_status,
    build_server_info,
    is_ops_path,
)
from gitlab_mcp.transports.http.request_id_middleware import RequestIdMiddleware
from gitlab_mcp.transports.http.timeout_middleware import TimeoutMiddleware

log = logging.getLogger(__name__)


def _new_fastmcp(cfg: HttpConfig) -> FastMCP:
    allowed_hosts = [cfg.host, f"{cfg.host}:*", "testserver"]
    for h in ("localhost", "localhost:*", "127.0.0.1", "127.0.0.1:*"):
        if h not in allowed_hosts:
            allowed_hosts.append(h)

    transport_security = TransportSecuritySettings(
        enable_dns_rebinding_protection=True,
        allowed_hosts=allowed_hosts,
        allowed_origins=[],
    )

    return FastMCP(
        SERVER_NAME,
        json_response=cfg.json_response,
        stateless_http=cfg.stateless_http,
        streamable_http_path=cfg.path,
        host=cfg.host,
        port=cfg.port,
        transport_security=transport_security,
    )


def _register(fastmcp: FastMCP) -> List[str]:
    # Every tool call gets a client bound to the tenant in the ContextVars.
    names = register_discovered_tools(fastmcp, client_from_context)
    log.info("Registered %d tools", len(names))
    return names


def build_fastmcp(cfg: HttpConfig | None = None) -> FastMCP:
    """Create and configure a FastMCP instance with registered tools."""
    cfg = cfg or HttpConfig.from_env()
    fastmcp = _new_fastmcp(cfg)
    _register(fastmcp)

    log.info(
        "Built FastMCP (json_response=%s, stateless_http=%s, path=%s, host=%s, port=%s)",  # noqa: E501
        cfg.json_response,
        cfg.stateless_http,
        cfg.path,
        cfg.host,
        cfg.port,
    )
    return fastmcp


def _build_ops_app(cfg: HttpConfig, tool_names: Sequence[str]) -> Starlette:
    info = build_server_info(cfg.path, tool_names)

    async def health(_request):
        return JSONResponse(
            build_health_status(), headers={"Cache-Control": "no-store"}
        )

    async def server_info(_request):
        return JSONResponse(info)

    ops_app = Starlette()
    ops_app.add_route(HEALTH_PATH, health, methods=["GET"])
    ops_app.add_route(INFO_PATH, server_info, methods=["GET"])
    return ops_app


class OpsDispatcher:
    """
    ASGI wrapper that routes ops endpoints to a minimal unauthenticated app and
    everything else to the MCP app. Exposes router/state so lifespan_context
    can be driven from tests.
    """

    def __init__(self, ops_app, main_app):
        self.ops_app = ops_app
        self.main_app = main_app
        self.router = main_app.router
        self.state = main_app.state

    async def __call__(self, scope, receive, send):
        if scope.get("type") == "http" and is_ops_path(scope.get("path", "")):
            await self.ops_app(scope, receive, send)
            return
        await self.main_app(scope, receive, send)


def build_http_app(cfg: HttpConfig | None = None):
    """Return an ASGI app that serves ops endpoints beside the FastMCP app."""
    cfg = cfg or HttpConfig.from_env()
    fastmcp = _new_fastmcp(cfg)
    tool_names = _register(fastmcp)
    main_app = fastmcp.streamable_http_app()
    # Starlette inserts at the front; execution order:
    # RequestId -> Timeout -> Context -> MaxBody -> app
    main_app.add_middleware(MaxBodyMiddleware, cfg=cfg)
    main_app.add_middleware(ContextMiddleware)
    main_app.add_middleware(TimeoutMiddleware, cfg=cfg)
    main_app.add_middleware(RequestIdMiddleware)
    main_app.state.tool_names = tool_names

    ops_app = _build_ops_app(cfg, tool_names)
    return OpsDispatcher(ops_app, main_app)


__all__ = ["HttpConfig", "OpsDispatcher", "build_http_app", "build_fastmcp"]
