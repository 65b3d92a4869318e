from __future__ import annotations

from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from gitlab_mcp.transports.http.config import ERROR_PAYLOAD_TOO_LARGE, HttpConfig
from gitlab_mcp.transports.http.responses import (
    current_request_id,
    is_mcp_post,
    json_error,
)


def declared_length(request: Request) -> Optional[int]:
    raw = request.headers.get("content-length", "").strip()
    return int(raw) if raw.isdigit() else None


class MaxBodyMiddleware(BaseHTTPMiddleware):
    """
    Refuse MCP POSTs whose Content-Length is over the configured size.
    Chunked bodies without a length pass through; FastMCP reads them itself.
    """

    def __init__(self, app, cfg: HttpConfig):
        super().__init__(app)
        self.max_bytes = cfg.max_body_bytes
        self.mcp_path = cfg.path

    async def dispatch(self, request: Request, call_next: Callable):
        if self.max_bytes and is_mcp_post(request, self.mcp_path):
            length = declared_length(request)
            if length is not None and length > self.max_bytes:
                return json_error(
                    413,
                    ERROR_PAYLOAD_TOO_LARGE,
                    f"Body of {length} bytes exceeds the {self.max_bytes} byte limit",
                    current_request_id(request),
                )
        return await call_next(request)


__all__ = ["MaxBodyMiddleware", "declared_length"]
