from __future__ import annotations

from typing import Callable

import anyio
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from gitlab_mcp.transports.http.config import ERROR_TIMEOUT, HttpConfig
from gitlab_mcp.transports.http.responses import (
    current_request_id,
    is_mcp_post,
    json_error,
)


class TimeoutMiddleware(BaseHTTPMiddleware):
    """
    Cap the wall time of an MCP POST, GitLab round trips included.
    A limit of 0 turns the guard off.
    """

    def __init__(self, app, cfg: HttpConfig):
        super().__init__(app)
        self.limit_s = cfg.request_timeout_s
        self.status_code = cfg.timeout_status
        self.mcp_path = cfg.path

    async def dispatch(self, request: Request, call_next: Callable):
        if self.limit_s == 0 or not is_mcp_post(request, self.mcp_path):
            return await call_next(request)

        try:
            with anyio.fail_after(self.limit_s):
                return await call_next(request)
        except TimeoutError:
            return json_error(
                self.status_code,
                ERROR_TIMEOUT,
                f"Request exceeded {self.limit_s:g}s",
                current_request_id(request),
            )


__all__ = ["TimeoutMiddleware"]
