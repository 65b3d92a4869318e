from __future__ import annotations

import time
import uuid
from typing import Mapping

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from gitlab_mcp.core.observability import log_event
from gitlab_mcp.transports.http.responses import REQUEST_ID_HEADER

CORRELATION_ID_HEADER = "X-Correlation-Id"
DURATION_HEADER = "X-Request-Duration-Ms"


def pick_request_id(headers: Mapping[str, str]) -> str:
    """Caller-supplied id (request id first, then correlation id) or a new one."""
    for name in (REQUEST_ID_HEADER, CORRELATION_ID_HEADER):
        candidate = (headers.get(name) or "").strip()
        if candidate:
            return candidate
    return uuid.uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Outermost layer. Every later layer (early 401/413/timeout answers
    included) and every GitLab call sees the same request_id, and each
    request ends with exactly one `http_request` event.
    """

    async def dispatch(self, request: Request, call_next):
        rid = pick_request_id(request.headers)
        request.state.request_id = rid

        started = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            if response is not None:
                response.headers.setdefault(REQUEST_ID_HEADER, rid)
                response.headers.setdefault(DURATION_HEADER, str(elapsed_ms))
            log_event(
                "http_request",
                request_id=rid,
                method=request.method.upper(),
                path=request.url.path,
                status="exception" if response is None else response.status_code,
                duration_ms=elapsed_ms,
            )


__all__ = [
    "RequestIdMiddleware",
    "REQUEST_ID_HEADER",
    "CORRELATION_ID_HEADER",
    "pick_request_id",
]
