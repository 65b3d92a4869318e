from __future__ import annotations

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from gitlab_mcp.core.context import (
    apply_request_context,
    reset_context,
    seed_from_headers,
)
from gitlab_mcp.core.credentials import (
    ACCESS_TOKEN_HEADER,
    MISSING_CREDENTIALS_MESSAGE,
    PRIVATE_TOKEN_HEADER,
)
from gitlab_mcp.transports.http.config import ERROR_MISSING_CREDENTIALS
from gitlab_mcp.transports.http.responses import (
    REQUEST_ID_HEADER,
    current_request_id,
    json_error,
)


class ContextMiddleware(BaseHTTPMiddleware):
    """
    Resolve the tenant from request headers and bind it to ContextVars for the
    duration of the request. Credentials never come from the process
    environment here; a request without a token header is answered with 401
    before FastMCP sees it.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        ctx = seed_from_headers(request.headers)
        request_id = current_request_id(request) or ctx.request_id

        if ctx.credentials is None:
            return json_error(
                401,
                ERROR_MISSING_CREDENTIALS,
                MISSING_CREDENTIALS_MESSAGE,
                request_id,
                required_headers=[PRIVATE_TOKEN_HEADER, ACCESS_TOKEN_HEADER],
            )

        tokens = apply_request_context(
            ctx.credentials, request_id=request_id, user_agent=ctx.user_agent
        )
        try:
            response: Response = await call_next(request)
            response.headers.setdefault(REQUEST_ID_HEADER, request_id)
            return response
        finally:
            reset_context(tokens)


__all__ = ["ContextMiddleware"]
