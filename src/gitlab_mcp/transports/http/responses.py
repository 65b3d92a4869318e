from __future__ import annotations

import json
from typing import Any, Dict, Optional

from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-Id"


def current_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "") or ""


def json_error(
    status_code: int,
    error: str,
    message: str,
    request_id: str = "",
    **extra: Any,
) -> Response:
    """Uniform JSON body for every answer the shell gives without reaching FastMCP."""
    body: Dict[str, Any] = {"error": error, "message": message, **extra}
    body["request_id"] = request_id
    headers: Optional[Dict[str, str]] = (
        {REQUEST_ID_HEADER: request_id} if request_id else None
    )
    return Response(
        json.dumps(body),
        status_code=status_code,
        media_type="application/json",
        headers=headers,
    )


def is_mcp_post(request: Request, mcp_path: str) -> bool:
    return request.method.upper() == "POST" and request.url.path == mcp_path


__all__ = ["REQUEST_ID_HEADER", "current_request_id", "json_error", "is_mcp_post"]
