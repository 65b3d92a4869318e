from __future__ import annotations

from typing import Dict, List, Sequence

from gitlab_mcp import __version__
from gitlab_mcp.core.credentials import (
    ACCESS_TOKEN_HEADER,
    BASE_URL_HEADER,
    PRIVATE_TOKEN_HEADER,
)

SERVER_NAME = "gitlab-mcp"
HEALTH_PATH = "/health"
INFO_PATH = "/"
OPS_PATHS = {HEALTH_PATH, INFO_PATH}


def is_ops_path(path: str | None) -> bool:
    return bool(path) and path in OPS_PATHS


def build_health_status() -> Dict[str, str]:
    return {"status": "ok", "server": SERVER_NAME}


def build_server_info(mcp_path: str, tool_names: Sequence[str]) -> Dict[str, object]:
    tools: List[str] = sorted(tool_names)
    return {
        "name": SERVER_NAME,
        "version": __version__,
        "description": "MCP server exposing the GitLab REST API as tools",
        "endpoints": {
            "health": HEALTH_PATH,
            "info": INFO_PATH,
            "mcp": mcp_path,
        },
        "authentication": {
            "required": f"{PRIVATE_TOKEN_HEADER} or {ACCESS_TOKEN_HEADER}",
            "optional": [BASE_URL_HEADER],
        },
        "tool_count": len(tools),
        "tools": tools,
    }


__all__ = [
    "is_ops_path",
    "build_health_status",
    "build_server_info",
    "OPS_PATHS",
    "SERVER_NAME",
]
