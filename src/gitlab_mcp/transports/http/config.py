from __future__ import annotations

import os
from dataclasses import dataclass

TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}
ALLOWED_TIMEOUT_STATUSES = (408, 503, 504)

# Error codes in the JSON bodies the shell answers with
ERROR_MISSING_CREDENTIALS = "missing_credentials"
ERROR_PAYLOAD_TOO_LARGE = "payload_too_large"
ERROR_TIMEOUT = "timeout"


def _env_flag(name: str, default: bool) -> bool:
    val = (os.getenv(name) or "").strip().lower()
    if val in TRUE_VALUES:
        return True
    if val in FALSE_VALUES:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw.replace("_", "")) if raw else default


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    return float(raw) if raw else default


@dataclass(frozen=True)
class HttpConfig:
    """
    Streamable HTTP shell settings.
    FASTMCP_* variables shape the MCP endpoint, MCP_* variables the guards.
    Zero for max_body_bytes or request_timeout_s disables that guard.
    """

    host: str = "127.0.0.1"
    port: int = 8000
    path: str = "/mcp"
    json_response: bool = True
    stateless_http: bool = True
    max_body_bytes: int = 1_000_000
    request_timeout_s: float = 30.0
    timeout_status: int = 504

    def __post_init__(self) -> None:
        if self.timeout_status not in ALLOWED_TIMEOUT_STATUSES:
            raise ValueError(
                f"timeout_status must be one of {ALLOWED_TIMEOUT_STATUSES}, "
                f"got {self.timeout_status}"
            )
        if self.max_body_bytes < 0 or self.request_timeout_s < 0:
            raise ValueError("max_body_bytes and request_timeout_s cannot be negative")

    @classmethod
    def from_env(cls) -> "HttpConfig":
        return cls(
            host=os.getenv("FASTMCP_HOST", cls.host),
            port=_env_int("FASTMCP_PORT", cls.port),
            path=os.getenv("FASTMCP_STREAMABLE_HTTP_PATH", cls.path),
            json_response=_env_flag("FASTMCP_JSON_RESPONSE", cls.json_response),
            stateless_http=_env_flag("FASTMCP_STATELESS_HTTP", cls.stateless_http),
            max_body_bytes=_env_int("MCP_MAX_BODY_BYTES", cls.max_body_bytes),
            request_timeout_s=_env_float("MCP_REQUEST_TIMEOUT_S", cls.request_timeout_s),
            timeout_status=_env_int("MCP_TIMEOUT_STATUS", cls.timeout_status),
        )


__all__ = [
    "HttpConfig",
    "ALLOWED_TIMEOUT_STATUSES",
    "ERROR_MISSING_CREDENTIALS",
    "ERROR_PAYLOAD_TOO_LARGE",
    "ERROR_TIMEOUT",
]
