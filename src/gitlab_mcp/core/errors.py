from __future__ import annotations

from typing import Any, Dict, Optional

DEFAULT_RETRY_AFTER_SECONDS = 60


class GitLabClientError(Exception):
    """Base error for client failures."""

    retryable: bool = False


class AuthenticationError(GitLabClientError):
    """Upstream rejected the credentials (401/403) or none were usable."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RateLimitError(GitLabClientError):
    retryable = True

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after_seconds: int = DEFAULT_RETRY_AFTER_SECONDS,
    ):
        super().__init__(f"{message}; retry after {retry_after_seconds}s")
        self.message = message
        self.retry_after_seconds = retry_after_seconds


class GitLabApiError(GitLabClientError):
    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        method: str = "",
        url: str = "",
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        self.status_code = status_code
        self.message = message
        self.method = method
        self.url = url
        self.response_json = response_json
        self.response_text = response_text
        self.retryable = 500 <= status_code <= 599

        text = f"{status_code} {method} {url}: {message}" if method else message
        if self.retryable:
            text += " (retryable)"
        super().__init__(text)


class GitLabNetworkError(GitLabApiError):
    """Transport-level failure (DNS, refused connection, timeout); status 0."""

    def __init__(self, *, message: str, method: str = "", url: str = ""):
        super().__init__(status_code=0, message=message, method=method, url=url)
        self.retryable = True


class GitLabParseError(GitLabClientError):
    pass


def parse_retry_after(raw: Optional[str]) -> int:
    """Seconds from a Retry-After header; falls back to the default."""
    if raw is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    try:
        value = int(raw.strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER_SECONDS
    return value if value >= 0 else DEFAULT_RETRY_AFTER_SECONDS


def extract_error_message(body: Any, status_code: int) -> str:
    """Best-effort message from a GitLab error body (`message` or `error`)."""
    fallback = f"API error: {status_code}"
    if not isinstance(body, dict):
        return fallback
    for key in ("message", "error"):
        value = body.get(key)
        if value:
            return value if isinstance(value, str) else str(value)
    return fallback


__all__ = [
    "DEFAULT_RETRY_AFTER_SECONDS",
    "GitLabClientError",
    "AuthenticationError",
    "RateLimitError",
    "GitLabApiError",
    "GitLabNetworkError",
    "GitLabParseError",
    "parse_retry_after",
    "extract_error_message",
]
