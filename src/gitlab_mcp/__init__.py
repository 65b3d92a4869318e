"""gitlab_mcp package exports."""

from .core.client import GitLabClient
from .core.credentials import BearerToken, PrivateToken, TenantCredentials
from .core.errors import (
    AuthenticationError,
    GitLabApiError,
    GitLabClientError,
    GitLabNetworkError,
    GitLabParseError,
    RateLimitError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "GitLabClient",
    "TenantCredentials",
    "PrivateToken",
    "BearerToken",
    "GitLabClientError",
    "AuthenticationError",
    "RateLimitError",
    "GitLabApiError",
    "GitLabNetworkError",
    "GitLabParseError",
]
