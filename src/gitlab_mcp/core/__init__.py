"""Core domain surface for gitlab-mcp (transport-agnostic)."""

from .client import GitLabClient, build_query
from .config import ToolSettings, load_env_config
from .context import (
    RequestContext,
    apply_request_context,
    client_from_context,
    ensure_request_id,
    get_context,
    reset_context,
    seed_from_env,
    seed_from_headers,
)
from .credentials import (
    BearerToken,
    PrivateToken,
    TenantCredentials,
    auth_headers,
    credentials_from_headers,
    resolve_credentials,
)
from .errors import (
    AuthenticationError,
    GitLabApiError,
    GitLabClientError,
    GitLabNetworkError,
    GitLabParseError,
    RateLimitError,
)
from .pagination import (
    PAGINATION_DEFAULTS,
    PaginatedResult,
    normalize_pagination,
    parse_pagination_headers,
)
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)

__all__ = [
    # Client
    "GitLabClient",
    "build_query",
    # Exceptions
    "GitLabClientError",
    "AuthenticationError",
    "RateLimitError",
    "GitLabApiError",
    "GitLabNetworkError",
    "GitLabParseError",
    # Credentials
    "TenantCredentials",
    "PrivateToken",
    "BearerToken",
    "resolve_credentials",
    "credentials_from_headers",
    "auth_headers",
    # Pagination
    "PAGINATION_DEFAULTS",
    "PaginatedResult",
    "normalize_pagination",
    "parse_pagination_headers",
    # Config helpers
    "ToolSettings",
    "load_env_config",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
    # Context
    "RequestContext",
    "seed_from_env",
    "seed_from_headers",
    "get_context",
    "apply_request_context",
    "reset_context",
    "ensure_request_id",
    "client_from_context",
]
