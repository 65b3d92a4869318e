"""Per-call tenant context carried in ContextVars, plus the client factory."""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from .client import GitLabClient
from .config import load_env_config
from .credentials import (
    MISSING_CREDENTIALS_MESSAGE,
    TenantCredentials,
    credentials_from_headers,
    resolve_credentials,
)
from .errors import AuthenticationError

_credentials_var: ContextVar[Optional[TenantCredentials]] = ContextVar(
    "gitlab_credentials", default=None
)
_request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
_user_agent_var: ContextVar[Optional[str]] = ContextVar("user_agent", default=None)

REQUEST_ID_HEADER = "x-request-id"
USER_AGENT_HEADER = "user-agent"


@dataclass(frozen=True)
class RequestContext:
    credentials: Optional[TenantCredentials]
    request_id: str
    user_agent: Optional[str] = None


def ensure_request_id(candidate: Optional[str] = None) -> str:
    return candidate or uuid.uuid4().hex


def seed_from_env(*, use_dotenv: bool = False) -> RequestContext:
    """Single-tenant seed for stdio; raises AuthenticationError without a token."""
    private_token, access_token, base_url = load_env_config(use_dotenv=use_dotenv)
    credentials = resolve_credentials(
        private_token=private_token, access_token=access_token, base_url=base_url
    )
    return RequestContext(credentials=credentials, request_id=ensure_request_id())


def seed_from_headers(headers: Mapping[str, str]) -> RequestContext:
    """
    Extract the tenant from inbound headers. Never falls back to the process
    environment; credentials stay None when no token header is present so the
    adapter can answer 401 itself.
    """
    try:
        credentials: Optional[TenantCredentials] = credentials_from_headers(headers)
    except AuthenticationError:
        credentials = None
    lowered = {k.lower(): v for k, v in headers.items()}
    return RequestContext(
        credentials=credentials,
        request_id=ensure_request_id(lowered.get(REQUEST_ID_HEADER)),
        user_agent=lowered.get(USER_AGENT_HEADER),
    )


def apply_request_context(
    credentials: Optional[TenantCredentials],
    request_id: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> List[Token]:
    """Set ContextVars for the duration of a request; returns tokens for reset()."""
    return [
        _credentials_var.set(credentials),
        _request_id_var.set(ensure_request_id(request_id)),
        _user_agent_var.set(user_agent),
    ]


def reset_context(tokens: Iterable[Token]) -> None:
    for token in tokens:
        token.var.reset(token)


def get_context(*, require_credentials: bool = True) -> RequestContext:
    credentials = _credentials_var.get()
    if require_credentials and credentials is None:
        raise AuthenticationError(MISSING_CREDENTIALS_MESSAGE)
    return RequestContext(
        credentials=credentials,
        request_id=ensure_request_id(_request_id_var.get()),
        user_agent=_user_agent_var.get(),
    )


def client_from_context() -> GitLabClient:
    """Fresh client bound to the current call's tenant."""
    ctx = get_context(require_credentials=True)
    return GitLabClient(ctx.credentials, request_id=ctx.request_id)


__all__ = [
    "RequestContext",
    "seed_from_env",
    "seed_from_headers",
    "get_context",
    "apply_request_context",
    "reset_context",
    "ensure_request_id",
    "client_from_context",
    "REQUEST_ID_HEADER",
    "USER_AGENT_HEADER",
]
