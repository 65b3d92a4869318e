"""Per-call tenant credentials and outbound auth headers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Union

from .errors import AuthenticationError

DEFAULT_API_BASE_URL = "https://gitlab.com/api/v4"

PRIVATE_TOKEN_HEADER = "X-GitLab-Token"
ACCESS_TOKEN_HEADER = "X-GitLab-Access-Token"
BASE_URL_HEADER = "X-GitLab-Base-URL"

MISSING_CREDENTIALS_MESSAGE = (
    "No credentials provided. Include X-GitLab-Token or X-GitLab-Access-Token header."
)


@dataclass(frozen=True)
class PrivateToken:
    token: str

    def __repr__(self) -> str:
        return "PrivateToken(token='***')"


@dataclass(frozen=True)
class BearerToken:
    token: str

    def __repr__(self) -> str:
        return "BearerToken(token='***')"


AuthMode = Union[PrivateToken, BearerToken]


@dataclass(frozen=True)
class TenantCredentials:
    auth: AuthMode
    base_url: str = DEFAULT_API_BASE_URL


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_credentials(
    *,
    private_token: Optional[str] = None,
    access_token: Optional[str] = None,
    base_url: Optional[str] = None,
) -> TenantCredentials:
    """
    Pick exactly one auth mode. The OAuth bearer token wins when both are given.
    Raises AuthenticationError when neither token is present.
    """
    private_token = _clean(private_token)
    access_token = _clean(access_token)

    auth: AuthMode
    if access_token:
        auth = BearerToken(access_token)
    elif private_token:
        auth = PrivateToken(private_token)
    else:
        raise AuthenticationError(MISSING_CREDENTIALS_MESSAGE)

    base = (_clean(base_url) or DEFAULT_API_BASE_URL).rstrip("/")
    return TenantCredentials(auth=auth, base_url=base)


def credentials_from_headers(headers: Mapping[str, str]) -> TenantCredentials:
    """Resolve credentials from inbound request headers (case-insensitive)."""
    lowered = {k.lower(): v for k, v in headers.items()}
    return resolve_credentials(
        private_token=lowered.get(PRIVATE_TOKEN_HEADER.lower()),
        access_token=lowered.get(ACCESS_TOKEN_HEADER.lower()),
        base_url=lowered.get(BASE_URL_HEADER.lower()),
    )


def auth_headers(auth: Optional[AuthMode]) -> Dict[str, str]:
    if isinstance(auth, BearerToken) and auth.token:
        return {"Authorization": f"Bearer {auth.token}"}
    if isinstance(auth, PrivateToken) and auth.token:
        return {"PRIVATE-TOKEN": auth.token}
    raise AuthenticationError(MISSING_CREDENTIALS_MESSAGE)


__all__ = [
    "DEFAULT_API_BASE_URL",
    "PRIVATE_TOKEN_HEADER",
    "ACCESS_TOKEN_HEADER",
    "BASE_URL_HEADER",
    "MISSING_CREDENTIALS_MESSAGE",
    "PrivateToken",
    "BearerToken",
    "AuthMode",
    "TenantCredentials",
    "resolve_credentials",
    "credentials_from_headers",
    "auth_headers",
]
