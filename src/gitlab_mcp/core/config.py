from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

from .formatters import DEFAULT_CHARACTER_LIMIT
from .pagination import DEFAULT_PER_PAGE, MAX_PER_PAGE


def _env_str(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_env_config(
    *, use_dotenv: bool = True
) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """Private token, access token and base URL from the environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    return (
        _env_str("GITLAB_TOKEN"),
        _env_str("GITLAB_ACCESS_TOKEN"),
        _env_str("GITLAB_BASE_URL"),
    )


@dataclass(frozen=True)
class ToolSettings:
    default_page_size: int = DEFAULT_PER_PAGE
    max_page_size: int = MAX_PER_PAGE
    character_limit: int = DEFAULT_CHARACTER_LIMIT

    @classmethod
    def from_env(cls) -> "ToolSettings":
        return cls(
            default_page_size=_env_int("GITLAB_MCP_DEFAULT_PAGE_SIZE", DEFAULT_PER_PAGE),
            max_page_size=_env_int("GITLAB_MCP_MAX_PAGE_SIZE", MAX_PER_PAGE),
            character_limit=_env_int(
                "GITLAB_MCP_CHARACTER_LIMIT", DEFAULT_CHARACTER_LIMIT
            ),
        )


__all__ = ["load_env_config", "ToolSettings"]
