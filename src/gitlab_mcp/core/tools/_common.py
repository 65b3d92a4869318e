"""
Shared argument handling for tool modules.
"""

from typing import Any, Dict, Optional

from gitlab_mcp.core.config import ToolSettings
from gitlab_mcp.core.pagination import normalize_pagination


def page_args(page: Optional[int], per_page: Optional[int]) -> Dict[str, Any]:
    """
    Apply the configured page-size policy and return filter-model kwargs.
    Raises ValueError for page < 1.
    """
    settings = ToolSettings.from_env()
    page, per_page = normalize_pagination(
        page,
        per_page,
        default_per_page=settings.default_page_size,
        max_per_page=settings.max_page_size,
    )
    return {"page": page, "per_page": per_page}


def require(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"{field} is required.")
    return value
