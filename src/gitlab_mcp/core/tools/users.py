from __future__ import annotations

from typing import Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import UserListFilters
from gitlab_mcp.core.tools._common import page_args


async def gitlab_test_connection(client: GitLabClient) -> str:
    """Check that the supplied credentials reach the GitLab API."""
    result = await client.test_connection()
    if result.connected:
        return f"Connection successful! {result.message}"
    return f"Connection failed: {result.message}"


async def gitlab_get_current_user(client: GitLabClient) -> str:
    """Get the user the current token belongs to."""
    return fmt.format_user(await client.get_current_user())


async def gitlab_list_users(
    client: GitLabClient,
    *,
    search: Optional[str] = None,
    username: Optional[str] = None,
    active: Optional[bool] = None,
    blocked: Optional[bool] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    """
    List users visible to the caller.
    `search` matches name, username and public email.
    """
    filters = UserListFilters(
        search=search,
        username=username,
        active=active,
        blocked=blocked,
        **page_args(page, per_page),
    )
    return fmt.format_users(await client.list_users(filters))


async def gitlab_get_user(client: GitLabClient, user_id: int) -> str:
    """Get a user by numeric ID."""
    return fmt.format_user(await client.get_user(user_id))
