from __future__ import annotations

from typing import Literal, Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import (
    GroupCreateInput,
    GroupListFilters,
    GroupProjectListFilters,
    GroupUpdateInput,
    Visibility,
)
from gitlab_mcp.core.tools._common import page_args, require


async def gitlab_list_groups(
    client: GitLabClient,
    *,
    search: Optional[str] = None,
    owned: Optional[bool] = None,
    visibility: Optional[Visibility] = None,
    order_by: Optional[Literal["name", "path", "id"]] = None,
    sort: Optional[Literal["asc", "desc"]] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    filters = GroupListFilters(
        search=search,
        owned=owned,
        visibility=visibility,
        order_by=order_by,
        sort=sort,
        **page_args(page, per_page),
    )
    return fmt.format_groups(await client.list_groups(filters))


async def gitlab_get_group(client: GitLabClient, group_id: int | str) -> str:
    """Get a group by numeric ID or full path (e.g. `parent/child`)."""
    return fmt.format_group(await client.get_group(group_id))


async def gitlab_create_group(
    client: GitLabClient,
    name: str,
    path: str,
    *,
    description: Optional[str] = None,
    visibility: Optional[Visibility] = None,
    parent_id: Optional[int] = None,
) -> str:
    """Create a group, or a subgroup when `parent_id` is given."""
    data = GroupCreateInput(
        name=require(name, "name"),
        path=require(path, "path"),
        description=description,
        visibility=visibility,
        parent_id=parent_id,
    )
    group = await client.create_group(data)
    return f"Group created successfully:\n\n{fmt.format_group(group)}"


async def gitlab_update_group(
    client: GitLabClient,
    group_id: int | str,
    *,
    name: Optional[str] = None,
    path: Optional[str] = None,
    description: Optional[str] = None,
    visibility: Optional[Visibility] = None,
) -> str:
    data = GroupUpdateInput(
        name=name, path=path, description=description, visibility=visibility
    )
    group = await client.update_group(group_id, data)
    return f"Group updated successfully:\n\n{fmt.format_group(group)}"


async def gitlab_delete_group(client: GitLabClient, group_id: int | str) -> str:
    await client.delete_group(group_id)
    return f"Group {group_id} deleted successfully."


async def gitlab_list_group_projects(
    client: GitLabClient,
    group_id: int | str,
    *,
    search: Optional[str] = None,
    archived: Optional[bool] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    filters = GroupProjectListFilters(
        search=search, archived=archived, **page_args(page, per_page)
    )
    projects = await client.list_group_projects(group_id, filters)
    return fmt.format_projects(projects, title=f"Projects in group {group_id}")
