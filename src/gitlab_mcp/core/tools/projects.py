from __future__ import annotations

from typing import Literal, Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import (
    MemberAddInput,
    MemberUpdateInput,
    ProjectCreateInput,
    ProjectListFilters,
    ProjectUpdateInput,
    SearchFilters,
    Visibility,
)
from gitlab_mcp.core.tools._common import page_args, require


async def gitlab_list_projects(
    client: GitLabClient,
    *,
    search: Optional[str] = None,
    membership: Optional[bool] = None,
    owned: Optional[bool] = None,
    visibility: Optional[Visibility] = None,
    archived: Optional[bool] = None,
    order_by: Optional[str] = None,
    sort: Optional[Literal["asc", "desc"]] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    """List projects accessible to the caller, optionally filtered."""
    filters = ProjectListFilters(
        search=search,
        membership=membership,
        owned=owned,
        visibility=visibility,
        archived=archived,
        order_by=order_by,
        sort=sort,
        **page_args(page, per_page),
    )
    return fmt.format_projects(await client.list_projects(filters))


async def gitlab_get_project(client: GitLabClient, project_id: int | str) -> str:
    """Get a project by numeric ID or `namespace/path`."""
    return fmt.format_project(await client.get_project(project_id))


async def gitlab_create_project(
    client: GitLabClient,
    name: str,
    *,
    path: Optional[str] = None,
    namespace_id: Optional[int] = None,
    description: Optional[str] = None,
    visibility: Optional[Visibility] = None,
    initialize_with_readme: Optional[bool] = None,
    default_branch: Optional[str] = None,
) -> str:
    """Create a new project."""
    data = ProjectCreateInput(
        name=require(name, "name"),
        path=path,
        namespace_id=namespace_id,
        description=description,
        visibility=visibility,
        initialize_with_readme=initialize_with_readme,
        default_branch=default_branch,
    )
    project = await client.create_project(data)
    return f"Project created successfully:\n\n{fmt.format_project(project)}"


async def gitlab_update_project(
    client: GitLabClient,
    project_id: int | str,
    *,
    name: Optional[str] = None,
    path: Optional[str] = None,
    description: Optional[str] = None,
    visibility: Optional[Visibility] = None,
    default_branch: Optional[str] = None,
    archived: Optional[bool] = None,
) -> str:
    """Update project settings; omitted fields are left unchanged."""
    data = ProjectUpdateInput(
        name=name,
        path=path,
        description=description,
        visibility=visibility,
        default_branch=default_branch,
        archived=archived,
    )
    project = await client.update_project(project_id, data)
    return f"Project updated successfully:\n\n{fmt.format_project(project)}"


async def gitlab_delete_project(client: GitLabClient, project_id: int | str) -> str:
    """Delete a project. GitLab may schedule the removal rather than apply it at once."""
    await client.delete_project(project_id)
    return f"Project {project_id} deleted successfully."


async def gitlab_fork_project(
    client: GitLabClient, project_id: int | str, *, namespace: Optional[str] = None
) -> str:
    """Fork a project into the caller's namespace or `namespace`."""
    project = await client.fork_project(project_id, namespace)
    return f"Project forked successfully:\n\n{fmt.format_project(project)}"


async def gitlab_star_project(client: GitLabClient, project_id: int | str) -> str:
    project = await client.star_project(project_id)
    return f"Project starred successfully:\n\n{fmt.format_project(project)}"


async def gitlab_unstar_project(client: GitLabClient, project_id: int | str) -> str:
    project = await client.unstar_project(project_id)
    return f"Project unstarred successfully:\n\n{fmt.format_project(project)}"


# --- Members ---


async def gitlab_list_project_members(
    client: GitLabClient,
    project_id: int | str,
    *,
    search: Optional[str] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    """List direct members of a project with their access levels."""
    filters = SearchFilters(search=search, **page_args(page, per_page))
    return fmt.format_members(await client.list_project_members(project_id, filters))


async def gitlab_add_project_member(
    client: GitLabClient,
    project_id: int | str,
    user_id: int,
    access_level: int,
    *,
    expires_at: Optional[str] = None,
) -> str:
    """
    Add a user to a project.
    access_level: 10 Guest, 20 Reporter, 30 Developer, 40 Maintainer, 50 Owner.
    expires_at: YYYY-MM-DD.
    """
    data = MemberAddInput(
        user_id=user_id, access_level=access_level, expires_at=expires_at
    )
    member = await client.add_project_member(project_id, data)
    return f"Member added successfully:\n\n{fmt.format_member(member)}"


async def gitlab_update_project_member(
    client: GitLabClient,
    project_id: int | str,
    user_id: int,
    access_level: int,
    *,
    expires_at: Optional[str] = None,
) -> str:
    """Change a member's access level or expiry."""
    data = MemberUpdateInput(access_level=access_level, expires_at=expires_at)
    member = await client.update_project_member(project_id, user_id, data)
    return f"Member updated successfully:\n\n{fmt.format_member(member)}"


async def gitlab_remove_project_member(
    client: GitLabClient, project_id: int | str, user_id: int
) -> str:
    await client.remove_project_member(project_id, user_id)
    return f"Member {user_id} removed from project {project_id} successfully."
