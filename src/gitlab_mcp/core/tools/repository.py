from __future__ import annotations

from typing import Literal, Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import (
    BranchCreateInput,
    SearchFilters,
    TagCreateInput,
    TagListFilters,
    TreeListFilters,
)
from gitlab_mcp.core.tools._common import page_args, require


# --- Branches ---


async def gitlab_list_branches(
    client: GitLabClient,
    project_id: int | str,
    *,
    search: Optional[str] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    """List repository branches; `search` filters by name."""
    filters = SearchFilters(search=search, **page_args(page, per_page))
    return fmt.format_branches(await client.list_branches(project_id, filters))


async def gitlab_get_branch(client: GitLabClient, project_id: int | str, branch: str) -> str:
    return fmt.format_branch(
        await client.get_branch(project_id, require(branch, "branch"))
    )


async def gitlab_create_branch(
    client: GitLabClient, project_id: int | str, branch: str, ref: str
) -> str:
    """Create `branch` from `ref` (branch name, tag or commit SHA)."""
    data = BranchCreateInput(branch=require(branch, "branch"), ref=require(ref, "ref"))
    created = await client.create_branch(project_id, data)
    return f"Branch created successfully:\n\n{fmt.format_branch(created)}"


async def gitlab_delete_branch(
    client: GitLabClient, project_id: int | str, branch: str
) -> str:
    await client.delete_branch(project_id, require(branch, "branch"))
    return f"Branch '{branch}' deleted successfully."


async def gitlab_delete_merged_branches(
    client: GitLabClient, project_id: int | str
) -> str:
    """Delete every branch already merged into the default branch (protected ones are kept)."""
    await client.delete_merged_branches(project_id)
    return f"Merged branches of project {project_id} scheduled for deletion."


# --- Tags ---


async def gitlab_list_tags(
    client: GitLabClient,
    project_id: int | str,
    *,
    search: Optional[str] = None,
    order_by: Optional[Literal["name", "updated", "version"]] = None,
    sort: Optional[Literal["asc", "desc"]] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    filters = TagListFilters(
        search=search, order_by=order_by, sort=sort, **page_args(page, per_page)
    )
    return fmt.format_tags(await client.list_tags(project_id, filters))


async def gitlab_get_tag(client: GitLabClient, project_id: int | str, tag_name: str) -> str:
    return fmt.format_tag(await client.get_tag(project_id, require(tag_name, "tag_name")))


async def gitlab_create_tag(
    client: GitLabClient,
    project_id: int | str,
    tag_name: str,
    ref: str,
    *,
    message: Optional[str] = None,
) -> str:
    """Create a tag; a `message` makes it an annotated tag."""
    data = TagCreateInput(
        tag_name=require(tag_name, "tag_name"), ref=require(ref, "ref"), message=message
    )
    tag = await client.create_tag(project_id, data)
    return f"Tag created successfully:\n\n{fmt.format_tag(tag)}"


async def gitlab_delete_tag(client: GitLabClient, project_id: int | str, tag_name: str) -> str:
    await client.delete_tag(project_id, require(tag_name, "tag_name"))
    return f"Tag '{tag_name}' deleted successfully."


# --- Tree / compare ---


async def gitlab_get_repository_tree(
    client: GitLabClient,
    project_id: int | str,
    *,
    path: Optional[str] = None,
    ref: Optional[str] = None,
    recursive: Optional[bool] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    """List files and directories under `path` at `ref` (default branch when omitted)."""
    filters = TreeListFilters(
        path=path, ref=ref, recursive=recursive, **page_args(page, per_page)
    )
    return fmt.format_tree(await client.get_repository_tree(project_id, filters))


async def gitlab_compare_refs(
    client: GitLabClient, project_id: int | str, from_ref: str, to_ref: str
) -> str:
    """Compare two branches, tags or commits (`from_ref...to_ref`)."""
    compare = await client.compare_refs(
        project_id, require(from_ref, "from_ref"), require(to_ref, "to_ref")
    )
    return fmt.format_compare(compare, from_ref, to_ref)
