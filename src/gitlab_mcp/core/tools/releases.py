from __future__ import annotations

from typing import Any, Dict, List, Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import (
    PaginationParams,
    ReleaseAssetsInput,
    ReleaseCreateInput,
    ReleaseLinkInput,
    ReleaseUpdateInput,
)
from gitlab_mcp.core.tools._common import page_args, require


async def gitlab_list_releases(
    client: GitLabClient,
    project_id: int | str,
    *,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    releases = await client.list_releases(
        project_id, PaginationParams(**page_args(page, per_page))
    )
    return fmt.format_releases(releases)


async def gitlab_get_release(client: GitLabClient, project_id: int | str, tag_name: str) -> str:
    return fmt.format_release(
        await client.get_release(project_id, require(tag_name, "tag_name"))
    )


async def gitlab_create_release(
    client: GitLabClient,
    project_id: int | str,
    tag_name: str,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    ref: Optional[str] = None,
    milestones: Optional[List[str]] = None,
    released_at: Optional[str] = None,
    links: Optional[List[Dict[str, Any]]] = None,
) -> str:
    """
    Create a release for `tag_name`.
    `ref` is required only when the tag does not exist yet.
    `links` entries: {"name": ..., "url": ..., "link_type": "other"|"runbook"|"image"|"package"}.
    """
    assets = None
    if links:
        assets = ReleaseAssetsInput(
            links=[ReleaseLinkInput.model_validate(link) for link in links]
        )
    data = ReleaseCreateInput(
        tag_name=require(tag_name, "tag_name"),
        name=name,
        description=description,
        ref=ref,
        milestones=milestones,
        released_at=released_at,
        assets=assets,
    )
    release = await client.create_release(project_id, data)
    return f"Release created successfully:\n\n{fmt.format_release(release)}"


async def gitlab_update_release(
    client: GitLabClient,
    project_id: int | str,
    tag_name: str,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    milestones: Optional[List[str]] = None,
    released_at: Optional[str] = None,
) -> str:
    data = ReleaseUpdateInput(
        name=name, description=description, milestones=milestones, released_at=released_at
    )
    release = await client.update_release(project_id, require(tag_name, "tag_name"), data)
    return f"Release updated successfully:\n\n{fmt.format_release(release)}"


async def gitlab_delete_release(
    client: GitLabClient, project_id: int | str, tag_name: str
) -> str:
    """Delete a release; the underlying tag is kept."""
    await client.delete_release(project_id, require(tag_name, "tag_name"))
    return f"Release '{tag_name}' deleted successfully."
