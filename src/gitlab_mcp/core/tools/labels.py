from __future__ import annotations

from typing import Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import LabelCreateInput, LabelUpdateInput, SearchFilters
from gitlab_mcp.core.tools._common import page_args, require


async def gitlab_list_labels(
    client: GitLabClient,
    project_id: int | str,
    *,
    search: Optional[str] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    filters = SearchFilters(search=search, **page_args(page, per_page))
    return fmt.format_labels(await client.list_labels(project_id, filters))


async def gitlab_get_label(
    client: GitLabClient, project_id: int | str, label_id: int | str
) -> str:
    """Get a label by numeric ID or by name."""
    return fmt.format_label(await client.get_label(project_id, label_id))


async def gitlab_create_label(
    client: GitLabClient,
    project_id: int | str,
    name: str,
    color: str,
    *,
    description: Optional[str] = None,
    priority: Optional[int] = None,
) -> str:
    """Create a label. `color` is a #RRGGBB hex value or a CSS color name."""
    data = LabelCreateInput(
        name=require(name, "name"),
        color=require(color, "color"),
        description=description,
        priority=priority,
    )
    label = await client.create_label(project_id, data)
    return f"Label created successfully:\n\n{fmt.format_label(label)}"


async def gitlab_update_label(
    client: GitLabClient,
    project_id: int | str,
    label_id: int | str,
    *,
    new_name: Optional[str] = None,
    color: Optional[str] = None,
    description: Optional[str] = None,
    priority: Optional[int] = None,
) -> str:
    data = LabelUpdateInput(
        new_name=new_name, color=color, description=description, priority=priority
    )
    if not data.to_body():
        raise ValueError("Provide at least one of new_name, color, description, priority.")
    label = await client.update_label(project_id, label_id, data)
    return f"Label updated successfully:\n\n{fmt.format_label(label)}"


async def gitlab_delete_label(
    client: GitLabClient, project_id: int | str, label_id: int | str
) -> str:
    await client.delete_label(project_id, label_id)
    return f"Label '{label_id}' deleted successfully."
