from __future__ import annotations

from typing import Literal, Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import (
    PaginationParams,
    VariableCreateInput,
    VariableUpdateInput,
)
from gitlab_mcp.core.tools._common import page_args, require

VariableType = Literal["env_var", "file"]


async def gitlab_list_project_variables(
    client: GitLabClient,
    project_id: int | str,
    *,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    """List CI/CD variables of a project. Masked values are never printed."""
    variables = await client.list_project_variables(
        project_id, PaginationParams(**page_args(page, per_page))
    )
    return fmt.format_variables(variables)


async def gitlab_get_project_variable(
    client: GitLabClient, project_id: int | str, key: str
) -> str:
    return fmt.format_variable(
        await client.get_project_variable(project_id, require(key, "key"))
    )


async def gitlab_create_project_variable(
    client: GitLabClient,
    project_id: int | str,
    key: str,
    value: str,
    *,
    variable_type: Optional[VariableType] = None,
    protected: Optional[bool] = None,
    masked: Optional[bool] = None,
    raw: Optional[bool] = None,
    environment_scope: Optional[str] = None,
    description: Optional[str] = None,
) -> str:
    data = VariableCreateInput(
        key=require(key, "key"),
        value=value,
        variable_type=variable_type,
        protected=protected,
        masked=masked,
        raw=raw,
        environment_scope=environment_scope,
        description=description,
    )
    variable = await client.create_project_variable(project_id, data)
    return f"Variable created successfully:\n\n{fmt.format_variable(variable)}"


async def gitlab_update_project_variable(
    client: GitLabClient,
    project_id: int | str,
    key: str,
    value: str,
    *,
    variable_type: Optional[VariableType] = None,
    protected: Optional[bool] = None,
    masked: Optional[bool] = None,
    raw: Optional[bool] = None,
    environment_scope: Optional[str] = None,
    description: Optional[str] = None,
) -> str:
    data = VariableUpdateInput(
        value=value,
        variable_type=variable_type,
        protected=protected,
        masked=masked,
        raw=raw,
        environment_scope=environment_scope,
        description=description,
    )
    variable = await client.update_project_variable(
        project_id, require(key, "key"), data
    )
    return f"Variable updated successfully:\n\n{fmt.format_variable(variable)}"


async def gitlab_delete_project_variable(
    client: GitLabClient, project_id: int | str, key: str
) -> str:
    await client.delete_project_variable(project_id, require(key, "key"))
    return f"Variable '{key}' deleted successfully."
