from __future__ import annotations

from typing import Literal, Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import FileCreateInput, FileDeleteInput, FileUpdateInput
from gitlab_mcp.core.tools._common import require

Encoding = Literal["text", "base64"]


async def gitlab_get_file(
    client: GitLabClient, project_id: int | str, file_path: str, ref: str
) -> str:
    """Get file metadata and decoded content at `ref`."""
    file = await client.get_file(
        project_id, require(file_path, "file_path"), require(ref, "ref")
    )
    return fmt.format_file(file)


async def gitlab_get_file_raw(
    client: GitLabClient, project_id: int | str, file_path: str, ref: str
) -> str:
    """Get the raw file body at `ref` without metadata."""
    content = await client.get_file_raw(
        project_id, require(file_path, "file_path"), require(ref, "ref")
    )
    return fmt.format_raw_file(file_path, content)


async def gitlab_create_file(
    client: GitLabClient,
    project_id: int | str,
    file_path: str,
    branch: str,
    content: str,
    commit_message: str,
    *,
    encoding: Optional[Encoding] = None,
    start_branch: Optional[str] = None,
    author_email: Optional[str] = None,
    author_name: Optional[str] = None,
) -> str:
    data = FileCreateInput(
        branch=require(branch, "branch"),
        content=content,
        commit_message=require(commit_message, "commit_message"),
        encoding=encoding,
        start_branch=start_branch,
        author_email=author_email,
        author_name=author_name,
    )
    await client.create_file(project_id, require(file_path, "file_path"), data)
    return f"File '{file_path}' created successfully."


async def gitlab_update_file(
    client: GitLabClient,
    project_id: int | str,
    file_path: str,
    branch: str,
    content: str,
    commit_message: str,
    *,
    encoding: Optional[Encoding] = None,
    last_commit_id: Optional[str] = None,
    start_branch: Optional[str] = None,
    author_email: Optional[str] = None,
    author_name: Optional[str] = None,
) -> str:
    """Replace a file's content. Pass `last_commit_id` to guard against concurrent edits."""
    data = FileUpdateInput(
        branch=require(branch, "branch"),
        content=content,
        commit_message=require(commit_message, "commit_message"),
        encoding=encoding,
        last_commit_id=last_commit_id,
        start_branch=start_branch,
        author_email=author_email,
        author_name=author_name,
    )
    await client.update_file(project_id, require(file_path, "file_path"), data)
    return f"File '{file_path}' updated successfully."


async def gitlab_delete_file(
    client: GitLabClient,
    project_id: int | str,
    file_path: str,
    branch: str,
    commit_message: str,
    *,
    last_commit_id: Optional[str] = None,
    author_email: Optional[str] = None,
    author_name: Optional[str] = None,
) -> str:
    data = FileDeleteInput(
        branch=require(branch, "branch"),
        commit_message=require(commit_message, "commit_message"),
        last_commit_id=last_commit_id,
        author_email=author_email,
        author_name=author_name,
    )
    await client.delete_file(project_id, require(file_path, "file_path"), data)
    return f"File '{file_path}' deleted successfully."
