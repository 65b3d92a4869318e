from __future__ import annotations

from typing import Any, Dict, List, Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import CommitAction, CommitCreateInput, CommitListFilters
from gitlab_mcp.core.tools._common import page_args, require


async def gitlab_list_commits(
    client: GitLabClient,
    project_id: int | str,
    *,
    ref_name: Optional[str] = None,
    path: Optional[str] = None,
    since: Optional[str] = None,
    until: Optional[str] = None,
    with_stats: Optional[bool] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    """
    List commits, newest first.
    since/until are ISO 8601 timestamps; `path` restricts to commits touching it.
    """
    filters = CommitListFilters(
        ref_name=ref_name,
        path=path,
        since=since,
        until=until,
        with_stats=with_stats,
        **page_args(page, per_page),
    )
    return fmt.format_commits(await client.list_commits(project_id, filters))


async def gitlab_get_commit(client: GitLabClient, project_id: int | str, sha: str) -> str:
    return fmt.format_commit(await client.get_commit(project_id, require(sha, "sha")))


async def gitlab_create_commit(
    client: GitLabClient,
    project_id: int | str,
    branch: str,
    commit_message: str,
    actions: List[Dict[str, Any]],
    *,
    start_branch: Optional[str] = None,
    author_email: Optional[str] = None,
    author_name: Optional[str] = None,
) -> str:
    """
    Create a commit with several file actions at once.

    Each action: {"action": "create"|"update"|"delete"|"move"|"chmod",
    "file_path": ..., "content": ..., "previous_path": ..., "encoding": "text"|"base64"}.
    camelCase keys (filePath, previousPath) are accepted too.
    """
    if not actions:
        raise ValueError("actions must contain at least one file action.")
    data = CommitCreateInput(
        branch=require(branch, "branch"),
        commit_message=require(commit_message, "commit_message"),
        actions=[CommitAction.model_validate(a) for a in actions],
        start_branch=start_branch,
        author_email=author_email,
        author_name=author_name,
    )
    commit = await client.create_commit(project_id, data)
    return f"Commit created successfully:\n\n{fmt.format_commit(commit)}"


async def gitlab_get_commit_diff(client: GitLabClient, project_id: int | str, sha: str) -> str:
    diffs = await client.get_commit_diff(project_id, require(sha, "sha"))
    return fmt.format_diffs(diffs, title=f"Diff for {sha[:8]}")


async def gitlab_cherry_pick_commit(
    client: GitLabClient, project_id: int | str, sha: str, branch: str
) -> str:
    """Cherry-pick commit `sha` onto `branch`."""
    commit = await client.cherry_pick_commit(
        project_id, require(sha, "sha"), require(branch, "branch")
    )
    return f"Commit cherry-picked successfully:\n\n{fmt.format_commit(commit)}"


async def gitlab_revert_commit(
    client: GitLabClient, project_id: int | str, sha: str, branch: str
) -> str:
    """Create a commit on `branch` that reverts `sha`."""
    commit = await client.revert_commit(
        project_id, require(sha, "sha"), require(branch, "branch")
    )
    return f"Commit reverted successfully:\n\n{fmt.format_commit(commit)}"
