from __future__ import annotations

from typing import List, Literal, Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import (
    IssueCreateInput,
    IssueListFilters,
    IssueUpdateInput,
    NoteCreateInput,
    PaginationParams,
)
from gitlab_mcp.core.tools._common import page_args, require


async def gitlab_list_issues(
    client: GitLabClient,
    project_id: int | str,
    *,
    state: Optional[Literal["opened", "closed", "all"]] = None,
    labels: Optional[str] = None,
    milestone: Optional[str] = None,
    scope: Optional[Literal["created_by_me", "assigned_to_me", "all"]] = None,
    author_id: Optional[int] = None,
    assignee_id: Optional[int] = None,
    search: Optional[str] = None,
    order_by: Optional[Literal["created_at", "updated_at", "priority", "due_date"]] = None,
    sort: Optional[Literal["asc", "desc"]] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    """List issues of a project. `labels` is a comma-separated list."""
    filters = IssueListFilters(
        state=state,
        labels=labels,
        milestone=milestone,
        scope=scope,
        author_id=author_id,
        assignee_id=assignee_id,
        search=search,
        order_by=order_by,
        sort=sort,
        **page_args(page, per_page),
    )
    return fmt.format_issues(await client.list_issues(project_id, filters))


async def gitlab_get_issue(client: GitLabClient, project_id: int | str, issue_iid: int) -> str:
    return fmt.format_issue(await client.get_issue(project_id, issue_iid))


async def gitlab_create_issue(
    client: GitLabClient,
    project_id: int | str,
    title: str,
    *,
    description: Optional[str] = None,
    assignee_ids: Optional[List[int]] = None,
    labels: Optional[str] = None,
    milestone_id: Optional[int] = None,
    due_date: Optional[str] = None,
    confidential: Optional[bool] = None,
    weight: Optional[int] = None,
    issue_type: Optional[Literal["issue", "incident", "test_case", "task"]] = None,
) -> str:
    """Open a new issue. due_date: YYYY-MM-DD."""
    data = IssueCreateInput(
        title=require(title, "title"),
        description=description,
        assignee_ids=assignee_ids,
        labels=labels,
        milestone_id=milestone_id,
        due_date=due_date,
        confidential=confidential,
        weight=weight,
        issue_type=issue_type,
    )
    issue = await client.create_issue(project_id, data)
    return f"Issue created successfully:\n\n{fmt.format_issue(issue)}"


async def gitlab_update_issue(
    client: GitLabClient,
    project_id: int | str,
    issue_iid: int,
    *,
    title: Optional[str] = None,
    description: Optional[str] = None,
    assignee_ids: Optional[List[int]] = None,
    labels: Optional[str] = None,
    milestone_id: Optional[int] = None,
    state_event: Optional[Literal["close", "reopen"]] = None,
    due_date: Optional[str] = None,
    confidential: Optional[bool] = None,
    weight: Optional[int] = None,
) -> str:
    """Update an issue; use state_event to close or reopen it."""
    data = IssueUpdateInput(
        title=title,
        description=description,
        assignee_ids=assignee_ids,
        labels=labels,
        milestone_id=milestone_id,
        state_event=state_event,
        due_date=due_date,
        confidential=confidential,
        weight=weight,
    )
    issue = await client.update_issue(project_id, issue_iid, data)
    return f"Issue updated successfully:\n\n{fmt.format_issue(issue)}"


async def gitlab_delete_issue(
    client: GitLabClient, project_id: int | str, issue_iid: int
) -> str:
    """Delete an issue (requires Owner or administrator)."""
    await client.delete_issue(project_id, issue_iid)
    return f"Issue #{issue_iid} deleted successfully."


async def gitlab_list_issue_notes(
    client: GitLabClient,
    project_id: int | str,
    issue_iid: int,
    *,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    notes = await client.list_issue_notes(
        project_id, issue_iid, PaginationParams(**page_args(page, per_page))
    )
    return fmt.format_notes(notes)


async def gitlab_create_issue_note(
    client: GitLabClient,
    project_id: int | str,
    issue_iid: int,
    body: str,
    *,
    internal: Optional[bool] = None,
) -> str:
    """Comment on an issue; `internal` hides the note from non-members."""
    note = await client.create_issue_note(
        project_id, issue_iid, NoteCreateInput(body=require(body, "body"), internal=internal)
    )
    return f"Note added successfully:\n\n{fmt.format_note(note)}"
