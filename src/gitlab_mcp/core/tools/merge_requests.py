from __future__ import annotations

from typing import List, Literal, Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import (
    MergeRequestAcceptInput,
    MergeRequestCreateInput,
    MergeRequestListFilters,
    MergeRequestUpdateInput,
    NoteCreateInput,
    PaginationParams,
)
from gitlab_mcp.core.tools._common import page_args, require


async def gitlab_list_merge_requests(
    client: GitLabClient,
    project_id: int | str,
    *,
    state: Optional[Literal["opened", "closed", "locked", "merged", "all"]] = None,
    scope: Optional[Literal["created_by_me", "assigned_to_me", "all"]] = None,
    labels: Optional[str] = None,
    author_id: Optional[int] = None,
    assignee_id: Optional[int] = None,
    search: Optional[str] = None,
    order_by: Optional[Literal["created_at", "updated_at", "title"]] = None,
    sort: Optional[Literal["asc", "desc"]] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    """List merge requests of a project. `labels` is a comma-separated list."""
    filters = MergeRequestListFilters(
        state=state,
        scope=scope,
        labels=labels,
        author_id=author_id,
        assignee_id=assignee_id,
        search=search,
        order_by=order_by,
        sort=sort,
        **page_args(page, per_page),
    )
    return fmt.format_merge_requests(
        await client.list_merge_requests(project_id, filters)
    )


async def gitlab_get_merge_request(
    client: GitLabClient, project_id: int | str, mr_iid: int
) -> str:
    """Get one merge request by its project-scoped IID."""
    return fmt.format_merge_request(await client.get_merge_request(project_id, mr_iid))


async def gitlab_create_merge_request(
    client: GitLabClient,
    project_id: int | str,
    source_branch: str,
    target_branch: str,
    title: str,
    *,
    description: Optional[str] = None,
    assignee_ids: Optional[List[int]] = None,
    reviewer_ids: Optional[List[int]] = None,
    labels: Optional[str] = None,
    milestone_id: Optional[int] = None,
    remove_source_branch: Optional[bool] = None,
    squash: Optional[bool] = None,
    draft: Optional[bool] = None,
) -> str:
    data = MergeRequestCreateInput(
        source_branch=require(source_branch, "source_branch"),
        target_branch=require(target_branch, "target_branch"),
        title=require(title, "title"),
        description=description,
        assignee_ids=assignee_ids,
        reviewer_ids=reviewer_ids,
        labels=labels,
        milestone_id=milestone_id,
        remove_source_branch=remove_source_branch,
        squash=squash,
        draft=draft,
    )
    mr = await client.create_merge_request(project_id, data)
    return f"Merge request created successfully:\n\n{fmt.format_merge_request(mr)}"


async def gitlab_update_merge_request(
    client: GitLabClient,
    project_id: int | str,
    mr_iid: int,
    *,
    title: Optional[str] = None,
    description: Optional[str] = None,
    target_branch: Optional[str] = None,
    assignee_ids: Optional[List[int]] = None,
    reviewer_ids: Optional[List[int]] = None,
    labels: Optional[str] = None,
    milestone_id: Optional[int] = None,
    state_event: Optional[Literal["close", "reopen"]] = None,
    remove_source_branch: Optional[bool] = None,
    squash: Optional[bool] = None,
    draft: Optional[bool] = None,
) -> str:
    """Update a merge request; use state_event to close or reopen it."""
    data = MergeRequestUpdateInput(
        title=title,
        description=description,
        target_branch=target_branch,
        assignee_ids=assignee_ids,
        reviewer_ids=reviewer_ids,
        labels=labels,
        milestone_id=milestone_id,
        state_event=state_event,
        remove_source_branch=remove_source_branch,
        squash=squash,
        draft=draft,
    )
    mr = await client.update_merge_request(project_id, mr_iid, data)
    return f"Merge request updated successfully:\n\n{fmt.format_merge_request(mr)}"


async def gitlab_accept_merge_request(
    client: GitLabClient,
    project_id: int | str,
    mr_iid: int,
    *,
    merge_when_pipeline_succeeds: Optional[bool] = None,
    should_remove_source_branch: Optional[bool] = None,
    squash: Optional[bool] = None,
) -> str:
    """Merge a merge request, or schedule it for when its pipeline succeeds."""
    options = MergeRequestAcceptInput(
        merge_when_pipeline_succeeds=merge_when_pipeline_succeeds,
        should_remove_source_branch=should_remove_source_branch,
        squash=squash,
    )
    mr = await client.accept_merge_request(project_id, mr_iid, options)
    return f"Merge request merged successfully:\n\n{fmt.format_merge_request(mr)}"


async def gitlab_approve_merge_request(
    client: GitLabClient, project_id: int | str, mr_iid: int
) -> str:
    await client.approve_merge_request(project_id, mr_iid)
    return f"Merge request !{mr_iid} approved successfully."


async def gitlab_rebase_merge_request(
    client: GitLabClient, project_id: int | str, mr_iid: int
) -> str:
    """Rebase the source branch onto the target. GitLab runs the rebase asynchronously."""
    await client.rebase_merge_request(project_id, mr_iid)
    return f"Rebase of merge request !{mr_iid} started."


async def gitlab_get_merge_request_diff(
    client: GitLabClient, project_id: int | str, mr_iid: int
) -> str:
    diffs = await client.get_merge_request_diff(project_id, mr_iid)
    return fmt.format_diffs(diffs, title=f"Changes in !{mr_iid}")


async def gitlab_list_merge_request_notes(
    client: GitLabClient,
    project_id: int | str,
    mr_iid: int,
    *,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    notes = await client.list_merge_request_notes(
        project_id, mr_iid, PaginationParams(**page_args(page, per_page))
    )
    return fmt.format_notes(notes)


async def gitlab_create_merge_request_note(
    client: GitLabClient,
    project_id: int | str,
    mr_iid: int,
    body: str,
    *,
    internal: Optional[bool] = None,
) -> str:
    """Comment on a merge request."""
    note = await client.create_merge_request_note(
        project_id, mr_iid, NoteCreateInput(body=require(body, "body"), internal=internal)
    )
    return f"Note added successfully:\n\n{fmt.format_note(note)}"
