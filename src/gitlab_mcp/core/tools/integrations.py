"""Project webhooks and CI runners."""

from __future__ import annotations

from typing import Literal, Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import (
    PaginationParams,
    RunnerListFilters,
    WebhookCreateInput,
)
from gitlab_mcp.core.tools._common import page_args, require


async def gitlab_list_project_webhooks(
    client: GitLabClient,
    project_id: int | str,
    *,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    hooks = await client.list_project_webhooks(
        project_id, PaginationParams(**page_args(page, per_page))
    )
    return fmt.format_webhooks(hooks)


async def gitlab_create_project_webhook(
    client: GitLabClient,
    project_id: int | str,
    url: str,
    *,
    token: Optional[str] = None,
    push_events: Optional[bool] = None,
    push_events_branch_filter: Optional[str] = None,
    issues_events: Optional[bool] = None,
    merge_requests_events: Optional[bool] = None,
    tag_push_events: Optional[bool] = None,
    note_events: Optional[bool] = None,
    job_events: Optional[bool] = None,
    pipeline_events: Optional[bool] = None,
    releases_events: Optional[bool] = None,
    enable_ssl_verification: Optional[bool] = None,
) -> str:
    """
    Register a webhook. GitLab enables push events by default; set the other
    *_events flags to subscribe to more. `token` is sent back in X-Gitlab-Token.
    """
    data = WebhookCreateInput(
        url=require(url, "url"),
        token=token,
        push_events=push_events,
        push_events_branch_filter=push_events_branch_filter,
        issues_events=issues_events,
        merge_requests_events=merge_requests_events,
        tag_push_events=tag_push_events,
        note_events=note_events,
        job_events=job_events,
        pipeline_events=pipeline_events,
        releases_events=releases_events,
        enable_ssl_verification=enable_ssl_verification,
    )
    hook = await client.create_project_webhook(project_id, data)
    return f"Webhook created successfully:\n\n{fmt.format_webhook(hook)}"


async def gitlab_delete_project_webhook(
    client: GitLabClient, project_id: int | str, hook_id: int
) -> str:
    await client.delete_project_webhook(project_id, hook_id)
    return f"Webhook {hook_id} deleted successfully."


async def gitlab_list_project_runners(
    client: GitLabClient,
    project_id: int | str,
    *,
    status: Optional[
        Literal["online", "offline", "stale", "never_contacted", "active", "paused"]
    ] = None,
    tag_list: Optional[str] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    """List runners available to a project. `tag_list` is comma-separated."""
    filters = RunnerListFilters(
        status=status, tag_list=tag_list, **page_args(page, per_page)
    )
    return fmt.format_runners(await client.list_project_runners(project_id, filters))
