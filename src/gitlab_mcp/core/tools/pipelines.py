from __future__ import annotations

from typing import Dict, Literal, Optional

from gitlab_mcp.core import formatters as fmt
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.models import (
    JobListFilters,
    PipelineCreateInput,
    PipelineListFilters,
    PipelineStatus,
    PipelineVariableInput,
)
from gitlab_mcp.core.tools._common import page_args, require

JobScope = Literal[
    "created",
    "pending",
    "running",
    "failed",
    "success",
    "canceled",
    "skipped",
    "manual",
]


async def gitlab_list_pipelines(
    client: GitLabClient,
    project_id: int | str,
    *,
    ref: Optional[str] = None,
    status: Optional[PipelineStatus] = None,
    scope: Optional[Literal["running", "pending", "finished", "branches", "tags"]] = None,
    order_by: Optional[Literal["id", "status", "ref", "updated_at", "user_id"]] = None,
    sort: Optional[Literal["asc", "desc"]] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    filters = PipelineListFilters(
        ref=ref,
        status=status,
        scope=scope,
        order_by=order_by,
        sort=sort,
        **page_args(page, per_page),
    )
    return fmt.format_pipelines(await client.list_pipelines(project_id, filters))


async def gitlab_get_pipeline(
    client: GitLabClient, project_id: int | str, pipeline_id: int
) -> str:
    return fmt.format_pipeline(await client.get_pipeline(project_id, pipeline_id))


async def gitlab_create_pipeline(
    client: GitLabClient,
    project_id: int | str,
    ref: str,
    *,
    variables: Optional[Dict[str, str]] = None,
) -> str:
    """Run a new pipeline on `ref`; `variables` maps CI variable names to values."""
    data = PipelineCreateInput(
        ref=require(ref, "ref"),
        variables=[
            PipelineVariableInput(key=k, value=v) for k, v in (variables or {}).items()
        ]
        or None,
    )
    pipeline = await client.create_pipeline(project_id, data)
    return f"Pipeline created successfully:\n\n{fmt.format_pipeline(pipeline)}"


async def gitlab_retry_pipeline(
    client: GitLabClient, project_id: int | str, pipeline_id: int
) -> str:
    """Retry the failed or canceled jobs of a pipeline."""
    pipeline = await client.retry_pipeline(project_id, pipeline_id)
    return f"Pipeline retried successfully:\n\n{fmt.format_pipeline(pipeline)}"


async def gitlab_cancel_pipeline(
    client: GitLabClient, project_id: int | str, pipeline_id: int
) -> str:
    pipeline = await client.cancel_pipeline(project_id, pipeline_id)
    return f"Pipeline canceled successfully:\n\n{fmt.format_pipeline(pipeline)}"


async def gitlab_delete_pipeline(
    client: GitLabClient, project_id: int | str, pipeline_id: int
) -> str:
    await client.delete_pipeline(project_id, pipeline_id)
    return f"Pipeline {pipeline_id} deleted successfully."


# --- Jobs ---


async def gitlab_list_pipeline_jobs(
    client: GitLabClient,
    project_id: int | str,
    pipeline_id: int,
    *,
    scope: Optional[JobScope] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> str:
    filters = JobListFilters(scope=scope, **page_args(page, per_page))
    return fmt.format_jobs(
        await client.list_pipeline_jobs(project_id, pipeline_id, filters)
    )


async def gitlab_get_job(client: GitLabClient, project_id: int | str, job_id: int) -> str:
    return fmt.format_job(await client.get_job(project_id, job_id))


async def gitlab_get_job_log(
    client: GitLabClient, project_id: int | str, job_id: int
) -> str:
    """Get the job's console output (trace). Long logs are clipped to the character limit."""
    return fmt.format_job_log(job_id, await client.get_job_log(project_id, job_id))


async def gitlab_retry_job(client: GitLabClient, project_id: int | str, job_id: int) -> str:
    job = await client.retry_job(project_id, job_id)
    return f"Job retried successfully:\n\n{fmt.format_job(job)}"


async def gitlab_cancel_job(client: GitLabClient, project_id: int | str, job_id: int) -> str:
    job = await client.cancel_job(project_id, job_id)
    return f"Job canceled successfully:\n\n{fmt.format_job(job)}"


async def gitlab_play_job(client: GitLabClient, project_id: int | str, job_id: int) -> str:
    """Trigger a manual job."""
    job = await client.play_job(project_id, job_id)
    return f"Job started successfully:\n\n{fmt.format_job(job)}"
