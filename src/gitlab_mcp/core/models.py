from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Visibility = Literal["private", "internal", "public"]
SortOrder = Literal["asc", "desc"]
StateEvent = Literal["close", "reopen"]
PipelineStatus = Literal[
    "created",
    "waiting_for_resource",
    "preparing",
    "pending",
    "running",
    "success",
    "failed",
    "canceled",
    "skipped",
    "manual",
    "scheduled",
]
IssueType = Literal["issue", "incident", "test_case", "task"]


class GitLabEntity(BaseModel):
    """
    Read-only snapshot of one upstream REST resource.
    Unknown fields are ignored; almost everything is optional because GitLab
    trims payloads depending on endpoint, permissions and instance version.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)


# --- Entities ---


class User(GitLabEntity):
    id: int
    username: Optional[str] = None
    name: Optional[str] = None
    state: Optional[str] = None
    avatar_url: Optional[str] = None
    web_url: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[str] = None


class Namespace(GitLabEntity):
    id: Optional[int] = None
    name: Optional[str] = None
    path: Optional[str] = None
    kind: Optional[str] = None
    full_path: Optional[str] = None
    avatar_url: Optional[str] = None
    web_url: Optional[str] = None


class Project(GitLabEntity):
    id: int
    name: Optional[str] = None
    name_with_namespace: Optional[str] = None
    path: Optional[str] = None
    path_with_namespace: Optional[str] = None
    description: Optional[str] = None
    visibility: Optional[str] = None
    default_branch: Optional[str] = None
    web_url: Optional[str] = None
    ssh_url_to_repo: Optional[str] = None
    http_url_to_repo: Optional[str] = None
    readme_url: Optional[str] = None
    namespace: Optional[Namespace] = None
    owner: Optional[User] = None
    created_at: Optional[str] = None
    last_activity_at: Optional[str] = None
    archived: Optional[bool] = None
    forks_count: Optional[int] = None
    star_count: Optional[int] = None
    open_issues_count: Optional[int] = None
    topics: List[str] = Field(default_factory=list)
    avatar_url: Optional[str] = None
    empty_repo: Optional[bool] = None


class CommitStats(GitLabEntity):
    additions: int = 0
    deletions: int = 0
    total: int = 0


class Commit(GitLabEntity):
    id: str
    short_id: Optional[str] = None
    title: Optional[str] = None
    message: Optional[str] = None
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    authored_date: Optional[str] = None
    committer_name: Optional[str] = None
    committer_email: Optional[str] = None
    committed_date: Optional[str] = None
    created_at: Optional[str] = None
    parent_ids: List[str] = Field(default_factory=list)
    web_url: Optional[str] = None
    stats: Optional[CommitStats] = None


class Branch(GitLabEntity):
    name: str
    commit: Optional[Commit] = None
    merged: Optional[bool] = None
    protected: Optional[bool] = None
    developers_can_push: Optional[bool] = None
    developers_can_merge: Optional[bool] = None
    can_push: Optional[bool] = None
    default: Optional[bool] = None
    web_url: Optional[str] = None


class TagRelease(GitLabEntity):
    tag_name: Optional[str] = None
    description: Optional[str] = None


class Tag(GitLabEntity):
    name: str
    message: Optional[str] = None
    target: Optional[str] = None
    commit: Optional[Commit] = None
    release: Optional[TagRelease] = None
    protected: Optional[bool] = None


class Milestone(GitLabEntity):
    id: Optional[int] = None
    iid: Optional[int] = None
    project_id: Optional[int] = None
    group_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    state: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    due_date: Optional[str] = None
    start_date: Optional[str] = None
    expired: Optional[bool] = None
    web_url: Optional[str] = None


class MergeRequest(GitLabEntity):
    id: int
    iid: int
    project_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    state: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    merged_at: Optional[str] = None
    closed_at: Optional[str] = None
    target_branch: Optional[str] = None
    source_branch: Optional[str] = None
    source_project_id: Optional[int] = None
    target_project_id: Optional[int] = None
    author: Optional[User] = None
    assignee: Optional[User] = None
    assignees: List[User] = Field(default_factory=list)
    reviewers: List[User] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list)
    milestone: Optional[Milestone] = None
    merge_status: Optional[str] = None
    sha: Optional[str] = None
    merge_commit_sha: Optional[str] = None
    squash_commit_sha: Optional[str] = None
    web_url: Optional[str] = None
    work_in_progress: Optional[bool] = None
    draft: Optional[bool] = None
    has_conflicts: Optional[bool] = None
    blocking_discussions_resolved: Optional[bool] = None
    changes_count: Optional[str] = None
    user_notes_count: Optional[int] = None
    upvotes: Optional[int] = None
    downvotes: Optional[int] = None


class Issue(GitLabEntity):
    id: int
    iid: int
    project_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    state: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    closed_at: Optional[str] = None
    closed_by: Optional[User] = None
    author: Optional[User] = None
    assignee: Optional[User] = None
    assignees: List[User] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list)
    milestone: Optional[Milestone] = None
    web_url: Optional[str] = None
    due_date: Optional[str] = None
    confidential: Optional[bool] = None
    weight: Optional[int] = None
    user_notes_count: Optional[int] = None
    upvotes: Optional[int] = None
    downvotes: Optional[int] = None
    issue_type: Optional[str] = None


class DetailedStatus(GitLabEntity):
    icon: Optional[str] = None
    text: Optional[str] = None
    label: Optional[str] = None
    group: Optional[str] = None
    tooltip: Optional[str] = None
    has_details: Optional[bool] = None
    details_path: Optional[str] = None


class Pipeline(GitLabEntity):
    id: int
    iid: Optional[int] = None
    project_id: Optional[int] = None
    sha: Optional[str] = None
    ref: Optional[str] = None
    status: Optional[str] = None
    source: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    web_url: Optional[str] = None
    name: Optional[str] = None
    user: Optional[User] = None
    started_at: Optional[str] = None
    finished_at: Optional[str] = None
    duration: Optional[float] = None
    queued_duration: Optional[float] = None
    coverage: Optional[str] = None
    detailed_status: Optional[DetailedStatus] = None


class JobPipeline(GitLabEntity):
    id: Optional[int] = None
    project_id: Optional[int] = None
    ref: Optional[str] = None
    sha: Optional[str] = None
    status: Optional[str] = None


class JobArtifact(GitLabEntity):
    file_type: Optional[str] = None
    size: Optional[int] = None
    filename: Optional[str] = None


class JobRunner(GitLabEntity):
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    active: Optional[bool] = None
    is_shared: Optional[bool] = None


class Job(GitLabEntity):
    id: int
    name: Optional[str] = None
    stage: Optional[str] = None
    status: Optional[str] = None
    ref: Optional[str] = None
    tag: Optional[bool] = None
    coverage: Optional[float] = None
    allow_failure: Optional[bool] = None
    created_at: Optional[str] = None
    started_at: Optional[str] = None
    finished_at: Optional[str] = None
    duration: Optional[float] = None
    queued_duration: Optional[float] = None
    user: Optional[User] = None
    commit: Optional[Commit] = None
    pipeline: Optional[JobPipeline] = None
    web_url: Optional[str] = None
    artifacts: List[JobArtifact] = Field(default_factory=list)
    runner: Optional[JobRunner] = None
    artifacts_expire_at: Optional[str] = None
    failure_reason: Optional[str] = None


class Group(GitLabEntity):
    id: int
    name: Optional[str] = None
    path: Optional[str] = None
    full_name: Optional[str] = None
    full_path: Optional[str] = None
    description: Optional[str] = None
    visibility: Optional[str] = None
    web_url: Optional[str] = None
    avatar_url: Optional[str] = None
    parent_id: Optional[int] = None
    created_at: Optional[str] = None
    projects: List[Project] = Field(default_factory=list)
    shared_projects: List[Project] = Field(default_factory=list)


class Note(GitLabEntity):
    id: int
    body: Optional[str] = None
    author: Optional[User] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    system: Optional[bool] = None
    noteable_id: Optional[int] = None
    noteable_type: Optional[str] = None
    resolvable: Optional[bool] = None
    resolved: Optional[bool] = None
    resolved_by: Optional[User] = None
    confidential: Optional[bool] = None
    internal: Optional[bool] = None


class Label(GitLabEntity):
    id: int
    name: Optional[str] = None
    color: Optional[str] = None
    text_color: Optional[str] = None
    description: Optional[str] = None
    open_issues_count: Optional[int] = None
    closed_issues_count: Optional[int] = None
    open_merge_requests_count: Optional[int] = None
    subscribed: Optional[bool] = None
    priority: Optional[int] = None
    is_project_label: Optional[bool] = None


class ReleaseSource(GitLabEntity):
    format: Optional[str] = None
    url: Optional[str] = None


class ReleaseLink(GitLabEntity):
    id: Optional[int] = None
    name: Optional[str] = None
    url: Optional[str] = None
    direct_asset_url: Optional[str] = None
    link_type: Optional[str] = None


class ReleaseAssets(GitLabEntity):
    count: Optional[int] = None
    sources: List[ReleaseSource] = Field(default_factory=list)
    links: List[ReleaseLink] = Field(default_factory=list)


class Release(GitLabEntity):
    tag_name: str
    name: Optional[str] = None
    description: Optional[str] = None
    description_html: Optional[str] = None
    created_at: Optional[str] = None
    released_at: Optional[str] = None
    author: Optional[User] = None
    commit: Optional[Commit] = None
    milestones: List[Milestone] = Field(default_factory=list)
    commit_path: Optional[str] = None
    tag_path: Optional[str] = None
    assets: Optional[ReleaseAssets] = None


class File(GitLabEntity):
    file_name: Optional[str] = None
    file_path: Optional[str] = None
    size: Optional[int] = None
    encoding: Optional[str] = None
    content_sha256: Optional[str] = None
    ref: Optional[str] = None
    blob_id: Optional[str] = None
    commit_id: Optional[str] = None
    last_commit_id: Optional[str] = None
    content: Optional[str] = None
    execute_filemode: Optional[bool] = None
    # create/update responses only echo these two
    branch: Optional[str] = None


class TreeItem(GitLabEntity):
    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    path: str
    mode: Optional[str] = None


class Diff(GitLabEntity):
    old_path: Optional[str] = None
    new_path: Optional[str] = None
    a_mode: Optional[str] = None
    b_mode: Optional[str] = None
    new_file: bool = False
    renamed_file: bool = False
    deleted_file: bool = False
    diff: str = ""


class Compare(GitLabEntity):
    commit: Optional[Commit] = None
    commits: List[Commit] = Field(default_factory=list)
    diffs: List[Diff] = Field(default_factory=list)
    compare_timeout: Optional[bool] = None
    compare_same_ref: Optional[bool] = None


class Member(GitLabEntity):
    id: int
    username: Optional[str] = None
    name: Optional[str] = None
    state: Optional[str] = None
    avatar_url: Optional[str] = None
    web_url: Optional[str] = None
    access_level: Optional[int] = None
    expires_at: Optional[str] = None


class Variable(GitLabEntity):
    key: str
    value: Optional[str] = None
    variable_type: Optional[str] = None
    protected: Optional[bool] = None
    masked: Optional[bool] = None
    raw: Optional[bool] = None
    environment_scope: Optional[str] = None
    description: Optional[str] = None


class Webhook(GitLabEntity):
    id: int
    url: Optional[str] = None
    project_id: Optional[int] = None
    push_events: Optional[bool] = None
    push_events_branch_filter: Optional[str] = None
    issues_events: Optional[bool] = None
    confidential_issues_events: Optional[bool] = None
    merge_requests_events: Optional[bool] = None
    tag_push_events: Optional[bool] = None
    note_events: Optional[bool] = None
    confidential_note_events: Optional[bool] = None
    job_events: Optional[bool] = None
    pipeline_events: Optional[bool] = None
    wiki_page_events: Optional[bool] = None
    deployment_events: Optional[bool] = None
    releases_events: Optional[bool] = None
    enable_ssl_verification: Optional[bool] = None
    created_at: Optional[str] = None


class Runner(GitLabEntity):
    id: int
    description: Optional[str] = None
    ip_address: Optional[str] = None
    active: Optional[bool] = None
    paused: Optional[bool] = None
    is_shared: Optional[bool] = None
    runner_type: Optional[str] = None
    name: Optional[str] = None
    online: Optional[bool] = None
    status: Optional[str] = None
    tag_list: List[str] = Field(default_factory=list)


class ConnectionResult(GitLabEntity):
    connected: bool
    message: str
    user: Optional[User] = None


# --- Input Models (request payloads) ---


class InputModel(BaseModel):
    """
    Request-shaping payload. Attributes are snake_case (the GitLab wire names);
    camelCase aliases let a tool argument object validate as-is.
    """

    model_config = ConfigDict(
        extra="forbid", alias_generator=to_camel, populate_by_name=True
    )

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class PaginationParams(InputModel):
    page: Optional[int] = Field(default=None, ge=1)
    per_page: Optional[int] = None


class ProjectListFilters(PaginationParams):
    membership: Optional[bool] = None
    owned: Optional[bool] = None
    search: Optional[str] = None
    visibility: Optional[Visibility] = None
    archived: Optional[bool] = None
    order_by: Optional[str] = None
    sort: Optional[SortOrder] = None


class SearchFilters(PaginationParams):
    """Branches, labels and project members only filter by name."""

    search: Optional[str] = None


class CommitListFilters(PaginationParams):
    ref_name: Optional[str] = None
    path: Optional[str] = None
    since: Optional[str] = None
    until: Optional[str] = None
    with_stats: Optional[bool] = None


class TagListFilters(PaginationParams):
    search: Optional[str] = None
    order_by: Optional[str] = None
    sort: Optional[SortOrder] = None


class TreeListFilters(PaginationParams):
    path: Optional[str] = None
    ref: Optional[str] = None
    recursive: Optional[bool] = None


class MergeRequestListFilters(PaginationParams):
    state: Optional[Literal["opened", "closed", "locked", "merged", "all"]] = None
    scope: Optional[str] = None
    order_by: Optional[str] = None
    sort: Optional[SortOrder] = None
    labels: Optional[str] = None
    author_id: Optional[int] = None
    assignee_id: Optional[int] = None
    search: Optional[str] = None


class IssueListFilters(PaginationParams):
    state: Optional[Literal["opened", "closed", "all"]] = None
    labels: Optional[str] = None
    milestone: Optional[str] = None
    scope: Optional[str] = None
    author_id: Optional[int] = None
    assignee_id: Optional[int] = None
    search: Optional[str] = None
    order_by: Optional[str] = None
    sort: Optional[SortOrder] = None


class PipelineListFilters(PaginationParams):
    ref: Optional[str] = None
    status: Optional[PipelineStatus] = None
    scope: Optional[str] = None
    order_by: Optional[str] = None
    sort: Optional[SortOrder] = None


class JobListFilters(PaginationParams):
    scope: Optional[str] = None


class GroupListFilters(PaginationParams):
    search: Optional[str] = None
    owned: Optional[bool] = None
    visibility: Optional[Visibility] = None
    order_by: Optional[str] = None
    sort: Optional[SortOrder] = None


class GroupProjectListFilters(PaginationParams):
    search: Optional[str] = None
    archived: Optional[bool] = None


class UserListFilters(PaginationParams):
    search: Optional[str] = None
    username: Optional[str] = None
    active: Optional[bool] = None
    blocked: Optional[bool] = None


class RunnerListFilters(PaginationParams):
    status: Optional[str] = None
    tag_list: Optional[str] = None


class ProjectCreateInput(InputModel):
    name: str
    path: Optional[str] = None
    namespace_id: Optional[int] = None
    description: Optional[str] = None
    visibility: Optional[Visibility] = None
    initialize_with_readme: Optional[bool] = None
    default_branch: Optional[str] = None


class ProjectUpdateInput(InputModel):
    name: Optional[str] = None
    path: Optional[str] = None
    description: Optional[str] = None
    visibility: Optional[Visibility] = None
    default_branch: Optional[str] = None
    archived: Optional[bool] = None


class BranchCreateInput(InputModel):
    branch: str
    ref: str


class CommitAction(InputModel):
    action: Literal["create", "delete", "move", "update", "chmod"]
    file_path: str
    content: Optional[str] = None
    previous_path: Optional[str] = None
    encoding: Optional[Literal["text", "base64"]] = None
    execute_filemode: Optional[bool] = None


class CommitCreateInput(InputModel):
    branch: str
    commit_message: str
    actions: List[CommitAction]
    author_email: Optional[str] = None
    author_name: Optional[str] = None
    start_branch: Optional[str] = None


class TagCreateInput(InputModel):
    tag_name: str
    ref: str
    message: Optional[str] = None
    release_description: Optional[str] = None


class FileCreateInput(InputModel):
    branch: str
    content: str
    commit_message: str
    author_email: Optional[str] = None
    author_name: Optional[str] = None
    encoding: Optional[Literal["text", "base64"]] = None
    start_branch: Optional[str] = None


class FileUpdateInput(FileCreateInput):
    last_commit_id: Optional[str] = None


class FileDeleteInput(InputModel):
    branch: str
    commit_message: str
    author_email: Optional[str] = None
    author_name: Optional[str] = None
    last_commit_id: Optional[str] = None
    start_branch: Optional[str] = None


class MergeRequestCreateInput(InputModel):
    source_branch: str
    target_branch: str
    title: str
    description: Optional[str] = None
    assignee_id: Optional[int] = None
    assignee_ids: Optional[List[int]] = None
    reviewer_ids: Optional[List[int]] = None
    labels: Optional[str] = None
    milestone_id: Optional[int] = None
    remove_source_branch: Optional[bool] = None
    squash: Optional[bool] = None
    draft: Optional[bool] = None


class MergeRequestUpdateInput(InputModel):
    title: Optional[str] = None
    description: Optional[str] = None
    target_branch: Optional[str] = None
    assignee_id: Optional[int] = None
    assignee_ids: Optional[List[int]] = None
    reviewer_ids: Optional[List[int]] = None
    labels: Optional[str] = None
    milestone_id: Optional[int] = None
    state_event: Optional[StateEvent] = None
    remove_source_branch: Optional[bool] = None
    squash: Optional[bool] = None
    draft: Optional[bool] = None


class MergeRequestAcceptInput(InputModel):
    merge_when_pipeline_succeeds: Optional[bool] = None
    should_remove_source_branch: Optional[bool] = None
    squash: Optional[bool] = None


class IssueCreateInput(InputModel):
    title: str
    description: Optional[str] = None
    assignee_id: Optional[int] = None
    assignee_ids: Optional[List[int]] = None
    labels: Optional[str] = None
    milestone_id: Optional[int] = None
    due_date: Optional[str] = None
    confidential: Optional[bool] = None
    weight: Optional[int] = None
    issue_type: Optional[IssueType] = None


class IssueUpdateInput(InputModel):
    title: Optional[str] = None
    description: Optional[str] = None
    assignee_id: Optional[int] = None
    assignee_ids: Optional[List[int]] = None
    labels: Optional[str] = None
    milestone_id: Optional[int] = None
    state_event: Optional[StateEvent] = None
    due_date: Optional[str] = None
    confidential: Optional[bool] = None
    weight: Optional[int] = None


class NoteCreateInput(InputModel):
    body: str
    internal: Optional[bool] = None


class LabelCreateInput(InputModel):
    name: str
    color: str
    description: Optional[str] = None
    priority: Optional[int] = None


class LabelUpdateInput(InputModel):
    new_name: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[int] = None


class PipelineVariableInput(InputModel):
    key: str
    value: str
    variable_type: Optional[Literal["env_var", "file"]] = None


class PipelineCreateInput(InputModel):
    ref: str
    variables: Optional[List[PipelineVariableInput]] = None


class ReleaseLinkInput(InputModel):
    name: str
    url: str
    direct_asset_path: Optional[str] = None
    link_type: Optional[Literal["other", "runbook", "image", "package"]] = None


class ReleaseAssetsInput(InputModel):
    links: Optional[List[ReleaseLinkInput]] = None


class ReleaseCreateInput(InputModel):
    tag_name: str
    name: Optional[str] = None
    description: Optional[str] = None
    ref: Optional[str] = None
    milestones: Optional[List[str]] = None
    released_at: Optional[str] = None
    assets: Optional[ReleaseAssetsInput] = None


class ReleaseUpdateInput(InputModel):
    name: Optional[str] = None
    description: Optional[str] = None
    milestones: Optional[List[str]] = None
    released_at: Optional[str] = None


class GroupCreateInput(InputModel):
    name: str
    path: str
    description: Optional[str] = None
    visibility: Optional[Visibility] = None
    parent_id: Optional[int] = None


class GroupUpdateInput(InputModel):
    name: Optional[str] = None
    path: Optional[str] = None
    description: Optional[str] = None
    visibility: Optional[Visibility] = None


class MemberAddInput(InputModel):
    user_id: int
    access_level: int
    expires_at: Optional[str] = None


class MemberUpdateInput(InputModel):
    access_level: int
    expires_at: Optional[str] = None


class VariableCreateInput(InputModel):
    key: str
    value: str
    variable_type: Optional[Literal["env_var", "file"]] = None
    protected: Optional[bool] = None
    masked: Optional[bool] = None
    raw: Optional[bool] = None
    environment_scope: Optional[str] = None
    description: Optional[str] = None


class VariableUpdateInput(InputModel):
    value: str
    variable_type: Optional[Literal["env_var", "file"]] = None
    protected: Optional[bool] = None
    masked: Optional[bool] = None
    raw: Optional[bool] = None
    environment_scope: Optional[str] = None
    description: Optional[str] = None


class WebhookCreateInput(InputModel):
    url: str
    token: Optional[str] = None
    push_events: Optional[bool] = None
    push_events_branch_filter: Optional[str] = None
    issues_events: Optional[bool] = None
    confidential_issues_events: Optional[bool] = None
    merge_requests_events: Optional[bool] = None
    tag_push_events: Optional[bool] = None
    note_events: Optional[bool] = None
    confidential_note_events: Optional[bool] = None
    job_events: Optional[bool] = None
    pipeline_events: Optional[bool] = None
    wiki_page_events: Optional[bool] = None
    deployment_events: Optional[bool] = None
    releases_events: Optional[bool] = None
    enable_ssl_verification: Optional[bool] = None
