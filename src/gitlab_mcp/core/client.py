"""
Credential-scoped REST client for the GitLab v4 API.

One instance per tool call: credentials are fixed at construction and nothing
is cached between requests. Every operation issues exactly one HTTP request and
either returns typed entities or raises from the `errors` taxonomy; the only
exception is `test_connection`, which reports failures as data.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Any, Dict, List, Optional, Type, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from .credentials import TenantCredentials, auth_headers
from .errors import (
    AuthenticationError,
    GitLabApiError,
    GitLabNetworkError,
    GitLabParseError,
    RateLimitError,
    extract_error_message,
    parse_retry_after,
)
from .models import (
    Branch,
    BranchCreateInput,
    Commit,
    CommitCreateInput,
    CommitListFilters,
    Compare,
    ConnectionResult,
    Diff,
    File,
    FileCreateInput,
    FileDeleteInput,
    FileUpdateInput,
    Group,
    GroupCreateInput,
    GroupListFilters,
    GroupProjectListFilters,
    GroupUpdateInput,
    Issue,
    IssueCreateInput,
    IssueListFilters,
    IssueUpdateInput,
    Job,
    JobListFilters,
    Label,
    LabelCreateInput,
    LabelUpdateInput,
    Member,
    MemberAddInput,
    MemberUpdateInput,
    MergeRequest,
    MergeRequestAcceptInput,
    MergeRequestCreateInput,
    MergeRequestListFilters,
    MergeRequestUpdateInput,
    Note,
    NoteCreateInput,
    PaginationParams,
    Pipeline,
    PipelineCreateInput,
    PipelineListFilters,
    Project,
    ProjectCreateInput,
    ProjectListFilters,
    ProjectUpdateInput,
    Release,
    ReleaseCreateInput,
    ReleaseUpdateInput,
    Runner,
    RunnerListFilters,
    SearchFilters,
    Tag,
    TagCreateInput,
    TagListFilters,
    TreeItem,
    TreeListFilters,
    User,
    UserListFilters,
    Variable,
    VariableCreateInput,
    VariableUpdateInput,
    Webhook,
    WebhookCreateInput,
)
from .observability import log_event
from .pagination import (
    PaginatedResult,
    paginated_result,
    pagination_query,
    parse_pagination_headers,
)

M = TypeVar("M", bound=BaseModel)

ProjectRef = Union[int, str]
GroupRef = Union[int, str]

_UPPER_RE = re.compile(r"[A-Z]")
_PAGINATION_KEYS = frozenset({"page", "perPage"})


def to_snake_case(name: str) -> str:
    return _UPPER_RE.sub(lambda m: "_" + m.group(0).lower(), name)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(filters: Optional[BaseModel]) -> Dict[str, str]:
    """
    Filter model -> GitLab query params (snake_case keys).
    Pagination fields are left to `pagination_query`; None values are dropped.
    """
    if filters is None:
        return {}
    query: Dict[str, str] = {}
    for key, value in filters.model_dump(by_alias=True, exclude_none=True).items():
        if key in _PAGINATION_KEYS:
            continue
        query[to_snake_case(key)] = _query_value(value)
    return query


def _seg(value: Any) -> str:
    """Encode one path segment; slashes in namespaced ids must not split it."""
    return quote(str(value), safe="")


class GitLabClient:
    """
    Shared HTTP client for the GitLab REST API.
    - Handles auth headers, base URL and error classification
    - Returns pydantic entities or PaginatedResult envelopes
    - No retries, no caching; tools own presentation
    """

    def __init__(
        self,
        credentials: TenantCredentials,
        *,
        http: Optional[httpx.AsyncClient] = None,
        timeout_seconds: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
        request_id: Optional[str] = None,
    ):
        self.credentials = credentials
        self.base_url = credentials.base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.request_id = request_id
        self.log = logger
        self.http = http

    # --- Executors --------------------------------------------------------- #

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        tool: Optional[str] = None,
    ) -> httpx.Response:
        method = method.upper()
        url = f"{self.base_url}{path}"
        # raises before anything goes on the wire
        headers = {"Accept": "application/json", **auth_headers(self.credentials.auth)}

        start = time.perf_counter()
        status: Any = "network_error"
        error_type: Optional[str] = None
        try:
            resp = await self._dispatch(
                method, url, params=params or None, json=json, headers=headers
            )
            status = resp.status_code
        except httpx.HTTPError as exc:
            error_type = type(exc).__name__
            raise GitLabNetworkError(
                message=f"Network error calling {method} {path}: {exc}",
                method=method,
                url=url,
            ) from exc
        finally:
            log_event(
                "op_call",
                logger=self.log,
                request_id=self.request_id,
                tool=tool,
                method=method,
                endpoint=path,
                status=status,
                error_type=error_type,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )

        if not resp.is_success:
            raise self._to_error(resp, method=method)
        return resp

    async def _dispatch(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self.http is not None:
            return await self.http.request(method, url, **kwargs)
        async with httpx.AsyncClient(timeout=self.timeout_seconds) as http:
            return await http.request(method, url, **kwargs)

    @staticmethod
    def _to_error(resp: httpx.Response, *, method: str) -> Exception:
        if resp.status_code == 429:
            return RateLimitError(
                retry_after_seconds=parse_retry_after(resp.headers.get("Retry-After"))
            )
        if resp.status_code in (401, 403):
            return AuthenticationError(
                "Authentication failed. Check your GitLab credentials.",
                status_code=resp.status_code,
            )

        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        try:
            parsed = resp.json()
        except ValueError:
            parsed = None
            response_text = (resp.text or "")[:500]
        if isinstance(parsed, dict):
            response_json = parsed

        return GitLabApiError(
            status_code=resp.status_code,
            method=method,
            url=str(resp.request.url),
            message=extract_error_message(parsed, resp.status_code),
            response_json=response_json,
            response_text=response_text,
        )

    @staticmethod
    def _safe_json(resp: httpx.Response) -> Any:
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise GitLabParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: {snippet!r}"
            ) from exc

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        tool: Optional[str] = None,
    ) -> Any:
        """Single-resource call. 204 / empty body -> None, else decoded JSON."""
        resp = await self._send(method, path, params=params, json=json, tool=tool)
        return self._safe_json(resp)

    async def request_paginated(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> PaginatedResult[Dict[str, Any]]:
        """GET a list endpoint and wrap the array with its pagination headers."""
        resp = await self._send("GET", path, params=params, tool=tool)
        payload = self._safe_json(resp)
        if payload is None:
            payload = []
        if not isinstance(payload, list):
            raise GitLabParseError(
                f"Expected JSON array from GET {resp.request.url}, "
                f"got {type(payload).__name__}"
            )
        return paginated_result(payload, parse_pagination_headers(resp.headers))

    async def request_text(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> str:
        resp = await self._send("GET", path, params=params, tool=tool)
        return resp.text

    # --- Decoding helpers -------------------------------------------------- #

    @staticmethod
    def _model(model: Type[M], payload: Any) -> M:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise GitLabParseError(
                f"Response did not match model {model.__name__}: {exc}"
            ) from exc

    def _models(self, model: Type[M], payload: Any) -> List[M]:
        if not isinstance(payload, list):
            raise GitLabParseError(
                f"Expected a list of {model.__name__}, got {type(payload).__name__}"
            )
        return [self._model(model, item) for item in payload]

    async def _get_one(self, model: Type[M], path: str, *, tool: str, **kwargs: Any) -> M:
        return self._model(model, await self.request("GET", path, tool=tool, **kwargs))

    async def _list(
        self,
        model: Type[M],
        path: str,
        filters: Optional[PaginationParams],
        *,
        tool: str,
    ) -> PaginatedResult[M]:
        params: Dict[str, Any] = build_query(filters)
        if filters is not None:
            params.update(pagination_query(filters.page, filters.per_page))
        page = await self.request_paginated(path, params=params, tool=tool)
        return page.map(lambda item: self._model(model, item))

    async def _send_model(
        self,
        model: Type[M],
        method: str,
        path: str,
        *,
        body: Optional[BaseModel] = None,
        tool: str,
    ) -> M:
        json = body.to_body() if body is not None else None
        payload = await self.request(method, path, json=json, tool=tool)
        return self._model(model, payload)

    # --- Connection -------------------------------------------------------- #

    async def test_connection(self) -> ConnectionResult:
        """Probe /user. Never raises; failures come back as connected=False."""
        try:
            user = await self.get_current_user()
        except Exception as exc:  # noqa: BLE001 - reported, not propagated
            return ConnectionResult(
                connected=False, message=str(exc) or "Connection failed"
            )
        return ConnectionResult(
            connected=True, message=f"Connected as {user.username}", user=user
        )

    async def get_current_user(self) -> User:
        return await self._get_one(User, "/user", tool="get_current_user")

    # --- Projects ---------------------------------------------------------- #

    async def list_projects(
        self, filters: Optional[ProjectListFilters] = None
    ) -> PaginatedResult[Project]:
        return await self._list(Project, "/projects", filters, tool="list_projects")

    async def get_project(self, project_id: ProjectRef) -> Project:
        return await self._get_one(
            Project, f"/projects/{_seg(project_id)}", tool="get_project"
        )

    async def create_project(self, data: ProjectCreateInput) -> Project:
        return await self._send_model(
            Project, "POST", "/projects", body=data, tool="create_project"
        )

    async def update_project(
        self, project_id: ProjectRef, data: ProjectUpdateInput
    ) -> Project:
        return await self._send_model(
            Project,
            "PUT",
            f"/projects/{_seg(project_id)}",
            body=data,
            tool="update_project",
        )

    async def delete_project(self, project_id: ProjectRef) -> None:
        await self.request(
            "DELETE", f"/projects/{_seg(project_id)}", tool="delete_project"
        )

    async def fork_project(
        self, project_id: ProjectRef, namespace: Optional[str] = None
    ) -> Project:
        body = {"namespace": namespace} if namespace else None
        payload = await self.request(
            "POST",
            f"/projects/{_seg(project_id)}/fork",
            json=body,
            tool="fork_project",
        )
        return self._model(Project, payload)

    async def star_project(self, project_id: ProjectRef) -> Project:
        return await self._send_model(
            Project, "POST", f"/projects/{_seg(project_id)}/star", tool="star_project"
        )

    async def unstar_project(self, project_id: ProjectRef) -> Project:
        return await self._send_model(
            Project,
            "POST",
            f"/projects/{_seg(project_id)}/unstar",
            tool="unstar_project",
        )

    # --- Branches ---------------------------------------------------------- #

    async def list_branches(
        self, project_id: ProjectRef, filters: Optional[SearchFilters] = None
    ) -> PaginatedResult[Branch]:
        return await self._list(
            Branch,
            f"/projects/{_seg(project_id)}/repository/branches",
            filters,
            tool="list_branches",
        )

    async def get_branch(self, project_id: ProjectRef, branch: str) -> Branch:
        return await self._get_one(
            Branch,
            f"/projects/{_seg(project_id)}/repository/branches/{_seg(branch)}",
            tool="get_branch",
        )

    async def create_branch(
        self, project_id: ProjectRef, data: BranchCreateInput
    ) -> Branch:
        return await self._send_model(
            Branch,
            "POST",
            f"/projects/{_seg(project_id)}/repository/branches",
            body=data,
            tool="create_branch",
        )

    async def delete_branch(self, project_id: ProjectRef, branch: str) -> None:
        await self.request(
            "DELETE",
            f"/projects/{_seg(project_id)}/repository/branches/{_seg(branch)}",
            tool="delete_branch",
        )

    async def delete_merged_branches(self, project_id: ProjectRef) -> None:
        await self.request(
            "DELETE",
            f"/projects/{_seg(project_id)}/repository/merged_branches",
            tool="delete_merged_branches",
        )

    # --- Commits ----------------------------------------------------------- #

    async def list_commits(
        self, project_id: ProjectRef, filters: Optional[CommitListFilters] = None
    ) -> PaginatedResult[Commit]:
        return await self._list(
            Commit,
            f"/projects/{_seg(project_id)}/repository/commits",
            filters,
            tool="list_commits",
        )

    async def get_commit(self, project_id: ProjectRef, sha: str) -> Commit:
        return await self._get_one(
            Commit,
            f"/projects/{_seg(project_id)}/repository/commits/{_seg(sha)}",
            tool="get_commit",
        )

    async def create_commit(
        self, project_id: ProjectRef, data: CommitCreateInput
    ) -> Commit:
        return await self._send_model(
            Commit,
            "POST",
            f"/projects/{_seg(project_id)}/repository/commits",
            body=data,
            tool="create_commit",
        )

    async def get_commit_diff(self, project_id: ProjectRef, sha: str) -> List[Diff]:
        payload = await self.request(
            "GET",
            f"/projects/{_seg(project_id)}/repository/commits/{_seg(sha)}/diff",
            tool="get_commit_diff",
        )
        return self._models(Diff, payload or [])

    async def cherry_pick_commit(
        self, project_id: ProjectRef, sha: str, branch: str
    ) -> Commit:
        payload = await self.request(
            "POST",
            f"/projects/{_seg(project_id)}/repository/commits/{_seg(sha)}/cherry_pick",
            json={"branch": branch},
            tool="cherry_pick_commit",
        )
        return self._model(Commit, payload)

    async def revert_commit(
        self, project_id: ProjectRef, sha: str, branch: str
    ) -> Commit:
        payload = await self.request(
            "POST",
            f"/projects/{_seg(project_id)}/repository/commits/{_seg(sha)}/revert",
            json={"branch": branch},
            tool="revert_commit",
        )
        return self._model(Commit, payload)

    # --- Tags -------------------------------------------------------------- #

    async def list_tags(
        self, project_id: ProjectRef, filters: Optional[TagListFilters] = None
    ) -> PaginatedResult[Tag]:
        return await self._list(
            Tag,
            f"/projects/{_seg(project_id)}/repository/tags",
            filters,
            tool="list_tags",
        )

    async def get_tag(self, project_id: ProjectRef, tag_name: str) -> Tag:
        return await self._get_one(
            Tag,
            f"/projects/{_seg(project_id)}/repository/tags/{_seg(tag_name)}",
            tool="get_tag",
        )

    async def create_tag(self, project_id: ProjectRef, data: TagCreateInput) -> Tag:
        return await self._send_model(
            Tag,
            "POST",
            f"/projects/{_seg(project_id)}/repository/tags",
            body=data,
            tool="create_tag",
        )

    async def delete_tag(self, project_id: ProjectRef, tag_name: str) -> None:
        await self.request(
            "DELETE",
            f"/projects/{_seg(project_id)}/repository/tags/{_seg(tag_name)}",
            tool="delete_tag",
        )

    # --- Repository -------------------------------------------------------- #

    async def get_repository_tree(
        self, project_id: ProjectRef, filters: Optional[TreeListFilters] = None
    ) -> PaginatedResult[TreeItem]:
        return await self._list(
            TreeItem,
            f"/projects/{_seg(project_id)}/repository/tree",
            filters,
            tool="get_repository_tree",
        )

    async def compare_refs(
        self, project_id: ProjectRef, from_ref: str, to_ref: str
    ) -> Compare:
        return await self._get_one(
            Compare,
            f"/projects/{_seg(project_id)}/repository/compare",
            params={"from": from_ref, "to": to_ref},
            tool="compare_refs",
        )

    # --- Files ------------------------------------------------------------- #

    def _file_path(self, project_id: ProjectRef, file_path: str) -> str:
        return f"/projects/{_seg(project_id)}/repository/files/{_seg(file_path)}"

    async def get_file(self, project_id: ProjectRef, file_path: str, ref: str) -> File:
        return await self._get_one(
            File,
            self._file_path(project_id, file_path),
            params={"ref": ref},
            tool="get_file",
        )

    async def get_file_raw(
        self, project_id: ProjectRef, file_path: str, ref: str
    ) -> str:
        return await self.request_text(
            self._file_path(project_id, file_path) + "/raw",
            params={"ref": ref},
            tool="get_file_raw",
        )

    async def create_file(
        self, project_id: ProjectRef, file_path: str, data: FileCreateInput
    ) -> File:
        return await self._send_model(
            File,
            "POST",
            self._file_path(project_id, file_path),
            body=data,
            tool="create_file",
        )

    async def update_file(
        self, project_id: ProjectRef, file_path: str, data: FileUpdateInput
    ) -> File:
        return await self._send_model(
            File,
            "PUT",
            self._file_path(project_id, file_path),
            body=data,
            tool="update_file",
        )

    async def delete_file(
        self, project_id: ProjectRef, file_path: str, data: FileDeleteInput
    ) -> None:
        await self.request(
            "DELETE",
            self._file_path(project_id, file_path),
            json=data.to_body(),
            tool="delete_file",
        )

    # --- Merge requests ---------------------------------------------------- #

    def _mr_path(self, project_id: ProjectRef, mr_iid: Optional[int] = None) -> str:
        base = f"/projects/{_seg(project_id)}/merge_requests"
        return base if mr_iid is None else f"{base}/{_seg(mr_iid)}"

    async def list_merge_requests(
        self,
        project_id: ProjectRef,
        filters: Optional[MergeRequestListFilters] = None,
    ) -> PaginatedResult[MergeRequest]:
        return await self._list(
            MergeRequest,
            self._mr_path(project_id),
            filters,
            tool="list_merge_requests",
        )

    async def get_merge_request(
        self, project_id: ProjectRef, mr_iid: int
    ) -> MergeRequest:
        return await self._get_one(
            MergeRequest, self._mr_path(project_id, mr_iid), tool="get_merge_request"
        )

    async def create_merge_request(
        self, project_id: ProjectRef, data: MergeRequestCreateInput
    ) -> MergeRequest:
        return await self._send_model(
            MergeRequest,
            "POST",
            self._mr_path(project_id),
            body=data,
            tool="create_merge_request",
        )

    async def update_merge_request(
        self, project_id: ProjectRef, mr_iid: int, data: MergeRequestUpdateInput
    ) -> MergeRequest:
        return await self._send_model(
            MergeRequest,
            "PUT",
            self._mr_path(project_id, mr_iid),
            body=data,
            tool="update_merge_request",
        )

    async def accept_merge_request(
        self,
        project_id: ProjectRef,
        mr_iid: int,
        options: Optional[MergeRequestAcceptInput] = None,
    ) -> MergeRequest:
        return await self._send_model(
            MergeRequest,
            "PUT",
            self._mr_path(project_id, mr_iid) + "/merge",
            body=options,
            tool="accept_merge_request",
        )

    async def approve_merge_request(self, project_id: ProjectRef, mr_iid: int) -> None:
        await self.request(
            "POST",
            self._mr_path(project_id, mr_iid) + "/approve",
            tool="approve_merge_request",
        )

    async def rebase_merge_request(self, project_id: ProjectRef, mr_iid: int) -> None:
        await self.request(
            "PUT",
            self._mr_path(project_id, mr_iid) + "/rebase",
            tool="rebase_merge_request",
        )

    async def get_merge_request_diff(
        self, project_id: ProjectRef, mr_iid: int
    ) -> List[Diff]:
        payload = await self.request(
            "GET",
            self._mr_path(project_id, mr_iid) + "/changes",
            tool="get_merge_request_diff",
        )
        if not isinstance(payload, dict):
            raise GitLabParseError("Expected merge request changes object")
        return self._models(Diff, payload.get("changes") or [])

    # --- Issues ------------------------------------------------------------ #

    def _issue_path(self, project_id: ProjectRef, issue_iid: Optional[int] = None) -> str:
        base = f"/projects/{_seg(project_id)}/issues"
        return base if issue_iid is None else f"{base}/{_seg(issue_iid)}"

    async def list_issues(
        self, project_id: ProjectRef, filters: Optional[IssueListFilters] = None
    ) -> PaginatedResult[Issue]:
        return await self._list(
            Issue, self._issue_path(project_id), filters, tool="list_issues"
        )

    async def get_issue(self, project_id: ProjectRef, issue_iid: int) -> Issue:
        return await self._get_one(
            Issue, self._issue_path(project_id, issue_iid), tool="get_issue"
        )

    async def create_issue(self, project_id: ProjectRef, data: IssueCreateInput) -> Issue:
        return await self._send_model(
            Issue, "POST", self._issue_path(project_id), body=data, tool="create_issue"
        )

    async def update_issue(
        self, project_id: ProjectRef, issue_iid: int, data: IssueUpdateInput
    ) -> Issue:
        return await self._send_model(
            Issue,
            "PUT",
            self._issue_path(project_id, issue_iid),
            body=data,
            tool="update_issue",
        )

    async def delete_issue(self, project_id: ProjectRef, issue_iid: int) -> None:
        await self.request(
            "DELETE", self._issue_path(project_id, issue_iid), tool="delete_issue"
        )

    # --- Notes ------------------------------------------------------------- #

    async def list_issue_notes(
        self,
        project_id: ProjectRef,
        issue_iid: int,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResult[Note]:
        return await self._list(
            Note,
            self._issue_path(project_id, issue_iid) + "/notes",
            pagination,
            tool="list_issue_notes",
        )

    async def create_issue_note(
        self, project_id: ProjectRef, issue_iid: int, data: NoteCreateInput
    ) -> Note:
        return await self._send_model(
            Note,
            "POST",
            self._issue_path(project_id, issue_iid) + "/notes",
            body=data,
            tool="create_issue_note",
        )

    async def list_merge_request_notes(
        self,
        project_id: ProjectRef,
        mr_iid: int,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResult[Note]:
        return await self._list(
            Note,
            self._mr_path(project_id, mr_iid) + "/notes",
            pagination,
            tool="list_merge_request_notes",
        )

    async def create_merge_request_note(
        self, project_id: ProjectRef, mr_iid: int, data: NoteCreateInput
    ) -> Note:
        return await self._send_model(
            Note,
            "POST",
            self._mr_path(project_id, mr_iid) + "/notes",
            body=data,
            tool="create_merge_request_note",
        )

    # --- Labels ------------------------------------------------------------ #

    async def list_labels(
        self, project_id: ProjectRef, filters: Optional[SearchFilters] = None
    ) -> PaginatedResult[Label]:
        return await self._list(
            Label, f"/projects/{_seg(project_id)}/labels", filters, tool="list_labels"
        )

    async def get_label(self, project_id: ProjectRef, label_id: Union[int, str]) -> Label:
        return await self._get_one(
            Label,
            f"/projects/{_seg(project_id)}/labels/{_seg(label_id)}",
            tool="get_label",
        )

    async def create_label(self, project_id: ProjectRef, data: LabelCreateInput) -> Label:
        return await self._send_model(
            Label,
            "POST",
            f"/projects/{_seg(project_id)}/labels",
            body=data,
            tool="create_label",
        )

    async def update_label(
        self, project_id: ProjectRef, label_id: Union[int, str], data: LabelUpdateInput
    ) -> Label:
        return await self._send_model(
            Label,
            "PUT",
            f"/projects/{_seg(project_id)}/labels/{_seg(label_id)}",
            body=data,
            tool="update_label",
        )

    async def delete_label(self, project_id: ProjectRef, label_id: Union[int, str]) -> None:
        await self.request(
            "DELETE",
            f"/projects/{_seg(project_id)}/labels/{_seg(label_id)}",
            tool="delete_label",
        )

    # --- Pipelines --------------------------------------------------------- #

    def _pipeline_path(
        self, project_id: ProjectRef, pipeline_id: Optional[int] = None
    ) -> str:
        base = f"/projects/{_seg(project_id)}/pipelines"
        return base if pipeline_id is None else f"{base}/{_seg(pipeline_id)}"

    async def list_pipelines(
        self, project_id: ProjectRef, filters: Optional[PipelineListFilters] = None
    ) -> PaginatedResult[Pipeline]:
        return await self._list(
            Pipeline, self._pipeline_path(project_id), filters, tool="list_pipelines"
        )

    async def get_pipeline(self, project_id: ProjectRef, pipeline_id: int) -> Pipeline:
        return await self._get_one(
            Pipeline, self._pipeline_path(project_id, pipeline_id), tool="get_pipeline"
        )

    async def create_pipeline(
        self, project_id: ProjectRef, data: PipelineCreateInput
    ) -> Pipeline:
        # singular "pipeline" is the trigger endpoint
        return await self._send_model(
            Pipeline,
            "POST",
            f"/projects/{_seg(project_id)}/pipeline",
            body=data,
            tool="create_pipeline",
        )

    async def retry_pipeline(self, project_id: ProjectRef, pipeline_id: int) -> Pipeline:
        return await self._send_model(
            Pipeline,
            "POST",
            self._pipeline_path(project_id, pipeline_id) + "/retry",
            tool="retry_pipeline",
        )

    async def cancel_pipeline(self, project_id: ProjectRef, pipeline_id: int) -> Pipeline:
        return await self._send_model(
            Pipeline,
            "POST",
            self._pipeline_path(project_id, pipeline_id) + "/cancel",
            tool="cancel_pipeline",
        )

    async def delete_pipeline(self, project_id: ProjectRef, pipeline_id: int) -> None:
        await self.request(
            "DELETE",
            self._pipeline_path(project_id, pipeline_id),
            tool="delete_pipeline",
        )

    # --- Jobs -------------------------------------------------------------- #

    def _job_path(self, project_id: ProjectRef, job_id: int) -> str:
        return f"/projects/{_seg(project_id)}/jobs/{_seg(job_id)}"

    async def list_pipeline_jobs(
        self,
        project_id: ProjectRef,
        pipeline_id: int,
        filters: Optional[JobListFilters] = None,
    ) -> PaginatedResult[Job]:
        return await self._list(
            Job,
            self._pipeline_path(project_id, pipeline_id) + "/jobs",
            filters,
            tool="list_pipeline_jobs",
        )

    async def get_job(self, project_id: ProjectRef, job_id: int) -> Job:
        return await self._get_one(Job, self._job_path(project_id, job_id), tool="get_job")

    async def get_job_log(self, project_id: ProjectRef, job_id: int) -> str:
        return await self.request_text(
            self._job_path(project_id, job_id) + "/trace", tool="get_job_log"
        )

    async def retry_job(self, project_id: ProjectRef, job_id: int) -> Job:
        return await self._send_model(
            Job, "POST", self._job_path(project_id, job_id) + "/retry", tool="retry_job"
        )

    async def cancel_job(self, project_id: ProjectRef, job_id: int) -> Job:
        return await self._send_model(
            Job,
            "POST",
            self._job_path(project_id, job_id) + "/cancel",
            tool="cancel_job",
        )

    async def play_job(self, project_id: ProjectRef, job_id: int) -> Job:
        return await self._send_model(
            Job, "POST", self._job_path(project_id, job_id) + "/play", tool="play_job"
        )

    # --- Releases ---------------------------------------------------------- #

    async def list_releases(
        self, project_id: ProjectRef, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResult[Release]:
        return await self._list(
            Release,
            f"/projects/{_seg(project_id)}/releases",
            pagination,
            tool="list_releases",
        )

    async def get_release(self, project_id: ProjectRef, tag_name: str) -> Release:
        return await self._get_one(
            Release,
            f"/projects/{_seg(project_id)}/releases/{_seg(tag_name)}",
            tool="get_release",
        )

    async def create_release(
        self, project_id: ProjectRef, data: ReleaseCreateInput
    ) -> Release:
        return await self._send_model(
            Release,
            "POST",
            f"/projects/{_seg(project_id)}/releases",
            body=data,
            tool="create_release",
        )

    async def update_release(
        self, project_id: ProjectRef, tag_name: str, data: ReleaseUpdateInput
    ) -> Release:
        return await self._send_model(
            Release,
            "PUT",
            f"/projects/{_seg(project_id)}/releases/{_seg(tag_name)}",
            body=data,
            tool="update_release",
        )

    async def delete_release(self, project_id: ProjectRef, tag_name: str) -> None:
        await self.request(
            "DELETE",
            f"/projects/{_seg(project_id)}/releases/{_seg(tag_name)}",
            tool="delete_release",
        )

    # --- Groups ------------------------------------------------------------ #

    async def list_groups(
        self, filters: Optional[GroupListFilters] = None
    ) -> PaginatedResult[Group]:
        return await self._list(Group, "/groups", filters, tool="list_groups")

    async def get_group(self, group_id: GroupRef) -> Group:
        return await self._get_one(Group, f"/groups/{_seg(group_id)}", tool="get_group")

    async def create_group(self, data: GroupCreateInput) -> Group:
        return await self._send_model(
            Group, "POST", "/groups", body=data, tool="create_group"
        )

    async def update_group(self, group_id: GroupRef, data: GroupUpdateInput) -> Group:
        return await self._send_model(
            Group, "PUT", f"/groups/{_seg(group_id)}", body=data, tool="update_group"
        )

    async def delete_group(self, group_id: GroupRef) -> None:
        await self.request("DELETE", f"/groups/{_seg(group_id)}", tool="delete_group")

    async def list_group_projects(
        self, group_id: GroupRef, filters: Optional[GroupProjectListFilters] = None
    ) -> PaginatedResult[Project]:
        return await self._list(
            Project,
            f"/groups/{_seg(group_id)}/projects",
            filters,
            tool="list_group_projects",
        )

    # --- Users ------------------------------------------------------------- #

    async def list_users(
        self, filters: Optional[UserListFilters] = None
    ) -> PaginatedResult[User]:
        return await self._list(User, "/users", filters, tool="list_users")

    async def get_user(self, user_id: int) -> User:
        return await self._get_one(User, f"/users/{_seg(user_id)}", tool="get_user")

    # --- Members ----------------------------------------------------------- #

    async def list_project_members(
        self, project_id: ProjectRef, filters: Optional[SearchFilters] = None
    ) -> PaginatedResult[Member]:
        return await self._list(
            Member,
            f"/projects/{_seg(project_id)}/members",
            filters,
            tool="list_project_members",
        )

    async def add_project_member(
        self, project_id: ProjectRef, data: MemberAddInput
    ) -> Member:
        return await self._send_model(
            Member,
            "POST",
            f"/projects/{_seg(project_id)}/members",
            body=data,
            tool="add_project_member",
        )

    async def update_project_member(
        self, project_id: ProjectRef, user_id: int, data: MemberUpdateInput
    ) -> Member:
        return await self._send_model(
            Member,
            "PUT",
            f"/projects/{_seg(project_id)}/members/{_seg(user_id)}",
            body=data,
            tool="update_project_member",
        )

    async def remove_project_member(self, project_id: ProjectRef, user_id: int) -> None:
        await self.request(
            "DELETE",
            f"/projects/{_seg(project_id)}/members/{_seg(user_id)}",
            tool="remove_project_member",
        )

    # --- CI/CD variables --------------------------------------------------- #

    async def list_project_variables(
        self, project_id: ProjectRef, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResult[Variable]:
        return await self._list(
            Variable,
            f"/projects/{_seg(project_id)}/variables",
            pagination,
            tool="list_project_variables",
        )

    async def get_project_variable(self, project_id: ProjectRef, key: str) -> Variable:
        return await self._get_one(
            Variable,
            f"/projects/{_seg(project_id)}/variables/{_seg(key)}",
            tool="get_project_variable",
        )

    async def create_project_variable(
        self, project_id: ProjectRef, data: VariableCreateInput
    ) -> Variable:
        return await self._send_model(
            Variable,
            "POST",
            f"/projects/{_seg(project_id)}/variables",
            body=data,
            tool="create_project_variable",
        )

    async def update_project_variable(
        self, project_id: ProjectRef, key: str, data: VariableUpdateInput
    ) -> Variable:
        return await self._send_model(
            Variable,
            "PUT",
            f"/projects/{_seg(project_id)}/variables/{_seg(key)}",
            body=data,
            tool="update_project_variable",
        )

    async def delete_project_variable(self, project_id: ProjectRef, key: str) -> None:
        await self.request(
            "DELETE",
            f"/projects/{_seg(project_id)}/variables/{_seg(key)}",
            tool="delete_project_variable",
        )

    # --- Webhooks / runners ------------------------------------------------ #

    async def list_project_webhooks(
        self, project_id: ProjectRef, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResult[Webhook]:
        return await self._list(
            Webhook,
            f"/projects/{_seg(project_id)}/hooks",
            pagination,
            tool="list_project_webhooks",
        )

    async def create_project_webhook(
        self, project_id: ProjectRef, data: WebhookCreateInput
    ) -> Webhook:
        return await self._send_model(
            Webhook,
            "POST",
            f"/projects/{_seg(project_id)}/hooks",
            body=data,
            tool="create_project_webhook",
        )

    async def delete_project_webhook(self, project_id: ProjectRef, hook_id: int) -> None:
        await self.request(
            "DELETE",
            f"/projects/{_seg(project_id)}/hooks/{_seg(hook_id)}",
            tool="delete_project_webhook",
        )

    async def list_project_runners(
        self, project_id: ProjectRef, filters: Optional[RunnerListFilters] = None
    ) -> PaginatedResult[Runner]:
        return await self._list(
            Runner,
            f"/projects/{_seg(project_id)}/runners",
            filters,
            tool="list_project_runners",
        )


__all__ = ["GitLabClient", "ProjectRef", "GroupRef", "build_query", "to_snake_case"]
