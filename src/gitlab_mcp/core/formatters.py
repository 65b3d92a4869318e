"""Markdown rendering for GitLab entities and paginated lists."""

from __future__ import annotations

import base64
import binascii
from typing import Any, Iterable, List, Optional, Sequence

from .models import (
    Branch,
    Commit,
    Compare,
    Diff,
    File,
    Group,
    Issue,
    Job,
    Label,
    Member,
    MergeRequest,
    Note,
    Pipeline,
    Project,
    Release,
    Runner,
    Tag,
    TreeItem,
    User,
    Variable,
    Webhook,
)
from .pagination import PaginatedResult

DEFAULT_CHARACTER_LIMIT = 50000

ACCESS_LEVELS = {
    0: "No access",
    5: "Minimal",
    10: "Guest",
    15: "Planner",
    20: "Reporter",
    30: "Developer",
    40: "Maintainer",
    50: "Owner",
}


def _yes_no(value: Optional[bool]) -> str:
    return "Yes" if value else "No"


def _first_line(text: Optional[str], default: str = "No message") -> str:
    if not text:
        return default
    return text.splitlines()[0] if text.strip() else default


def _short_sha(sha: Optional[str]) -> str:
    return (sha or "")[:8]


def _cell(value: Any) -> str:
    if value is None or value == "":
        return "-"
    return str(value).replace("|", "\\|").replace("\n", " ")


def _user_name(user: Optional[User], default: str = "Unknown") -> str:
    if user is None:
        return default
    return user.name or user.username or default


def access_level_name(level: Optional[int]) -> str:
    if level is None:
        return "-"
    return f"{ACCESS_LEVELS.get(level, 'Custom')} ({level})"


def pagination_info(page: PaginatedResult[Any]) -> str:
    lines: List[str] = []
    if page.total is not None:
        lines.append(
            f"**Total:** {page.total} | **Page:** {page.page or 1}/{page.total_pages or 1}"
        )
    else:
        lines.append(f"**Showing:** {page.count}")
    if page.has_more and page.next_page:
        lines.append(f"**Next Page:** {page.next_page}")
    return "\n".join(lines)


def _table(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> List[str]:
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "---|" * len(headers),
    ]
    for row in rows:
        lines.append("| " + " | ".join(_cell(v) for v in row) + " |")
    return lines


def _list_page(
    title: str,
    page: PaginatedResult[Any],
    noun: str,
    body: List[str],
) -> str:
    lines = [f"# {title}", "", pagination_info(page), ""]
    if not page.items:
        lines.append(f"_No {noun} found._")
    else:
        lines.extend(body)
    return "\n".join(lines)


def truncate(text: str, limit: int = DEFAULT_CHARACTER_LIMIT) -> str:
    """Clip tool output to `limit` characters, appending a notice when cut."""
    if limit <= 0 or len(text) <= limit:
        return text
    notice = (
        f"\n\n... [truncated: showing {limit} of {len(text)} characters; "
        "use pagination or narrower filters to see more]"
    )
    return text[:limit] + notice


# --- Projects ---


def format_project(project: Project) -> str:
    lines = [f"# {project.name or project.id}", ""]
    if project.description:
        lines += [project.description, ""]
    lines.append(f"**ID:** {project.id}")
    lines.append(f"**Path:** {project.path_with_namespace or project.path or '-'}")
    lines.append(f"**Visibility:** {project.visibility or '-'}")
    lines.append(f"**Default Branch:** {project.default_branch or 'N/A'}")
    if project.archived:
        lines.append("**Archived:** Yes")
    if project.web_url:
        lines.append(f"**URL:** {project.web_url}")
    if project.ssh_url_to_repo:
        lines.append(f"**SSH:** {project.ssh_url_to_repo}")
    if project.http_url_to_repo:
        lines.append(f"**HTTP:** {project.http_url_to_repo}")
    lines += [
        "",
        "## Stats",
        f"- Stars: {project.star_count or 0}",
        f"- Forks: {project.forks_count or 0}",
        f"- Open Issues: {project.open_issues_count or 0}",
    ]
    if project.topics:
        lines += ["", f"**Topics:** {', '.join(project.topics)}"]
    if project.created_at:
        lines += ["", f"**Created:** {project.created_at}"]
    if project.last_activity_at:
        lines.append(f"**Last Activity:** {project.last_activity_at}")
    return "\n".join(lines)


def format_projects(page: PaginatedResult[Project], title: str = "Projects") -> str:
    body = _table(
        ["ID", "Name", "Path", "Visibility", "Stars"],
        (
            (p.id, p.name, p.path_with_namespace, p.visibility, p.star_count or 0)
            for p in page.items
        ),
    )
    return _list_page(title, page, "projects", body)


# --- Branches / commits / tags ---


def _commit_summary(commit: Commit) -> List[str]:
    return [
        f"**SHA:** `{commit.id}`",
        f"**Message:** {_first_line(commit.message or commit.title, 'N/A')}",
        f"**Author:** {commit.author_name or '-'}",
        f"**Date:** {commit.created_at or commit.committed_date or '-'}",
    ]


def format_branch(branch: Branch) -> str:
    lines = [
        f"# Branch: {branch.name}",
        "",
        f"**Protected:** {_yes_no(branch.protected)}",
        f"**Default:** {_yes_no(branch.default)}",
        f"**Merged:** {_yes_no(branch.merged)}",
        f"**Can Push:** {_yes_no(branch.can_push)}",
    ]
    if branch.web_url:
        lines.append(f"**URL:** {branch.web_url}")
    if branch.commit:
        lines += ["", "## Latest Commit", *_commit_summary(branch.commit)]
    return "\n".join(lines)


def format_branches(page: PaginatedResult[Branch]) -> str:
    body = _table(
        ["Name", "Protected", "Default", "Merged"],
        (
            (b.name, _yes_no(b.protected), _yes_no(b.default), _yes_no(b.merged))
            for b in page.items
        ),
    )
    return _list_page("Branches", page, "branches", body)


def format_commit(commit: Commit) -> str:
    lines = [
        f"# Commit: {commit.short_id or _short_sha(commit.id)}",
        "",
        f"**SHA:** `{commit.id}`",
        "**Message:**",
        "```",
        commit.message or "No message",
        "```",
        "",
        f"**Author:** {commit.author_name or '-'} <{commit.author_email or '-'}>",
        f"**Date:** {commit.created_at or commit.authored_date or '-'}",
    ]
    if commit.committer_name and commit.committer_name != commit.author_name:
        lines.append(
            f"**Committer:** {commit.committer_name} <{commit.committer_email or '-'}>"
        )
    if commit.parent_ids:
        parents = ", ".join(f"`{_short_sha(p)}`" for p in commit.parent_ids)
        lines.append(f"**Parents:** {parents}")
    if commit.web_url:
        lines.append(f"**URL:** {commit.web_url}")
    if commit.stats:
        lines += [
            "",
            "## Stats",
            f"- Additions: {commit.stats.additions}",
            f"- Deletions: {commit.stats.deletions}",
            f"- Total: {commit.stats.total}",
        ]
    return "\n".join(lines)


def format_commits(page: PaginatedResult[Commit]) -> str:
    body = [
        f"- **`{c.short_id or _short_sha(c.id)}`** {_first_line(c.message or c.title)}"
        f" - _{c.author_name or 'Unknown'}_ ({c.created_at or '-'})"
        for c in page.items
    ]
    return _list_page("Commits", page, "commits", body)


def format_tag(tag: Tag) -> str:
    lines = [f"# Tag: {tag.name}", ""]
    if tag.message:
        lines += [f"**Message:** {tag.message}", ""]
    lines.append(f"**Target:** `{tag.target or '-'}`")
    lines.append(f"**Protected:** {_yes_no(tag.protected)}")
    if tag.commit:
        lines += ["", "## Commit", *_commit_summary(tag.commit)]
    if tag.release:
        lines += ["", "## Release", f"**Name:** {tag.release.tag_name or '-'}"]
        if tag.release.description:
            lines.append(f"**Description:** {tag.release.description}")
    return "\n".join(lines)


def format_tags(page: PaginatedResult[Tag]) -> str:
    body = _table(
        ["Name", "Target", "Protected", "Message"],
        (
            (
                t.name,
                f"`{_short_sha(t.target)}`" if t.target else None,
                _yes_no(t.protected),
                _first_line(t.message, "-"),
            )
            for t in page.items
        ),
    )
    return _list_page("Tags", page, "tags", body)


# --- Repository ---


def _decoded_content(file: File) -> str:
    content = file.content or ""
    if file.encoding != "base64":
        return content
    try:
        return base64.b64decode(content).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return content


def format_file(file: File) -> str:
    if file.file_name is None and file.content is None:
        # create/update answer with just file_path + branch
        return "\n".join(
            [
                f"**File:** {file.file_path or '-'}",
                f"**Branch:** {file.branch or '-'}",
            ]
        )
    lines = [
        f"# File: {file.file_name or file.file_path}",
        "",
        f"**Path:** {file.file_path or '-'}",
        f"**Size:** {file.size if file.size is not None else '-'} bytes",
        f"**Encoding:** {file.encoding or '-'}",
        f"**Ref:** {file.ref or '-'}",
        f"**Blob ID:** `{file.blob_id or '-'}`",
        f"**Commit ID:** `{file.commit_id or '-'}`",
        f"**Last Commit ID:** `{file.last_commit_id or '-'}`",
    ]
    if file.content:
        lines += ["", "## Content", "```", _decoded_content(file), "```"]
    return "\n".join(lines)


def format_raw_file(file_path: str, content: str) -> str:
    return f"# File: {file_path}\n\n```\n{content}\n```"


def format_tree(page: PaginatedResult[TreeItem]) -> str:
    lines = ["# Repository Tree", "", pagination_info(page), ""]
    if not page.items:
        lines.append("_No items found._")
        return "\n".join(lines)

    trees = [i for i in page.items if i.type == "tree"]
    blobs = [i for i in page.items if i.type != "tree"]
    if trees:
        lines.append("## Directories")
        lines += [f"- {item.path}/" for item in trees]
        lines.append("")
    if blobs:
        lines.append("## Files")
        lines += [f"- {item.path}" for item in blobs]
    return "\n".join(lines)


def _diff_status(diff: Diff) -> Optional[str]:
    if diff.new_file:
        return "new"
    if diff.deleted_file:
        return "deleted"
    if diff.renamed_file:
        return "renamed"
    return None


def format_diffs(diffs: Sequence[Diff], title: str = "Diff") -> str:
    lines = [f"# {title}", ""]
    if not diffs:
        lines.append("_No changes._")
        return "\n".join(lines)

    for diff in diffs:
        lines.append(f"## {diff.new_path or diff.old_path}")
        status = _diff_status(diff)
        if status == "renamed":
            lines.append(f"> Renamed from: {diff.old_path}")
        elif status:
            lines.append(f"> {status.capitalize()} file")
        if diff.diff:
            lines += ["", "```diff", diff.diff, "```"]
        lines.append("")
    return "\n".join(lines)


def format_compare(compare: Compare, from_ref: str, to_ref: str) -> str:
    lines = [
        f"# Compare: {from_ref}...{to_ref}",
        "",
        f"**Status:** {'Timeout' if compare.compare_timeout else 'Complete'}",
        f"**Same Ref:** {_yes_no(compare.compare_same_ref)}",
        f"**Commits:** {len(compare.commits)}",
        f"**Files Changed:** {len(compare.diffs)}",
    ]
    if compare.commits:
        lines += ["", "## Commits"]
        for c in compare.commits:
            lines.append(
                f"- **`{c.short_id or _short_sha(c.id)}`** {_first_line(c.message or c.title)}"
            )
    if compare.diffs:
        lines += ["", "## Files Changed"]
        for diff in compare.diffs:
            status = _diff_status(diff)
            suffix = f" [{status}]" if status else ""
            lines.append(f"- {diff.new_path or diff.old_path}{suffix}")
    return "\n".join(lines)


# --- Merge requests / issues / notes ---


def format_merge_request(mr: MergeRequest) -> str:
    lines = [f"# MR !{mr.iid}: {mr.title or ''}".rstrip(), ""]
    if mr.draft or mr.work_in_progress:
        lines += ["> **Draft**", ""]
    lines.append(f"**State:** {mr.state or '-'}")
    lines.append(f"**Source:** {mr.source_branch or '-'} -> **Target:** {mr.target_branch or '-'}")
    lines.append(f"**Author:** {_user_name(mr.author)}")
    if mr.assignees:
        lines.append(f"**Assignees:** {', '.join(_user_name(a) for a in mr.assignees)}")
    elif mr.assignee:
        lines.append(f"**Assignee:** {_user_name(mr.assignee)}")
    if mr.reviewers:
        lines.append(f"**Reviewers:** {', '.join(_user_name(r) for r in mr.reviewers)}")
    if mr.labels:
        lines.append(f"**Labels:** {', '.join(mr.labels)}")
    if mr.milestone and mr.milestone.title:
        lines.append(f"**Milestone:** {mr.milestone.title}")
    if mr.web_url:
        lines += ["", f"**URL:** {mr.web_url}"]
    lines.append("")
    if mr.description:
        lines += ["## Description", mr.description, ""]
    lines += [
        "## Stats",
        f"- Changes: {mr.changes_count or 0}",
        f"- Merge Status: {mr.merge_status or 'unknown'}",
    ]
    if mr.has_conflicts is not None:
        lines.append(f"- Has Conflicts: {_yes_no(mr.has_conflicts)}")
    lines.append("")
    if mr.created_at:
        lines.append(f"**Created:** {mr.created_at}")
    if mr.updated_at:
        lines.append(f"**Updated:** {mr.updated_at}")
    if mr.merged_at:
        lines.append(f"**Merged:** {mr.merged_at}")
    return "\n".join(lines).rstrip()


def format_merge_requests(page: PaginatedResult[MergeRequest]) -> str:
    body = _table(
        ["IID", "Title", "State", "Author", "Source -> Target"],
        (
            (
                f"!{mr.iid}",
                f"[Draft] {mr.title}" if mr.draft else mr.title,
                mr.state,
                mr.author.username if mr.author else "Unknown",
                f"{mr.source_branch} -> {mr.target_branch}",
            )
            for mr in page.items
        ),
    )
    return _list_page("Merge Requests", page, "merge requests", body)


def format_issue(issue: Issue) -> str:
    lines = [f"# Issue #{issue.iid}: {issue.title or ''}".rstrip(), ""]
    if issue.confidential:
        lines += ["> **Confidential**", ""]
    lines.append(f"**State:** {issue.state or '-'}")
    lines.append(f"**Author:** {_user_name(issue.author)}")
    if issue.assignees:
        lines.append(
            f"**Assignees:** {', '.join(_user_name(a) for a in issue.assignees)}"
        )
    elif issue.assignee:
        lines.append(f"**Assignee:** {_user_name(issue.assignee)}")
    if issue.labels:
        lines.append(f"**Labels:** {', '.join(issue.labels)}")
    if issue.milestone and issue.milestone.title:
        lines.append(f"**Milestone:** {issue.milestone.title}")
    if issue.due_date:
        lines.append(f"**Due Date:** {issue.due_date}")
    if issue.weight is not None:
        lines.append(f"**Weight:** {issue.weight}")
    if issue.web_url:
        lines += ["", f"**URL:** {issue.web_url}"]
    lines.append("")
    if issue.description:
        lines += ["## Description", issue.description, ""]
    if issue.created_at:
        lines.append(f"**Created:** {issue.created_at}")
    if issue.updated_at:
        lines.append(f"**Updated:** {issue.updated_at}")
    if issue.closed_at:
        lines.append(f"**Closed:** {issue.closed_at}")
    return "\n".join(lines).rstrip()


def format_issues(page: PaginatedResult[Issue]) -> str:
    body = _table(
        ["IID", "Title", "State", "Author", "Labels"],
        (
            (
                f"#{i.iid}",
                f"[Confidential] {i.title}" if i.confidential else i.title,
                i.state,
                i.author.username if i.author else "Unknown",
                ", ".join(i.labels),
            )
            for i in page.items
        ),
    )
    return _list_page("Issues", page, "issues", body)


def format_note(note: Note) -> str:
    lines = [
        f"## Note #{note.id}",
        "",
        f"**Author:** {_user_name(note.author)}",
        f"**Created:** {note.created_at or '-'}",
    ]
    if note.updated_at and note.updated_at != note.created_at:
        lines.append(f"**Updated:** {note.updated_at}")
    if note.system:
        lines.append("**Type:** System Note")
    if note.internal or note.confidential:
        lines.append("**Internal:** Yes")
    lines += ["", note.body or ""]
    return "\n".join(lines)


def format_notes(page: PaginatedResult[Note]) -> str:
    body: List[str] = []
    for note in page.items:
        body += ["---", format_note(note), ""]
    return _list_page("Notes", page, "notes", body)


# --- Labels ---


def format_label(label: Label) -> str:
    lines = [
        f"# Label: {label.name}",
        "",
        f"**ID:** {label.id}",
        f"**Color:** {label.color or '-'}",
    ]
    if label.description:
        lines.append(f"**Description:** {label.description}")
    if label.priority is not None:
        lines.append(f"**Priority:** {label.priority}")
    if label.open_issues_count is not None:
        lines.append(f"**Open Issues:** {label.open_issues_count}")
    if label.open_merge_requests_count is not None:
        lines.append(f"**Open Merge Requests:** {label.open_merge_requests_count}")
    return "\n".join(lines)


def format_labels(page: PaginatedResult[Label]) -> str:
    body = _table(
        ["ID", "Name", "Color", "Description"],
        ((lbl.id, lbl.name, lbl.color, lbl.description) for lbl in page.items),
    )
    return _list_page("Labels", page, "labels", body)


# --- Pipelines / jobs ---


def _duration(seconds: Optional[float]) -> Optional[str]:
    if not seconds:
        return None
    return f"{seconds:g}s"


def format_pipeline(pipeline: Pipeline) -> str:
    lines = [
        f"# Pipeline #{pipeline.id}",
        "",
        f"**Status:** {pipeline.status or '-'}",
        f"**Ref:** {pipeline.ref or '-'}",
        f"**SHA:** `{pipeline.sha or '-'}`",
    ]
    if pipeline.source:
        lines.append(f"**Source:** {pipeline.source}")
    if pipeline.user:
        lines.append(f"**Triggered by:** {_user_name(pipeline.user)}")
    if pipeline.web_url:
        lines += ["", f"**URL:** {pipeline.web_url}"]
    lines.append("")
    if pipeline.created_at:
        lines.append(f"**Created:** {pipeline.created_at}")
    if pipeline.started_at:
        lines.append(f"**Started:** {pipeline.started_at}")
    if pipeline.finished_at:
        lines.append(f"**Finished:** {pipeline.finished_at}")
    if _duration(pipeline.duration):
        lines.append(f"**Duration:** {_duration(pipeline.duration)}")
    if pipeline.coverage:
        lines.append(f"**Coverage:** {pipeline.coverage}%")
    return "\n".join(lines).rstrip()


def format_pipelines(page: PaginatedResult[Pipeline]) -> str:
    body = _table(
        ["ID", "Status", "Ref", "SHA", "Source", "Duration"],
        (
            (
                p.id,
                p.status,
                p.ref,
                f"`{_short_sha(p.sha)}`" if p.sha else None,
                p.source,
                _duration(p.duration),
            )
            for p in page.items
        ),
    )
    return _list_page("Pipelines", page, "pipelines", body)


def format_job(job: Job) -> str:
    lines = [
        f"# Job: {job.name or '-'} (#{job.id})",
        "",
        f"**Status:** {job.status or '-'}",
        f"**Stage:** {job.stage or '-'}",
        f"**Ref:** {job.ref or '-'}",
    ]
    if job.tag is not None:
        lines.append(f"**Is Tag:** {_yes_no(job.tag)}")
    if job.allow_failure:
        lines.append("**Allow Failure:** Yes")
    if job.failure_reason:
        lines.append(f"**Failure Reason:** {job.failure_reason}")
    if job.user:
        lines.append(f"**Triggered by:** {_user_name(job.user)}")
    if job.pipeline and job.pipeline.id is not None:
        lines.append(f"**Pipeline:** #{job.pipeline.id}")
    if job.web_url:
        lines += ["", f"**URL:** {job.web_url}"]
    lines.append("")
    if job.created_at:
        lines.append(f"**Created:** {job.created_at}")
    if job.started_at:
        lines.append(f"**Started:** {job.started_at}")
    if job.finished_at:
        lines.append(f"**Finished:** {job.finished_at}")
    if _duration(job.duration):
        lines.append(f"**Duration:** {_duration(job.duration)}")
    if job.runner:
        lines += ["", "## Runner", f"- ID: {job.runner.id}"]
        if job.runner.description:
            lines.append(f"- Description: {job.runner.description}")
    return "\n".join(lines).rstrip()


def format_jobs(page: PaginatedResult[Job]) -> str:
    body = _table(
        ["ID", "Name", "Stage", "Status", "Duration"],
        ((j.id, j.name, j.stage, j.status, _duration(j.duration)) for j in page.items),
    )
    return _list_page("Jobs", page, "jobs", body)


def format_job_log(job_id: int, log: str) -> str:
    if not log:
        return f"# Job #{job_id} Log\n\n_Log is empty._"
    return f"# Job #{job_id} Log\n\n```\n{log}\n```"


# --- Releases ---


def format_release(release: Release) -> str:
    lines = [f"# Release: {release.name or release.tag_name}", "", f"**Tag:** {release.tag_name}"]
    if release.description:
        lines += ["", "## Description", release.description]
    if release.author:
        lines += ["", f"**Author:** {_user_name(release.author)}"]
    lines.append("")
    if release.created_at:
        lines.append(f"**Created:** {release.created_at}")
    if release.released_at:
        lines.append(f"**Released:** {release.released_at}")
    if release.milestones:
        titles = ", ".join(m.title or str(m.id) for m in release.milestones)
        lines.append(f"**Milestones:** {titles}")
    if release.assets and release.assets.links:
        lines += ["", "## Assets"]
        lines += [f"- [{link.name}]({link.url})" for link in release.assets.links]
    return "\n".join(lines).rstrip()


def format_releases(page: PaginatedResult[Release]) -> str:
    body = _table(
        ["Tag", "Name", "Created", "Released"],
        ((r.tag_name, r.name, r.created_at, r.released_at) for r in page.items),
    )
    return _list_page("Releases", page, "releases", body)


# --- Groups / users / members ---


def format_group(group: Group) -> str:
    lines = [f"# {group.name or group.id}", ""]
    if group.description:
        lines += [group.description, ""]
    lines.append(f"**ID:** {group.id}")
    lines.append(f"**Path:** {group.full_path or group.path or '-'}")
    lines.append(f"**Visibility:** {group.visibility or '-'}")
    if group.web_url:
        lines.append(f"**URL:** {group.web_url}")
    if group.parent_id:
        lines.append(f"**Parent ID:** {group.parent_id}")
    if group.created_at:
        lines += ["", f"**Created:** {group.created_at}"]
    if group.projects:
        lines += ["", f"## Projects ({len(group.projects)})"]
        lines += [
            f"- {p.path_with_namespace or p.name} (ID: {p.id})" for p in group.projects
        ]
    return "\n".join(lines)


def format_groups(page: PaginatedResult[Group]) -> str:
    body = _table(
        ["ID", "Name", "Path", "Visibility"],
        ((g.id, g.name, g.full_path, g.visibility) for g in page.items),
    )
    return _list_page("Groups", page, "groups", body)


def format_user(user: User) -> str:
    lines = [
        f"# {user.name or user.username}",
        "",
        f"**Username:** @{user.username}",
        f"**ID:** {user.id}",
        f"**State:** {user.state or '-'}",
    ]
    if user.email:
        lines.append(f"**Email:** {user.email}")
    if user.web_url:
        lines.append(f"**Profile:** {user.web_url}")
    if user.location:
        lines.append(f"**Location:** {user.location}")
    if user.bio:
        lines += ["", "## Bio", user.bio]
    if user.created_at:
        lines += ["", f"**Created:** {user.created_at}"]
    return "\n".join(lines)


def format_users(page: PaginatedResult[User]) -> str:
    body = _table(
        ["ID", "Username", "Name", "State"],
        ((u.id, f"@{u.username}", u.name, u.state) for u in page.items),
    )
    return _list_page("Users", page, "users", body)


def format_member(member: Member) -> str:
    lines = [
        f"# Member: {member.name or member.username}",
        "",
        f"**Username:** @{member.username}",
        f"**ID:** {member.id}",
        f"**Access Level:** {access_level_name(member.access_level)}",
        f"**State:** {member.state or '-'}",
    ]
    if member.web_url:
        lines.append(f"**Profile:** {member.web_url}")
    if member.expires_at:
        lines.append(f"**Expires:** {member.expires_at}")
    return "\n".join(lines)


def format_members(page: PaginatedResult[Member]) -> str:
    body = _table(
        ["ID", "Username", "Name", "Access Level", "Expires"],
        (
            (
                m.id,
                f"@{m.username}",
                m.name,
                access_level_name(m.access_level),
                m.expires_at,
            )
            for m in page.items
        ),
    )
    return _list_page("Members", page, "members", body)


# --- Variables / webhooks / runners ---


def format_variable(variable: Variable) -> str:
    value = "***MASKED***" if variable.masked else variable.value
    lines = [
        f"# Variable: {variable.key}",
        "",
        f"**Value:** {value if value is not None else '-'}",
        f"**Protected:** {_yes_no(variable.protected)}",
        f"**Masked:** {_yes_no(variable.masked)}",
        f"**Type:** {variable.variable_type or 'env_var'}",
    ]
    if variable.environment_scope:
        lines.append(f"**Environment Scope:** {variable.environment_scope}")
    if variable.description:
        lines.append(f"**Description:** {variable.description}")
    return "\n".join(lines)


def format_variables(page: PaginatedResult[Variable]) -> str:
    body = _table(
        ["Key", "Protected", "Masked", "Type", "Scope"],
        (
            (
                v.key,
                _yes_no(v.protected),
                _yes_no(v.masked),
                v.variable_type or "env_var",
                v.environment_scope or "*",
            )
            for v in page.items
        ),
    )
    return _list_page("Variables", page, "variables", body)


_WEBHOOK_EVENTS = (
    ("push_events", "push"),
    ("tag_push_events", "tag push"),
    ("issues_events", "issues"),
    ("merge_requests_events", "merge requests"),
    ("note_events", "notes"),
    ("job_events", "jobs"),
    ("pipeline_events", "pipelines"),
    ("wiki_page_events", "wiki"),
    ("deployment_events", "deployments"),
    ("releases_events", "releases"),
)


def _webhook_events(hook: Webhook) -> str:
    return ", ".join(label for attr, label in _WEBHOOK_EVENTS if getattr(hook, attr))


def format_webhook(hook: Webhook) -> str:
    lines = [
        f"# Webhook #{hook.id}",
        "",
        f"**URL:** {hook.url or '-'}",
        f"**Events:** {_webhook_events(hook) or '-'}",
        f"**SSL Verification:** {_yes_no(hook.enable_ssl_verification)}",
    ]
    if hook.push_events_branch_filter:
        lines.append(f"**Branch Filter:** {hook.push_events_branch_filter}")
    if hook.created_at:
        lines.append(f"**Created:** {hook.created_at}")
    return "\n".join(lines)


def format_webhooks(page: PaginatedResult[Webhook]) -> str:
    body = _table(
        ["ID", "URL", "Events", "SSL"],
        (
            (h.id, h.url, _webhook_events(h), _yes_no(h.enable_ssl_verification))
            for h in page.items
        ),
    )
    return _list_page("Webhooks", page, "webhooks", body)


def format_runners(page: PaginatedResult[Runner]) -> str:
    body = _table(
        ["ID", "Description", "Type", "Status", "Shared", "Tags"],
        (
            (
                r.id,
                r.description or r.name,
                r.runner_type,
                r.status,
                _yes_no(r.is_shared),
                ", ".join(r.tag_list),
            )
            for r in page.items
        ),
    )
    return _list_page("Runners", page, "runners", body)
