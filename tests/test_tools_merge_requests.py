import json

import pytest
import respx
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.credentials import BearerToken, TenantCredentials
from gitlab_mcp.core.errors import RateLimitError
from gitlab_mcp.core.tools.issues import (
    gitlab_create_issue,
    gitlab_create_issue_note,
    gitlab_delete_issue,
    gitlab_list_issues,
    gitlab_update_issue,
)
from gitlab_mcp.core.tools.merge_requests import (
    gitlab_accept_merge_request,
    gitlab_approve_merge_request,
    gitlab_create_merge_request,
    gitlab_get_merge_request_diff,
    gitlab_list_merge_requests,
    gitlab_rebase_merge_request,
)
from httpx import Response

API = "https://gitlab.example.com/api/v4"

MR = {
    "id": 101,
    "iid": 7,
    "title": "Add feature",
    "state": "opened",
    "source_branch": "feature",
    "target_branch": "main",
    "author": {"id": 1, "username": "dev", "name": "Dev"},
}


@pytest.fixture
def client():
    return GitLabClient(TenantCredentials(auth=BearerToken("oauth-test"), base_url=API))


@pytest.mark.asyncio
@respx.mock
async def test_list_merge_requests_filters(client):
    route = respx.get(f"{API}/projects/5/merge_requests").mock(
        return_value=Response(
            200,
            json=[MR],
            headers={"X-Total": "30", "X-Total-Pages": "2", "X-Page": "1", "X-Next-Page": "2"},
        )
    )

    text = await gitlab_list_merge_requests(client, 5, state="opened", author_id=1)

    assert "**Total:** 30 | **Page:** 1/2" in text
    assert "**Next Page:** 2" in text
    assert "Add feature" in text
    params = route.calls[0].request.url.params
    assert params["state"] == "opened"
    assert params["author_id"] == "1"
    assert route.calls[0].request.headers["Authorization"] == "Bearer oauth-test"


@pytest.mark.asyncio
@respx.mock
async def test_create_merge_request(client):
    route = respx.post(f"{API}/projects/5/merge_requests").mock(
        return_value=Response(201, json=MR)
    )

    text = await gitlab_create_merge_request(
        client, 5, "feature", "main", "Add feature", reviewer_ids=[2], squash=True
    )

    assert text.startswith("Merge request created successfully:")
    assert "# MR !7: Add feature" in text
    assert json.loads(route.calls[0].request.content) == {
        "source_branch": "feature",
        "target_branch": "main",
        "title": "Add feature",
        "reviewer_ids": [2],
        "squash": True,
    }


@pytest.mark.asyncio
@respx.mock
async def test_accept_approve_rebase(client):
    merge = respx.put(f"{API}/projects/5/merge_requests/7/merge").mock(
        return_value=Response(200, json={**MR, "state": "merged"})
    )
    respx.post(f"{API}/projects/5/merge_requests/7/approve").mock(
        return_value=Response(201, json={"approved": True})
    )
    respx.put(f"{API}/projects/5/merge_requests/7/rebase").mock(
        return_value=Response(202, json={"rebase_in_progress": True})
    )

    merged = await gitlab_accept_merge_request(client, 5, 7, should_remove_source_branch=True)
    approved = await gitlab_approve_merge_request(client, 5, 7)
    rebased = await gitlab_rebase_merge_request(client, 5, 7)

    assert merged.startswith("Merge request merged successfully:")
    assert "**State:** merged" in merged
    assert json.loads(merge.calls[0].request.content) == {
        "should_remove_source_branch": True
    }
    assert approved == "Merge request !7 approved successfully."
    assert rebased == "Rebase of merge request !7 started."


@pytest.mark.asyncio
@respx.mock
async def test_merge_request_diff(client):
    respx.get(f"{API}/projects/5/merge_requests/7/changes").mock(
        return_value=Response(
            200,
            json={
                **MR,
                "changes": [
                    {
                        "old_path": "old.py",
                        "new_path": "new.py",
                        "renamed_file": True,
                        "diff": "@@ -1 +1 @@",
                    }
                ],
            },
        )
    )

    text = await gitlab_get_merge_request_diff(client, 5, 7)

    assert text.startswith("# Changes in !7")
    assert "## new.py" in text
    assert "> Renamed from: old.py" in text
    assert "```diff\n@@ -1 +1 @@\n```" in text


@pytest.mark.asyncio
@respx.mock
async def test_rate_limit_propagates_from_tool(client):
    respx.get(f"{API}/projects/5/merge_requests").mock(
        return_value=Response(429, headers={"Retry-After": "12"})
    )

    with pytest.raises(RateLimitError) as exc:
        await gitlab_list_merge_requests(client, 5)

    assert exc.value.retry_after_seconds == 12


@pytest.mark.asyncio
@respx.mock
async def test_issue_lifecycle(client):
    issue = {"id": 55, "iid": 3, "title": "Crash on start", "state": "opened"}
    respx.get(f"{API}/projects/5/issues").mock(return_value=Response(200, json=[issue]))
    create = respx.post(f"{API}/projects/5/issues").mock(
        return_value=Response(201, json=issue)
    )
    update = respx.put(f"{API}/projects/5/issues/3").mock(
        return_value=Response(200, json={**issue, "state": "closed"})
    )
    respx.delete(f"{API}/projects/5/issues/3").mock(return_value=Response(204))

    listed = await gitlab_list_issues(client, 5, state="opened", labels="bug")
    created = await gitlab_create_issue(client, 5, "Crash on start", labels="bug")
    closed = await gitlab_update_issue(client, 5, 3, state_event="close")
    deleted = await gitlab_delete_issue(client, 5, 3)

    assert "Crash on start" in listed
    assert created.startswith("Issue created successfully:")
    assert json.loads(create.calls[0].request.content) == {
        "title": "Crash on start",
        "labels": "bug",
    }
    assert "**State:** closed" in closed
    assert json.loads(update.calls[0].request.content) == {"state_event": "close"}
    assert deleted == "Issue #3 deleted successfully."


@pytest.mark.asyncio
@respx.mock
async def test_issue_note(client):
    route = respx.post(f"{API}/projects/5/issues/3/notes").mock(
        return_value=Response(
            201,
            json={"id": 900, "body": "Looking into it", "author": {"id": 1, "name": "Dev"}},
        )
    )

    text = await gitlab_create_issue_note(client, 5, 3, "Looking into it", internal=True)

    assert text.startswith("Note added successfully:")
    assert "## Note #900" in text
    assert "Looking into it" in text
    assert json.loads(route.calls[0].request.content) == {
        "body": "Looking into it",
        "internal": True,
    }


@pytest.mark.asyncio
async def test_issue_note_requires_body(client):
    with pytest.raises(ValueError):
        await gitlab_create_issue_note(client, 5, 3, "")
