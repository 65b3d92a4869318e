import json

import pytest
import respx
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.credentials import PrivateToken, TenantCredentials
from gitlab_mcp.core.tools.integrations import (
    gitlab_create_project_webhook,
    gitlab_list_project_runners,
)
from gitlab_mcp.core.tools.labels import gitlab_create_label, gitlab_update_label
from gitlab_mcp.core.tools.pipelines import (
    gitlab_cancel_pipeline,
    gitlab_create_pipeline,
    gitlab_get_job_log,
    gitlab_list_pipeline_jobs,
    gitlab_list_pipelines,
)
from gitlab_mcp.core.tools.releases import gitlab_create_release
from gitlab_mcp.core.tools.variables import (
    gitlab_create_project_variable,
    gitlab_list_project_variables,
)
from httpx import Response

API = "https://gitlab.example.com/api/v4"

PIPELINE = {"id": 4001, "status": "running", "ref": "main", "sha": "abc123"}


@pytest.fixture
def client():
    return GitLabClient(TenantCredentials(auth=PrivateToken("glpat-test"), base_url=API))


@pytest.mark.asyncio
@respx.mock
async def test_list_pipelines_status_filter(client):
    route = respx.get(f"{API}/projects/5/pipelines").mock(
        return_value=Response(200, json=[PIPELINE])
    )

    text = await gitlab_list_pipelines(client, 5, status="running", ref="main")

    assert "4001" in text
    params = route.calls[0].request.url.params
    assert params["status"] == "running"
    assert params["ref"] == "main"


@pytest.mark.asyncio
@respx.mock
async def test_create_pipeline_with_variables(client):
    route = respx.post(f"{API}/projects/5/pipeline").mock(
        return_value=Response(201, json=PIPELINE)
    )

    text = await gitlab_create_pipeline(client, 5, "main", variables={"DEPLOY": "1"})

    assert text.startswith("Pipeline created successfully:")
    assert "# Pipeline #4001" in text
    assert json.loads(route.calls[0].request.content) == {
        "ref": "main",
        "variables": [{"key": "DEPLOY", "value": "1"}],
    }


@pytest.mark.asyncio
@respx.mock
async def test_create_pipeline_without_variables_omits_them(client):
    route = respx.post(f"{API}/projects/5/pipeline").mock(
        return_value=Response(201, json=PIPELINE)
    )

    await gitlab_create_pipeline(client, 5, "main")

    assert json.loads(route.calls[0].request.content) == {"ref": "main"}


@pytest.mark.asyncio
@respx.mock
async def test_cancel_pipeline(client):
    respx.post(f"{API}/projects/5/pipelines/4001/cancel").mock(
        return_value=Response(200, json={**PIPELINE, "status": "canceled"})
    )

    text = await gitlab_cancel_pipeline(client, 5, 4001)

    assert text.startswith("Pipeline canceled successfully:")
    assert "**Status:** canceled" in text


@pytest.mark.asyncio
@respx.mock
async def test_jobs_and_log(client):
    route = respx.get(f"{API}/projects/5/pipelines/4001/jobs").mock(
        return_value=Response(
            200,
            json=[{"id": 77, "name": "test", "stage": "test", "status": "failed"}],
        )
    )
    respx.get(f"{API}/projects/5/jobs/77/trace").mock(
        return_value=Response(200, text="FAILED tests/test_x.py")
    )

    jobs = await gitlab_list_pipeline_jobs(client, 5, 4001, scope="failed")
    log = await gitlab_get_job_log(client, 5, 77)

    assert "| 77 | test | test | failed |" in jobs
    assert route.calls[0].request.url.params["scope"] == "failed"
    assert log == "# Job #77 Log\n\n```\nFAILED tests/test_x.py\n```"


@pytest.mark.asyncio
@respx.mock
async def test_variables_masked_in_output(client):
    respx.get(f"{API}/projects/5/variables").mock(
        return_value=Response(
            200, json=[{"key": "API_KEY", "value": "s3cret", "masked": True}]
        )
    )
    create = respx.post(f"{API}/projects/5/variables").mock(
        return_value=Response(
            201, json={"key": "API_KEY", "value": "s3cret", "masked": True}
        )
    )

    listed = await gitlab_list_project_variables(client, 5)
    created = await gitlab_create_project_variable(
        client, 5, "API_KEY", "s3cret", masked=True
    )

    assert "s3cret" not in listed
    assert "s3cret" not in created
    assert "***MASKED***" in created
    assert json.loads(create.calls[0].request.content) == {
        "key": "API_KEY",
        "value": "s3cret",
        "masked": True,
    }


@pytest.mark.asyncio
@respx.mock
async def test_labels(client):
    respx.post(f"{API}/projects/5/labels").mock(
        return_value=Response(201, json={"id": 8, "name": "bug", "color": "#ff0000"})
    )

    text = await gitlab_create_label(client, 5, "bug", "#ff0000")

    assert text.startswith("Label created successfully:")
    assert "# Label: bug" in text


@pytest.mark.asyncio
async def test_update_label_needs_a_change(client):
    with pytest.raises(ValueError):
        await gitlab_update_label(client, 5, 8)


@pytest.mark.asyncio
@respx.mock
async def test_release_with_links(client):
    route = respx.post(f"{API}/projects/5/releases").mock(
        return_value=Response(
            201,
            json={
                "tag_name": "v1.0.0",
                "name": "First",
                "assets": {"links": [{"id": 1, "name": "bin", "url": "https://x/bin"}]},
            },
        )
    )

    text = await gitlab_create_release(
        client,
        5,
        "v1.0.0",
        name="First",
        links=[{"name": "bin", "url": "https://x/bin", "link_type": "package"}],
    )

    assert text.startswith("Release created successfully:")
    assert "- [bin](https://x/bin)" in text
    assert json.loads(route.calls[0].request.content) == {
        "tag_name": "v1.0.0",
        "name": "First",
        "assets": {
            "links": [{"name": "bin", "url": "https://x/bin", "link_type": "package"}]
        },
    }


@pytest.mark.asyncio
@respx.mock
async def test_webhook_and_runners(client):
    hook = respx.post(f"{API}/projects/5/hooks").mock(
        return_value=Response(
            201,
            json={"id": 3, "url": "https://ci.example/hook", "push_events": True},
        )
    )
    runners = respx.get(f"{API}/projects/5/runners").mock(
        return_value=Response(
            200,
            json=[
                {
                    "id": 9,
                    "description": "docker",
                    "status": "online",
                    "is_shared": True,
                    "tag_list": ["docker", "linux"],
                }
            ],
        )
    )

    created = await gitlab_create_project_webhook(
        client, 5, "https://ci.example/hook", pipeline_events=True
    )
    listed = await gitlab_list_project_runners(client, 5, status="online")

    assert created.startswith("Webhook created successfully:")
    assert json.loads(hook.calls[0].request.content) == {
        "url": "https://ci.example/hook",
        "pipeline_events": True,
    }
    assert "docker, linux" in listed
    assert runners.calls[0].request.url.params["status"] == "online"
