import pytest
from gitlab_mcp.core.models import (
    CommitCreateInput,
    Diff,
    MergeRequest,
    PaginationParams,
    Project,
    ProjectCreateInput,
    User,
)
from pydantic import ValidationError


def test_entity_ignores_unknown_fields():
    project = Project.model_validate(
        {"id": 1, "name": "demo", "some_new_field": {"x": 1}, "topics": ["a"]}
    )
    assert project.name == "demo"
    assert project.topics == ["a"]
    assert not hasattr(project, "some_new_field")


def test_entity_requires_identifier():
    with pytest.raises(ValidationError):
        User.model_validate({"username": "nobody"})


def test_entities_are_frozen():
    user = User(id=1, username="root")
    with pytest.raises(ValidationError):
        user.username = "other"


def test_nested_entities_parse():
    mr = MergeRequest.model_validate(
        {
            "id": 10,
            "iid": 2,
            "author": {"id": 3, "username": "dev"},
            "labels": ["bug"],
        }
    )
    assert mr.author is not None
    assert mr.author.username == "dev"
    assert mr.labels == ["bug"]


def test_diff_flags_default_false():
    diff = Diff.model_validate({"old_path": "a", "new_path": "b"})
    assert diff.new_file is False
    assert diff.renamed_file is False
    assert diff.deleted_file is False
    assert diff.diff == ""


def test_input_accepts_camel_case_and_serialises_snake_case():
    data = ProjectCreateInput.model_validate(
        {"name": "svc", "namespaceId": 4, "initializeWithReadme": True}
    )
    assert data.to_body() == {
        "name": "svc",
        "namespace_id": 4,
        "initialize_with_readme": True,
    }


def test_input_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        ProjectCreateInput.model_validate({"name": "svc", "colour": "red"})


def test_commit_actions_validated():
    data = CommitCreateInput(
        branch="main",
        commit_message="add file",
        actions=[{"action": "create", "file_path": "a.txt", "content": "hi"}],
    )
    assert data.to_body()["actions"] == [
        {"action": "create", "file_path": "a.txt", "content": "hi"}
    ]
    with pytest.raises(ValidationError):
        CommitCreateInput(
            branch="main",
            commit_message="bad",
            actions=[{"action": "explode", "file_path": "a.txt"}],
        )


def test_page_must_be_positive():
    with pytest.raises(ValidationError):
        PaginationParams(page=0)
    assert PaginationParams(page=1, per_page=5).page == 1
