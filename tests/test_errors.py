import pytest
from gitlab_mcp.core.errors import (
    AuthenticationError,
    GitLabApiError,
    GitLabClientError,
    GitLabNetworkError,
    GitLabParseError,
    RateLimitError,
    extract_error_message,
    parse_retry_after,
)


def test_api_error_retryable_only_for_5xx():
    assert GitLabApiError(status_code=500, message="boom").retryable is True
    assert GitLabApiError(status_code=599, message="boom").retryable is True
    assert GitLabApiError(status_code=404, message="nope").retryable is False
    assert GitLabApiError(status_code=422, message="bad").retryable is False


def test_api_error_str_includes_request_and_retry_hint():
    err = GitLabApiError(
        status_code=502,
        message="Bad Gateway",
        method="GET",
        url="https://gitlab.example.com/api/v4/projects",
    )
    text = str(err)
    assert text.startswith("502 GET https://gitlab.example.com/api/v4/projects")
    assert "Bad Gateway" in text
    assert text.endswith("(retryable)")


def test_network_error_has_status_zero_and_is_retryable():
    err = GitLabNetworkError(message="connection refused", method="GET", url="u")
    assert isinstance(err, GitLabApiError)
    assert err.status_code == 0
    assert err.retryable is True


def test_rate_limit_and_auth_flags():
    rl = RateLimitError(retry_after_seconds=30)
    assert rl.retryable is True
    assert rl.retry_after_seconds == 30
    assert "retry after 30s" in str(rl)

    auth = AuthenticationError("nope", status_code=403)
    assert auth.retryable is False
    assert auth.status_code == 403


@pytest.mark.parametrize(
    "cls",
    [AuthenticationError, RateLimitError, GitLabApiError, GitLabParseError],
)
def test_all_errors_share_base(cls):
    assert issubclass(cls, GitLabClientError)


@pytest.mark.parametrize(
    "raw,expected",
    [(None, 60), ("30", 30), (" 5 ", 5), ("soon", 60), ("-1", 60), ("0", 0)],
)
def test_parse_retry_after(raw, expected):
    assert parse_retry_after(raw) == expected


def test_extract_error_message_variants():
    assert extract_error_message({"message": "404 Project Not Found"}, 404) == (
        "404 Project Not Found"
    )
    assert extract_error_message({"error": "insufficient_scope"}, 403) == (
        "insufficient_scope"
    )
    assert extract_error_message({"message": {"name": ["has already been taken"]}}, 400) == (
        "{'name': ['has already been taken']}"
    )
    assert extract_error_message({"message": ""}, 500) == "API error: 500"
    assert extract_error_message("not json", 502) == "API error: 502"
    assert extract_error_message(None, 418) == "API error: 418"
