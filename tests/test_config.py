import pytest
from gitlab_mcp.core.config import ToolSettings, load_env_config
from gitlab_mcp.transports.http.config import HttpConfig


def test_tool_settings_defaults(monkeypatch):
    for name in (
        "GITLAB_MCP_DEFAULT_PAGE_SIZE",
        "GITLAB_MCP_MAX_PAGE_SIZE",
        "GITLAB_MCP_CHARACTER_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    assert ToolSettings.from_env() == ToolSettings(
        default_page_size=20, max_page_size=100, character_limit=50000
    )


def test_tool_settings_bad_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("GITLAB_MCP_DEFAULT_PAGE_SIZE", "ten")
    monkeypatch.setenv("GITLAB_MCP_CHARACTER_LIMIT", "2000")
    settings = ToolSettings.from_env()
    assert settings.default_page_size == 20
    assert settings.character_limit == 2000


def test_load_env_config_blank_is_none(monkeypatch):
    monkeypatch.setenv("GITLAB_TOKEN", "  ")
    monkeypatch.setenv("GITLAB_ACCESS_TOKEN", "oauth")
    monkeypatch.delenv("GITLAB_BASE_URL", raising=False)
    assert load_env_config(use_dotenv=False) == (None, "oauth", None)


def test_http_config_from_env(monkeypatch):
    monkeypatch.setenv("FASTMCP_PORT", "9000")
    monkeypatch.setenv("FASTMCP_STREAMABLE_HTTP_PATH", "/gitlab")
    monkeypatch.setenv("FASTMCP_JSON_RESPONSE", "false")
    monkeypatch.setenv("MCP_REQUEST_TIMEOUT_S", "0")
    cfg = HttpConfig.from_env()
    assert cfg.port == 9000
    assert cfg.path == "/gitlab"
    assert cfg.json_response is False
    assert cfg.request_timeout_s == 0


def test_http_config_rejects_bad_timeout_status(monkeypatch):
    monkeypatch.setenv("MCP_TIMEOUT_STATUS", "500")
    with pytest.raises(ValueError):
        HttpConfig.from_env()
