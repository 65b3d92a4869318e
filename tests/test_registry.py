import inspect
from types import ModuleType

import pytest
from gitlab_mcp.core.client import GitLabClient
from gitlab_mcp.core.config import ToolSettings
from gitlab_mcp.core.credentials import PrivateToken, TenantCredentials
from gitlab_mcp.core.registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)
from mcp.server.fastmcp import FastMCP


def _make_module(name: str, code: str) -> ModuleType:
    module = ModuleType(name)
    exec(code, module.__dict__)
    return module


class RecordingApp:
    def __init__(self):
        self.registered = []

    def tool(self, name):
        def decorator(fn):
            self.registered.append((name, fn))
            return fn

        return decorator


def _client() -> GitLabClient:
    return GitLabClient(
        TenantCredentials(auth=PrivateToken("t"), base_url="https://gitlab.example.com/api/v4")
    )


@pytest.mark.asyncio
async def test_registers_prefixed_client_first_coroutines_only():
    code = """
async def gitlab_echo(client, *, foo: int = 1):
    return (client.base_url, foo)

async def helper(client):
    return None

async def gitlab_wrong_first(arg1, client):
    return None

def gitlab_sync(client):
    return None
"""
    mod = _make_module("fake_tools", code)
    app = RecordingApp()

    names = register_discovered_tools(app, _client(), modules=[mod])

    assert names == ["gitlab_echo"]
    wrapped = app.registered[0][1]
    assert "client" not in inspect.signature(wrapped).parameters
    assert await wrapped(foo=5) == ("https://gitlab.example.com/api/v4", 5)


@pytest.mark.asyncio
async def test_client_provider_called_per_invocation():
    mod = _make_module(
        "fake_tools_2", "async def gitlab_who(client):\n    return id(client)\n"
    )
    app = RecordingApp()
    made = []

    def provider():
        client = _client()
        made.append(client)
        return client

    register_discovered_tools(app, provider, modules=[mod])
    wrapped = app.registered[0][1]
    await wrapped()
    await wrapped()

    assert len(made) == 2
    assert made[0] is not made[1]


@pytest.mark.asyncio
async def test_string_output_is_clipped():
    mod = _make_module(
        "fake_tools_3", "async def gitlab_big(client):\n    return 'y' * 500\n"
    )
    app = RecordingApp()
    register_discovered_tools(
        app, _client(), modules=[mod], settings=ToolSettings(character_limit=100)
    )
    text = await app.registered[0][1]()

    assert text.startswith("y" * 100)
    assert "truncated: showing 100 of 500 characters" in text


def test_duplicate_names_raise():
    mod1 = _make_module("dup1", "async def gitlab_same(client): return None")
    mod2 = _make_module("dup2", "async def gitlab_same(client): return None")

    with pytest.raises(ValueError):
        register_discovered_tools(RecordingApp(), _client(), modules=[mod1, mod2])


def test_app_without_tool_decorator_rejected():
    with pytest.raises(TypeError):
        register_discovered_tools(object(), _client(), modules=[])


def test_discover_tool_modules_skips_import_failures(monkeypatch, caplog):
    import importlib
    import pkgutil

    class Info:
        def __init__(self, name):
            self.name = name

    def fake_iter_modules(path, prefix):
        return [Info(prefix + "good"), Info(prefix + "bad"), Info(prefix + "_common")]

    good_mod = _make_module(
        "gitlab_mcp.core.tools.good", "async def gitlab_ok(client): return None"
    )
    real_import_module = importlib.import_module

    def fake_import_module(name, *args, **kwargs):
        if name == "gitlab_mcp.core.tools.bad":
            raise ImportError("boom")
        if name == "gitlab_mcp.core.tools.good":
            return good_mod
        return real_import_module(name, *args, **kwargs)

    monkeypatch.setattr(pkgutil, "iter_modules", fake_iter_modules)
    monkeypatch.setattr(importlib, "import_module", fake_import_module)

    with caplog.at_level("ERROR"):
        modules = discover_tool_modules()

    assert [m.__name__ for m in modules] == ["gitlab_mcp.core.tools.good"]
    assert any("Failed importing tool module" in rec.message for rec in caplog.records)


def test_real_tool_modules_register():
    app = RecordingApp()
    names = register_discovered_tools(app, _client())

    assert len(names) == len(set(names))
    assert all(name.startswith("gitlab_") for name in names)
    for expected in (
        "gitlab_test_connection",
        "gitlab_list_projects",
        "gitlab_get_file_raw",
        "gitlab_accept_merge_request",
        "gitlab_get_job_log",
        "gitlab_list_project_runners",
    ):
        assert expected in names


def test_every_tool_module_yields_tools():
    for module in discover_tool_modules():
        assert list(iter_tool_functions(module)), module.__name__


@pytest.mark.asyncio
async def test_fastmcp_schema_hides_client():
    app = FastMCP("test")
    register_discovered_tools(app, _client())

    tools = {tool.name: tool for tool in await app.list_tools()}
    schema = tools["gitlab_get_project"].inputSchema
    assert "client" not in schema["properties"]
    assert "project_id" in schema["required"]
    assert tools["gitlab_get_project"].description
