from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Callable, Iterable, List, Set, Union, get_type_hints

from .client import GitLabClient
from .config import ToolSettings
from .formatters import truncate

log = logging.getLogger("gitlab_mcp.core.registry")

TOOL_PREFIX = "gitlab_"

ClientProvider = Callable[[], GitLabClient]


# --- Discovery helpers ----------------------------------------------------- #


def discover_tool_modules(
    package_name: str = "gitlab_mcp.core.tools",
) -> List[ModuleType]:
    """Import every module under the tools package; a broken module is logged and skipped."""
    modules: List[ModuleType] = []
    base_pkg = importlib.import_module(package_name)

    for finder in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + "."):
        name = finder.name
        if name.rsplit(".", 1)[-1].startswith("_"):
            continue
        try:
            module = importlib.import_module(name)
        except Exception as exc:  # pragma: no cover - logged, not fatal
            log.error("Failed importing tool module %s: %s", name, exc)
            continue
        modules.append(module)

    return modules


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    """Yield `async def gitlab_*(client, ...)` functions defined in the module."""
    for _, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        if not func.__name__.startswith(TOOL_PREFIX):
            continue
        if func.__module__ != module.__name__:
            continue

        params = list(inspect.signature(func).parameters.values())
        if not params or params[0].name != "client":
            log.debug(
                "Skipping %s.%s: first parameter must be 'client'",
                module.__name__,
                func.__name__,
            )
            continue

        yield func


# --- Wrapping / registration ---------------------------------------------- #


def _wrap_tool(
    func: Callable,
    client_provider: ClientProvider,
    settings: ToolSettings,
) -> Callable:
    """Inject a fresh client per call, hide it from the schema, clip text output."""
    original_sig = inspect.signature(func)
    type_hints = get_type_hints(func)

    new_params = []
    for i, (name, param) in enumerate(original_sig.parameters.items()):
        if i == 0 and name == "client":
            continue
        ann = type_hints.get(name, param.annotation)
        new_params.append(param.replace(annotation=ann))

    return_ann = type_hints.get("return", original_sig.return_annotation)
    new_sig = inspect.Signature(parameters=new_params, return_annotation=return_ann)

    async def wrapped(*args, **kwargs):
        client = client_provider()
        result = await func(client, *args, **kwargs)
        if isinstance(result, str):
            return truncate(result, settings.character_limit)
        return result

    wrapped.__name__ = func.__name__
    wrapped.__doc__ = func.__doc__
    wrapped.__module__ = func.__module__
    wrapped.__signature__ = new_sig  # type: ignore[attr-defined]
    return wrapped


def register_discovered_tools(
    app,
    client_provider: Union[ClientProvider, GitLabClient],
    modules: List[ModuleType] | None = None,
    settings: ToolSettings | None = None,
) -> List[str]:
    """Register discovered tools on an app exposing a .tool decorator; returns names."""
    if isinstance(client_provider, GitLabClient):
        _client = client_provider

        def client_provider():
            return _client

    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    settings = settings or ToolSettings.from_env()
    modules = modules or discover_tool_modules()
    seen_names: Set[str] = set()
    registered: List[str] = []

    for module in modules:
        for func in iter_tool_functions(module):
            name = func.__name__
            if name in seen_names:
                raise ValueError(f"Duplicate tool name detected: {name}")

            wrapped = _wrap_tool(func, client_provider, settings)
            app.tool(name=name)(wrapped)
            seen_names.add(name)
            registered.append(name)
            log.info("Registered tool: %s (%s)", name, module.__name__)

    return registered


__all__ = [
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
    "TOOL_PREFIX",
]
