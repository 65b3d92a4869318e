import importlib.util
from pathlib import Path


def _load_guard():
    script = (
        Path(__file__).resolve().parent.parent / "scripts" / "check_core_imports.py"
    )
    module_spec = importlib.util.spec_from_file_location("check_core_imports", script)
    module = importlib.util.module_from_spec(module_spec)
    assert module_spec.loader is not None  # for mypy
    module_spec.loader.exec_module(module)
    return module


def test_core_import_guard_passes():
    assert _load_guard().main() == 0, "core import guard failed"


def test_core_import_guard_flags_transport_imports(tmp_path, monkeypatch, capsys):
    guard = _load_guard()
    core = tmp_path / "src" / "gitlab_mcp" / "core"
    core.mkdir(parents=True)
    (core / "leaky.py").write_text("from starlette.requests import Request\n")
    (core / "fine.py").write_text("import httpx\nfrom .errors import GitLabApiError\n")
    monkeypatch.setattr(guard, "REPO_ROOT", tmp_path)

    assert guard.main(core) == 1
    err = capsys.readouterr().err
    assert "leaky.py" in err
    assert "starlette.requests" in err
    assert "fine.py" not in err
