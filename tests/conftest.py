"""
Shared fixtures for the luapack tests.
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def lua_tree(tmp_path):
    """Write a dict of {relative path: Lua source} under tmp_path and return its real path."""
    root = tmp_path / "project"
    root.mkdir()

    def _write(files):
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return os.path.realpath(str(root))

    return _write


@pytest.fixture
def run_lua():
    """Execute Lua source in a fresh interpreter and return the chunk's result."""
    lupa = pytest.importorskip("lupa")

    def _run(source):
        runtime = lupa.LuaRuntime(unpack_returned_tuples=True)
        return runtime.execute(source)

    return _run


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point HOME somewhere empty so ~/.luapack/config.json is never picked up."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home
