"""Shared pytest fixtures for the Wayfinder test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping, Optional

import pytest

from wayfinder.tools.tool_manager import FileSystemTools

TreeLayout = Mapping[str, Optional[str]]


def build_files(root: Path, layout: TreeLayout) -> Path:
    """Create files (str content) and directories (None) below ``root``."""
    for relative, content in layout.items():
        target = root / relative
        if content is None:
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture()
def workspace_dir(tmp_path: Path) -> Path:
    """Provide an isolated workspace directory for filesystem-heavy tests."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


@pytest.fixture()
def make_files(workspace_dir: Path) -> Callable[[TreeLayout], Path]:
    """Return a helper that populates the workspace from a path -> content mapping."""

    def _make(layout: TreeLayout) -> Path:
        return build_files(workspace_dir, layout)

    return _make


@pytest.fixture()
def tools(workspace_dir: Path) -> FileSystemTools:
    """Instantiate FileSystemTools scoped to the temporary workspace."""
    return FileSystemTools(workspace_dir)


@pytest.fixture()
def scenario_a(make_files: Callable[[TreeLayout], Path]) -> Path:
    """Workspace with a root .gitignore covering temp files, logs and a directory."""
    return make_files(
        {
            ".gitignore": "*.tmp\nignored/\n*.log",
            "temp.tmp": "temporary",
            "app.log": "log content",
            "ignored/file.txt": "ignored file",
            "included.txt": "included",
            "app.js": "javascript",
        }
    )


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the settings loader at a per-test file that does not exist yet."""
    settings_path = tmp_path / "settings" / "settings.json"
    monkeypatch.setenv("WAYFINDER_SETTINGS", str(settings_path))
    return settings_path
