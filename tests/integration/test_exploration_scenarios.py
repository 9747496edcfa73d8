"""End-to-end exploration scenarios driven through FileSystemTools.execute."""

from __future__ import annotations

import time
from pathlib import Path

import pytest

from wayfinder.search import glob_engine
from wayfinder.tools import directory_walker
from wayfinder.tools.tool_manager import FileSystemTools


def _names(result: dict) -> set[str]:
    return {item["name"] for item in result["items"]}


def _child(nodes: list[dict], name: str) -> dict:
    return next(node for node in nodes if node["name"] == name)


def test_scenario_a_list_respects_root_gitignore(tools: FileSystemTools, scenario_a: Path) -> None:
    result = tools.execute("list", respectGitignore=True)

    names = _names(result)
    assert {"included.txt", "app.js", ".gitignore"} <= names
    assert names.isdisjoint({"temp.tmp", "app.log", "ignored"})
    assert result["count"] == len(result["items"])


def test_scenario_b_list_without_gitignore(tools: FileSystemTools, scenario_a: Path) -> None:
    result = tools.execute("list", respectGitignore=False)

    assert {"temp.tmp", "app.log", "ignored", "included.txt", "app.js", ".gitignore"} <= _names(result)


def test_scenario_c_pattern_is_rejected_without_expansion(
    workspace_dir: Path, make_files, monkeypatch: pytest.MonkeyPatch
) -> None:
    make_files({"tic/toe.txt": ""})
    calls: list[object] = []
    original_expand = glob_engine.expand

    def _tracking_expand(*args, **kwargs):
        calls.append(args)
        return original_expand(*args, **kwargs)

    monkeypatch.setattr(glob_engine, "expand", _tracking_expand)
    tools = FileSystemTools(workspace_dir, return_error_objects=True)

    started = time.perf_counter()
    result = tools.execute("find", pattern="*tic*toe*tac*mon*key*")
    elapsed = time.perf_counter() - started

    assert result["error"] is True
    assert result["simplifiedSuggestion"] == "**/*{tic,toe,tac}*"
    assert elapsed < 1.0
    assert calls == []


def test_scenario_d_unreadable_directory_keeps_siblings(
    tools: FileSystemTools,
    make_files,
    workspace_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    make_files(
        {
            "level1/level2/locked/secret.txt": "",
            "level1/level2/open/visible.txt": "",
            "level1/sibling/file.txt": "",
        }
    )
    locked = workspace_dir / "level1" / "level2" / "locked"
    original_scan = directory_walker._scan_sorted

    def _scan(directory: Path):
        if Path(directory) == locked:
            raise PermissionError(13, "Permission denied", str(directory))
        return original_scan(directory)

    monkeypatch.setattr(directory_walker, "_scan_sorted", _scan)

    result = tools.execute("tree", maxDepth=4)

    level1 = _child(result["tree"], "level1")
    level2 = _child(level1["children"], "level2")
    assert _child(level2["children"], "locked")["children"] == []
    assert [node["name"] for node in _child(level2["children"], "open")["children"]] == ["visible.txt"]
    assert [node["name"] for node in _child(level1["children"], "sibling")["children"]] == ["file.txt"]


def test_root_gitignore_applies_when_listing_subdirectory(tools: FileSystemTools, make_files) -> None:
    make_files({".gitignore": "*.log\n", "sub/debug.log": "", "sub/main.py": ""})

    result = tools.execute("list", path="sub")

    assert _names(result) == {"main.py"}


def test_nested_gitignore_files_are_combined(tools: FileSystemTools, make_files) -> None:
    make_files(
        {
            ".gitignore": "*.log\n",
            "sub/.gitignore": "*.tmp\n",
            "sub/debug.log": "",
            "sub/cache.tmp": "",
            "sub/main.py": "",
        }
    )

    result = tools.execute("list", path="sub")

    assert _names(result) == {".gitignore", "main.py"}


def test_gitignore_negation_and_directory_rules(tools: FileSystemTools, make_files) -> None:
    make_files(
        {
            ".gitignore": "*.log\n!keep.log\nlogs/\n",
            "error.log": "",
            "keep.log": "",
            "logs/today.txt": "",
            "logs.txt": "",
        }
    )

    names = _names(tools.execute("list"))

    assert "keep.log" in names
    assert "logs.txt" in names
    assert "error.log" not in names
    assert "logs" not in names


def test_find_javascript_across_tree(tools: FileSystemTools, make_files) -> None:
    make_files(
        {
            ".gitignore": "generated/\n",
            "index.js": "",
            "src/app.js": "",
            "src/util/helpers.js": "",
            "generated/bundle.js": "",
            "node_modules/lib/index.js": "",
            "README.md": "",
        }
    )

    result = tools.execute("find", pattern="**/*.js")

    assert [entry["path"] for entry in result["results"]] == [
        ".gitignore",
        "index.js",
        "src/app.js",
        "src/util/helpers.js",
    ]
    assert result["totalFound"] == 5
    assert result["totalFound"] >= result["count"]
    assert "[FILE] src/util/helpers.js" in result["formatted"].splitlines()


def test_find_alternatives(tools: FileSystemTools, make_files) -> None:
    make_files({"a.ts": "", "b.tsx": "", "c.js": ""})

    result = tools.execute("find", pattern="**/*.ts|**/*.tsx")

    assert sorted(entry["path"] for entry in result["results"]) == ["a.ts", "b.tsx"]
    assert result["preprocessedPatterns"] == ["**/*.ts", "**/*.tsx"]


def test_stats_and_tree_agree_on_ignored_content(tools: FileSystemTools, scenario_a: Path) -> None:
    stats = tools.execute("stats")["stats"]
    tree = tools.execute("tree")["tree"]

    assert stats["totalFiles"] == len([node for node in tree if node["type"] == "file"])
    assert stats["ignoredItems"] == 4
