"""Unit tests for the find operation."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from wayfinder.config import SearchLimits
from wayfinder.exceptions import PatternRejectedError, SearchTimeoutError, UsageError
from wayfinder.search import finder, glob_engine


def _paths(result) -> list[str]:
    return [entry.path for entry in result.results]


def test_find_returns_nested_matches(workspace_dir: Path, make_files) -> None:
    make_files({"a.js": "", "src/b.js": "", "src/deep/c.js": "", "src/readme.md": ""})

    result = finder.find(workspace_dir, "**/*.js")

    assert _paths(result) == ["a.js", "src/b.js", "src/deep/c.js"]
    assert result.total_found >= result.count
    assert result.preprocessed_patterns == ["**/*.js"]


def test_find_filters_gitignore_and_reports_total_found(workspace_dir: Path, make_files) -> None:
    make_files({".gitignore": "*.tmp\n", "app.js": "", "temp.tmp": ""})

    result = finder.find(workspace_dir, "*")

    assert sorted(_paths(result)) == [".gitignore", "app.js"]
    assert result.count == 2
    assert result.total_found == 3


def test_find_without_gitignore_keeps_ignored_files(workspace_dir: Path, make_files) -> None:
    make_files({".gitignore": "*.tmp\n", "app.js": "", "temp.tmp": ""})

    result = finder.find(workspace_dir, "*", respect_gitignore=False)

    assert sorted(_paths(result)) == [".gitignore", "app.js", "temp.tmp"]


def test_hidden_files_are_excluded_except_important_ones(workspace_dir: Path, make_files) -> None:
    make_files({".env": "", ".chara.json": "{}", "app.js": "", ".config/settings.js": ""})

    hidden_excluded = finder.find(workspace_dir, "**/*")
    assert sorted(_paths(hidden_excluded)) == [".chara.json", "app.js"]

    hidden_included = finder.find(workspace_dir, "**/*", include_hidden=True)
    assert sorted(_paths(hidden_included)) == [
        ".chara.json",
        ".config",
        ".config/settings.js",
        ".env",
        "app.js",
    ]


def test_important_hidden_files_are_readded_when_present(workspace_dir: Path, make_files) -> None:
    make_files({".gitignore": "", ".env": "", "app.js": ""})

    result = finder.find(workspace_dir, "**/*.js")

    assert _paths(result) == [".gitignore", "app.js"]
    assert result.total_found == 2


def test_missing_important_hidden_files_are_not_invented(workspace_dir: Path, make_files) -> None:
    make_files({"app.js": ""})

    assert _paths(finder.find(workspace_dir, "**/*.js")) == ["app.js"]


def test_always_ignored_and_build_directories_are_excluded(workspace_dir: Path, make_files) -> None:
    make_files(
        {
            "node_modules/pkg/index.js": "",
            ".git/hooks/pre-commit.js": "",
            "dist/bundle.js": "",
            "src/app.js": "",
        }
    )

    result = finder.find(workspace_dir, "**/*.js", include_hidden=True, respect_gitignore=False)

    assert _paths(result) == ["src/app.js"]


def test_caller_exclusions_are_coerced_to_negations(workspace_dir: Path, make_files) -> None:
    make_files({"src/app.js": "", "src/app.test.js": ""})

    result = finder.find(workspace_dir, "**/*.js", ["**/*.test.js"])

    assert _paths(result) == ["src/app.js"]
    assert result.exclude_patterns == ["**/*.test.js"]
    assert "!**/*.test.js" in finder.build_exclusions(["**/*.test.js"], include_hidden=False)


def test_directory_results_have_clean_paths(workspace_dir: Path, make_files) -> None:
    make_files({"src/app.js": ""})

    result = finder.find(workspace_dir, "src")

    entry = result.results[0]
    assert entry.path == "src"
    assert entry.type == "directory"
    assert entry.relative_path == "src/"
    assert entry.absolute_path == str(workspace_dir / "src")


def test_gitignore_patterns_with_directories_filter_results(workspace_dir: Path, make_files) -> None:
    make_files(
        {
            ".gitignore": "src/*/temp.*\n**/*.test.js\n",
            "src/components/temp.txt": "",
            "src/components/button.js": "",
            "src/app.test.js": "",
            "tests/unit.test.js": "",
        }
    )

    result = finder.find(workspace_dir, "**/*")

    paths = _paths(result)
    assert "src/components/button.js" in paths
    assert "src/components/temp.txt" not in paths
    assert "src/app.test.js" not in paths
    assert "tests/unit.test.js" not in paths


def test_rejected_pattern_never_reaches_expansion(workspace_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(*_args, **_kwargs):
        raise AssertionError("expansion must not run")

    monkeypatch.setattr(glob_engine, "expand", _fail)

    with pytest.raises(PatternRejectedError):
        finder.find(workspace_dir, "*tic*toe*tac*mon*key*")


def test_total_pattern_limit(workspace_dir: Path) -> None:
    with pytest.raises(UsageError) as excinfo:
        finder.find(workspace_dir, "*.js", [f"dir{i}/**" for i in range(100)])

    assert not isinstance(excinfo.value, PatternRejectedError)
    assert excinfo.value.context["totalPatterns"] == 110


def test_timeout_raises_and_cancels_worker(workspace_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, threading.Event] = {}

    def _slow_expand(root, patterns, exclusions=(), *, max_depth=8, cancel_event=None):
        seen["event"] = cancel_event
        cancel_event.wait(5)
        return ["late.js"]

    monkeypatch.setattr(glob_engine, "expand", _slow_expand)
    limits = SearchLimits(simple_timeout_seconds=0.2, complex_timeout_seconds=0.2)

    with pytest.raises(SearchTimeoutError) as excinfo:
        finder.find(workspace_dir, "*.js", limits=limits)

    assert excinfo.value.context["providedPattern"] == "*.js"
    assert seen["event"].is_set()
