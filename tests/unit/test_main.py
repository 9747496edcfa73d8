"""Command-line entry point tests."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from wayfinder import main as main_module


@pytest.fixture()
def cli_workspace(workspace_dir: Path, make_files, monkeypatch: pytest.MonkeyPatch) -> Path:
    make_files({".gitignore": "*.tmp\n", "app.js": "abc", "temp.tmp": "", "src/index.js": ""})
    monkeypatch.chdir(workspace_dir)
    monkeypatch.setattr(main_module, "configure_logging", lambda *args, **kwargs: None)
    return workspace_dir


def test_list_prints_formatted_listing(cli_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main_module.run(["list"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "[FILE] app.js" in out
    assert "temp.tmp" not in out


def test_find_with_json_output(cli_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main_module.run(["find", "--pattern", "**/*.js", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert [entry["path"] for entry in payload["results"]] == [".gitignore", "app.js", "src/index.js"]


def test_no_gitignore_flag(cli_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main_module.run(["list", "--no-gitignore"])

    assert "temp.tmp" in capsys.readouterr().out


def test_invalid_action_exits_with_usage_code(cli_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main_module.run(["lsit"])

    err = capsys.readouterr().err
    assert exit_code == 2
    assert "Invalid action provided" in err
    assert 'Did you mean "list"?' in err


def test_tree_depth_above_limit_reports_json_error(cli_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main_module.run(["tree", "--max-depth", "15", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 2
    assert payload["error"] is True
    assert payload["recommendedMaxDepth"] == 5


def test_schema_flag_prints_tool_schema(cli_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main_module.run(["--schema"]) == 0

    schema = json.loads(capsys.readouterr().out)
    assert schema["name"] == "file_system"


def test_missing_action_is_a_parser_error(cli_workspace: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.run([])

    assert excinfo.value.code == 2


def test_configure_logging_installs_rotating_file_handler(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    monkeypatch.setattr(main_module.configure_logging, "_configured", False, raising=False)
    try:
        main_module.configure_logging(logging.INFO, logs_root=tmp_path / "logs")

        file_handlers = [h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 10 * 1024 * 1024
        assert (tmp_path / "logs" / "wayfinder.log").exists()

        main_module.configure_logging(logging.DEBUG, logs_root=tmp_path / "other")
        assert not (tmp_path / "other").exists()
    finally:
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root_logger.addHandler(handler)
        root_logger.setLevel(saved_level)


@pytest.fixture()
def recorded_levels(cli_workspace: Path, monkeypatch: pytest.MonkeyPatch) -> list:
    levels: list = []
    monkeypatch.setattr(main_module, "configure_logging", lambda level, *args, **kwargs: levels.append(level))
    return levels


def test_console_level_comes_from_settings(isolated_settings: Path, recorded_levels: list) -> None:
    isolated_settings.parent.mkdir(parents=True, exist_ok=True)
    isolated_settings.write_text(json.dumps({"log_level": "error"}), encoding="utf-8")

    assert main_module.run(["list"]) == 0
    assert recorded_levels == ["ERROR"]


def test_verbose_flag_overrides_configured_level(isolated_settings: Path, recorded_levels: list) -> None:
    isolated_settings.parent.mkdir(parents=True, exist_ok=True)
    isolated_settings.write_text(json.dumps({"log_level": "ERROR"}), encoding="utf-8")

    main_module.run(["list", "-v"])

    assert recorded_levels == [logging.INFO]


def test_default_console_level_is_warning(recorded_levels: list) -> None:
    main_module.run(["current"])

    assert recorded_levels == ["WARNING"]


def test_read_prints_file_content(cli_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main_module.run(["read", "app.js"])

    assert exit_code == 0
    assert capsys.readouterr().out == "abc\n"


def test_env_prints_summary(cli_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main_module.run(["env"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert f"Working directory: {cli_workspace.resolve()}" in out
    assert "gitignore" in out
