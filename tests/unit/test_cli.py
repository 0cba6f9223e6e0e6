"""Tests for projroot.cli — diagnostic commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from projroot.cli import app
from projroot.core.paths import normalize

runner = CliRunner()

MARKER = "marker.projroot"


@pytest.fixture(autouse=True)
def _wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep rich from folding long tmp paths inside table cells."""
    monkeypatch.setenv("COLUMNS", "300")


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    src = root / "src"
    src.mkdir(parents=True)
    (src / "main.py").touch()
    (root / MARKER).touch()
    return root


@pytest.fixture()
def config(tmp_path: Path) -> Path:
    cfg = tmp_path / "projroot.yaml"
    cfg.write_text(f"spec:\n  - ['{MARKER}']\n  - cwd\n", encoding="utf-8")
    return cfg


def test_root_prints_marker_directory(project: Path, config: Path) -> None:
    result = runner.invoke(app, ["--config", str(config), "root", str(project / "src" / "main.py")])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == normalize(project)


def test_git_prints_repository_root(project: Path, config: Path) -> None:
    (project / ".git").mkdir()
    (project / "src" / MARKER).touch()
    result = runner.invoke(app, ["--config", str(config), "git", str(project / "src" / "main.py")])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == normalize(project)


def test_detect_lists_every_entry(project: Path, config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(project)
    result = runner.invoke(app, ["--config", str(config), "detect", str(project / "src" / "main.py")])
    assert result.exit_code == 0, result.output
    assert "{marker.projroot}" in result.output
    assert "cwd" in result.output


def test_detect_first_with_cli_spec(project: Path) -> None:
    result = runner.invoke(
        app,
        ["detect", str(project / "src" / "main.py"), "--spec", f"absent.projroot,{MARKER}", "--spec", "cwd", "--first"],
    )
    assert result.exit_code == 0, result.output
    assert "{absent.projroot, marker.projroot}" in result.output
    assert "cwd" not in result.output.split("Paths", 1)[1]


def test_detect_nothing_found(project: Path) -> None:
    result = runner.invoke(app, ["detect", str(project / "src" / "main.py"), "--spec", "absent.projroot"])
    assert result.exit_code == 0
    assert "No spec entry produced a root" in result.output


def test_detect_invalid_spec(project: Path) -> None:
    result = runner.invoke(app, ["detect", str(project / "src" / "main.py"), "--spec", "pattern"])
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_missing_config_exits_2(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--config", str(tmp_path / "missing.yaml"), "root", "x.py"])
    assert result.exit_code == 2
    assert "config not found" in result.output


def test_invalid_env_setting_exits_2(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROJROOT_MAX_DEPTH", "-1")
    result = runner.invoke(app, ["root", "x.py"])
    assert result.exit_code == 2
    assert "ERROR" in result.output
    assert "max_depth" in result.output


def test_no_command_shows_help() -> None:
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert "root" in result.output


def test_debug_json_log_carries_config_path(project: Path, config: Path) -> None:
    result = runner.invoke(
        app,
        ["--log-level", "DEBUG", "--log-json", "--config", str(config), "root", str(project / "src" / "main.py")],
    )
    assert result.exit_code == 0, result.output
    events = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
    loaded = [e for e in events if e["event"] == "config_loaded"]
    assert loaded and loaded[0]["path"] == config.as_posix()
