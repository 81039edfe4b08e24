"""Tests for contextdb list and version commands."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from contextdb.cli.main import app
from contextdb.store import ContextDB

runner = CliRunner()


def test_list_empty(home: Path) -> None:
    result = runner.invoke(app, ["list", "--home", str(home)])
    assert result.exit_code == 0, result.output
    assert "Projects:" in result.output
    assert "(none" in result.output


def test_list_projects(home: Path) -> None:
    with ContextDB(home) as db:
        db.register("web", "/srv/web")
        db.register("api", "/srv/api")
    result = runner.invoke(app, ["list", "--home", str(home)])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["Projects:", "  - api", "  - web"]


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("contextdb ")


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.output.startswith("contextdb ")


def test_invalid_config_exits(home: Path) -> None:
    home.mkdir()
    (home / "contextdb.yaml").write_text("search:\n  max_results: 1000\n", encoding="utf-8")
    result = runner.invoke(app, ["list", "--home", str(home)])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
