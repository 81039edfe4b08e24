"""Tests for contextdb init command."""

from __future__ import annotations

from pathlib import Path

import yaml
from typer.testing import CliRunner

from contextdb.cli.main import app
from contextdb.store import ContextDB

runner = CliRunner()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run_init(home: Path, project: str, path: Path) -> object:
    return runner.invoke(
        app, ["init", "--project", project, "--path", str(path), "--home", str(home)]
    )


# ---------------------------------------------------------------------------
# First run
# ---------------------------------------------------------------------------


def test_init_creates_catalog(home: Path, src_dir: Path) -> None:
    result = _run_init(home, "p1", src_dir)
    assert result.exit_code == 0, result.output
    assert (home / "contextdb.db").exists()
    assert (home / "projects" / "p1").is_dir()


def test_init_writes_config(home: Path, src_dir: Path) -> None:
    _run_init(home, "p1", src_dir)
    data = yaml.safe_load((home / "contextdb.yaml").read_text(encoding="utf-8"))
    assert data["search"]["max_results"] == 100


def test_init_registers_resolved_path(home: Path, src_dir: Path) -> None:
    _run_init(home, "p1", src_dir)
    with ContextDB(home) as db:
        assert db.get_project("p1").source_root == str(src_dir.resolve())


def test_init_reports_initialized(home: Path, src_dir: Path) -> None:
    result = _run_init(home, "p1", src_dir)
    assert "Initialized project 'p1'" in result.output


def test_init_uses_env_home(tmp_path: Path, src_dir: Path, monkeypatch) -> None:
    monkeypatch.setenv("CONTEXTDB_HOME", str(tmp_path / "envhome"))
    result = runner.invoke(app, ["init", "--project", "p1", "--path", str(src_dir)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "envhome" / "contextdb.db").exists()


# ---------------------------------------------------------------------------
# Re-run / edge cases
# ---------------------------------------------------------------------------


def test_reinit_updates_root(home: Path, src_dir: Path, tmp_path: Path) -> None:
    other = tmp_path / "other"
    other.mkdir()
    _run_init(home, "p1", src_dir)
    result = _run_init(home, "p1", other)

    assert result.exit_code == 0, result.output
    assert "Updated project 'p1'" in result.output
    with ContextDB(home) as db:
        assert db.list_projects() == ["p1"]
        assert db.get_project("p1").source_root == str(other.resolve())


def test_init_missing_source_warns(home: Path, tmp_path: Path) -> None:
    result = _run_init(home, "p1", tmp_path / "not-yet")
    assert result.exit_code == 0, result.output
    assert "does not exist" in result.output


def test_init_invalid_name(home: Path, src_dir: Path) -> None:
    result = _run_init(home, "../bad", src_dir)
    assert result.exit_code == 1
    assert "Invalid project name" in result.output


def test_init_requires_path(home: Path) -> None:
    result = runner.invoke(app, ["init", "--project", "p1", "--home", str(home)])
    assert result.exit_code != 0


def test_init_unusable_home(tmp_path: Path, src_dir: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory")
    result = _run_init(blocker / "home", "p1", src_dir)
    assert result.exit_code == 1
    assert "Storage failure" in result.output
