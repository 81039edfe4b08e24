"""contextdb init — register a project (or update its source root).

Creates on first use:
  <home>/contextdb.db          — catalog with schema
  <home>/contextdb.yaml        — default configuration (mode 0o600)
  <home>/projects/<name>/      — blob directory for the project
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from contextdb.cli.common import HomeOption, ProjectOption, console, load_cfg, open_store
from contextdb.config import ensure_config


def init_cmd(
    project: ProjectOption,
    path: Annotated[
        Path,
        typer.Option("--path", help="Source directory the project's files live under."),
    ],
    home: HomeOption = None,
) -> None:
    """Initialize a project (re-running updates its source path)."""
    source_root = path.expanduser().resolve()
    cfg = load_cfg(home)

    with open_store(cfg) as db:
        existed = project in db.list_projects()
        db.register(project, source_root)

    cfg_path = ensure_config(cfg.base_dir)

    if not source_root.is_dir():
        console.print(f"[yellow]⚠[/]  Source path does not exist yet: {escape(str(source_root))}")

    verb = "Updated" if existed else "Initialized"
    console.print(f"[green]✓[/] {verb} project '{escape(project)}'")
    console.print(f"  Source:  {escape(str(source_root))}")
    console.print(f"  Store:   {escape(str(cfg.base_dir))}")
    console.print(f"  Config:  {escape(str(cfg_path))}")
    console.print(f"\nNext:  contextdb ingest --project {escape(project)} <file-or-dir>...")
