"""contextdb list — show registered projects."""

from __future__ import annotations

from rich.markup import escape

from contextdb.cli.common import HomeOption, console, load_cfg, open_store


def list_cmd(home: HomeOption = None) -> None:
    """List all projects."""
    cfg = load_cfg(home)
    with open_store(cfg) as db:
        names = db.list_projects()

    console.print("Projects:")
    if not names:
        console.print("  [dim](none — run: contextdb init --project <name> --path <dir>)[/]")
    for name in names:
        console.print(f"  - {escape(name)}")
