"""contextdb ingest — archive and index files into a project.

Directories are expanded to the files they contain (--recursive for
subdirectories). Files that cannot be read as UTF-8 text are skipped and
listed; they never abort the batch.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from contextdb.cli.common import HomeOption, ProjectOption, console, load_cfg, open_store
from contextdb.cli.errors import err_no_files, warn_skipped
from contextdb.ingest.sources import expand_paths


def ingest_cmd(
    project: ProjectOption,
    files: Annotated[
        list[Path] | None,
        typer.Argument(help="Files or directories to ingest."),
    ] = None,
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Recurse into subdirectories."),
    ] = False,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", help="Glob pattern to exclude (repeatable)."),
    ] = None,
    home: HomeOption = None,
) -> None:
    """Ingest files into a project."""
    if not files:
        console.print(err_no_files())
        raise typer.Exit(1)

    cfg = load_cfg(home)
    paths = expand_paths(
        files,
        recursive=recursive,
        exclude=[*cfg.ingest.exclude, *(exclude or [])],
        max_depth=cfg.ingest.max_depth,
    )
    if not paths:
        console.print("[yellow]No files found to ingest.[/]")
        raise typer.Exit(0)

    with open_store(cfg) as db:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as prog:
            prog.add_task(f"Ingesting {len(paths)} file(s)…", total=None)
            report = db.ingest_files(project, paths)

    for skipped in report.skipped:
        console.print(warn_skipped(skipped.path, skipped.reason), soft_wrap=True)
    console.print(
        f"[green]✓[/] Ingested {report.count} files into project '{escape(project)}' "
        f"[dim]({report.lines:,} lines indexed)[/]",
        soft_wrap=True,
    )
