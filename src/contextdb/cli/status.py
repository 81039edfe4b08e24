"""contextdb status — catalog overview for one project."""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel

from contextdb.cli.common import HomeOption, ProjectOption, console, load_cfg, open_store
from contextdb.db.models import ProjectStats


def status_cmd(project: ProjectOption, home: HomeOption = None) -> None:
    """Show files, indexed lines and archive size for a project."""
    cfg = load_cfg(home)
    with open_store(cfg) as db:
        stats = db.project_stats(project)

    console.print(
        Panel(_render(stats), title=f"[bold]{escape(project)}[/]", expand=False)
    )


def _render(stats: ProjectStats) -> str:
    p = stats.project
    lines = [
        f"Source:    {escape(p.source_root)}",
        f"Created:   [dim]{p.created_at or '-'}[/]",
        f"Updated:   [dim]{p.updated_at or '-'}[/]",
        f"Files: [bold]{stats.files:,}[/]  |  "
        f"Lines: [bold]{stats.lines:,}[/]  |  "
        f"Archived: [bold]{_human_size(stats.compressed_bytes)}[/]",
    ]
    if stats.files == 0:
        lines.append("[dim]No files ingested yet.[/]")
    return "\n".join(lines)


def _human_size(n: int) -> str:
    size = float(n)
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"
