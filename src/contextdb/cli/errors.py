"""contextdb rich error messages — actionable feedback.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Usage:
    from contextdb.cli.errors import err_project_not_found
    console.print(err_project_not_found("api", ["web"]))
    raise typer.Exit(1)
"""

from __future__ import annotations

from rich.markup import escape


def err_project_not_found(name: str, known: list[str]) -> str:
    """Project is not registered."""
    known_list = ", ".join(known) if known else "(none)"
    return (
        f"[red]Error:[/] Project '{escape(name)}' is not registered.\n"
        f"  Known projects: {escape(known_list)}\n"
        f"  Run:  contextdb init --project {escape(name)} --path <source-dir>"
    )


def err_invalid_project_name(name: str) -> str:
    """Project name cannot be used as a directory name."""
    return (
        f"[red]Error:[/] Invalid project name '{escape(name)}'.\n"
        "  Use a single directory name: no '/' or '\\', not '.' or '..'.\n"
        "  Example:  contextdb init --project my-api --path ./src"
    )


def err_storage(detail: str, home: str) -> str:
    """Catalog or blob directory is unreachable."""
    return (
        f"[red]Error:[/] Storage failure: {escape(detail)}\n"
        f"  Check that '{escape(home)}' exists and is writable,\n"
        "  or point elsewhere with  --home <dir>  /  export CONTEXTDB_HOME=<dir>"
    )


def err_config(detail: str) -> str:
    """contextdb.yaml or an environment override is invalid."""
    return (
        f"[red]Error:[/] Invalid configuration: {escape(detail)}\n"
        "  Fix the value in contextdb.yaml or unset the CONTEXTDB_* override."
    )


def err_no_files() -> str:
    """ingest called without any file arguments."""
    return (
        "[red]Error:[/] No files to ingest.\n"
        "  Run:  contextdb ingest --project <name> <file-or-dir>..."
    )


def warn_skipped(path: str, reason: str) -> str:
    """A file was left out of the batch."""
    return f"  [yellow]↷ Skipped[/] {escape(path)} [dim]({escape(reason)})[/]"
