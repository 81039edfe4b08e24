"""contextdb CLI entry point."""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from contextdb.cli.common import console
from contextdb.cli.ingest import ingest_cmd
from contextdb.cli.init import init_cmd
from contextdb.cli.projects import list_cmd
from contextdb.cli.search import search_cmd
from contextdb.cli.status import status_cmd


def _package_version() -> str:
    try:
        return importlib.metadata.version("contextdb")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"contextdb {_package_version()}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("contextdb")
    logger.handlers.clear()
    if verbose:
        logger.addHandler(RichHandler(console=console, show_path=False))
        logger.setLevel(logging.DEBUG)
    else:
        # Skips and degraded results are already reported on the console.
        logger.addHandler(logging.NullHandler())


app = typer.Typer(
    name="contextdb",
    help=(
        "contextdb — snapshot a codebase and search it line by line.\n\n"
        "  contextdb init    Register a project and its source directory.\n"
        "  contextdb ingest  Archive and index files.\n"
        "  contextdb search  Find lines containing a literal string."
    ),
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log per-file progress."),
    ] = False,
) -> None:
    """contextdb — per-project content store with line-level search."""
    _configure_logging(verbose)


app.command("init")(init_cmd)
app.command("ingest")(ingest_cmd)
app.command("search")(search_cmd)
app.command("list")(list_cmd)
app.command("status")(status_cmd)


@app.command("version")
def version_cmd() -> None:
    """Show the installed contextdb version."""
    typer.echo(f"contextdb {_package_version()}")


if __name__ == "__main__":
    app()
