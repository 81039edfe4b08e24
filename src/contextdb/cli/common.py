"""Shared helpers for contextdb commands: option types, store opening."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from contextdb.cli.errors import (
    err_config,
    err_invalid_project_name,
    err_project_not_found,
    err_storage,
)
from contextdb.config import ConfigError, ContextDBConfig, load_config
from contextdb.errors import InvalidProjectNameError, ProjectNotFoundError, StorageError
from contextdb.store import ContextDB

console = Console()

HomeOption = Annotated[
    Path | None,
    typer.Option(
        "--home",
        help="Store directory. Defaults to $CONTEXTDB_HOME or ~/.contextdb.",
    ),
]

ProjectOption = Annotated[
    str,
    typer.Option("--project", "-p", help="Project name."),
]


def load_cfg(home: Path | None) -> ContextDBConfig:
    """Load config or exit 1 with an actionable message."""
    try:
        return load_config(home)
    except ConfigError as exc:
        console.print(err_config(str(exc)))
        raise typer.Exit(1) from exc


@contextmanager
def open_store(cfg: ContextDBConfig) -> Iterator[ContextDB]:
    """Open the store for one command and map library errors to exit code 1."""
    try:
        db = ContextDB.from_config(cfg)
    except StorageError as exc:
        console.print(err_storage(str(exc), str(cfg.base_dir)))
        raise typer.Exit(1) from exc

    try:
        yield db
    except ProjectNotFoundError as exc:
        console.print(err_project_not_found(exc.name, db.list_projects()))
        raise typer.Exit(1) from exc
    except InvalidProjectNameError as exc:
        console.print(err_invalid_project_name(exc.name))
        raise typer.Exit(1) from exc
    except StorageError as exc:
        console.print(err_storage(str(exc), str(cfg.base_dir)))
        raise typer.Exit(1) from exc
    finally:
        db.close()
