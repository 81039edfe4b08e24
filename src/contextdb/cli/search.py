"""contextdb search — find lines containing a literal string.

Output: one ``path:line: content`` line per match; with --whole-context each
match is followed by the full file between delimiter lines.
"""

from __future__ import annotations

from typing import Annotated

import typer

from contextdb.cli.common import HomeOption, ProjectOption, console, load_cfg, open_store

_CONTEXT_START = "--- Full Context ---"
_CONTEXT_END = "--- End Context ---"


def search_cmd(
    query: Annotated[
        str,
        typer.Argument(help="Text to find (case-sensitive, no wildcards)."),
    ],
    project: ProjectOption,
    whole_context: Annotated[
        bool,
        typer.Option("--whole-context", help="Print the full file for each match."),
    ] = False,
    home: HomeOption = None,
) -> None:
    """Search a project's indexed lines."""
    cfg = load_cfg(home)
    with open_store(cfg) as db:
        results = db.search(project, query, whole_context)

    console.print(f"Found {len(results)} results:")
    for result in results:
        _print_raw(f"{result.file_path}:{result.line_number}: {result.line_content}")
        if whole_context and result.full_context is not None:
            _print_raw(_CONTEXT_START)
            _print_raw(result.full_context)
            _print_raw(_CONTEXT_END)


def _print_raw(text: str) -> None:
    # Indexed content is arbitrary text: no markup, emoji codes or wrapping.
    console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)
