"""Expand ingest inputs: directories become the files they contain."""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable
from pathlib import Path


def expand_paths(
    paths: Iterable[Path | str],
    recursive: bool = False,
    exclude: Iterable[str] = (),
    max_depth: int = 10,
) -> list[Path]:
    """Expand directories to individual files; leave other paths as-is.

    Non-directory inputs pass through even if they do not exist, so the
    ingest pipeline can report them as skipped. *exclude* only filters
    entries found while scanning a directory; named inputs are kept.
    """
    patterns = list(exclude)
    result: list[Path] = []
    for src in paths:
        p = Path(src)
        if p.is_dir():
            result.extend(
                _scan_dir(p, recursive=recursive, exclude=patterns, depth=0, max_depth=max_depth)
            )
        else:
            result.append(p)
    return result


def _scan_dir(
    directory: Path,
    recursive: bool,
    exclude: list[str],
    depth: int,
    max_depth: int,
) -> list[Path]:
    """Return files in *directory* (optionally recursive), sorted by name."""
    if depth > max_depth:
        return []
    files: list[Path] = []
    try:
        entries = sorted(directory.iterdir())
    except PermissionError:
        return []
    for entry in entries:
        if _is_excluded(entry, exclude):
            continue
        if entry.is_file():
            files.append(entry)
        elif entry.is_dir() and recursive and depth < max_depth:
            files.extend(
                _scan_dir(entry, recursive=recursive, exclude=exclude, depth=depth + 1, max_depth=max_depth)
            )
    return files


def _is_excluded(path: Path, patterns: list[str]) -> bool:
    return any(fnmatch.fnmatch(path.name, pat) for pat in patterns)
