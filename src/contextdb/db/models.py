"""Domain models for the contextdb catalog."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Project:
    id: int
    name: str
    source_root: str
    created_at: str | None = None
    updated_at: str | None = None


@dataclass
class FileRecord:
    id: int
    project_id: int
    path: str
    content_hash: str
    compressed_size: int
    created_at: str | None = None


@dataclass
class IndexEntry:
    file_id: int
    line_number: int  # 1-based
    line_content: str
    id: int | None = None  # set after insert


@dataclass
class LineMatch:
    """One index entry that matched a query, joined with its file record."""

    file_path: str
    line_number: int
    line_content: str
    content_hash: str


@dataclass
class ProjectStats:
    """Catalog counters for one project."""

    project: Project
    files: int
    lines: int
    compressed_bytes: int
