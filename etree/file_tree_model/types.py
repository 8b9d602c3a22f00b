"""Domain datatypes for one directory-tree traversal."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

KIND_FILE = "file"
KIND_FOLDER = "folder"


@dataclass(frozen=True)
class Entry:
    """One visible filesystem node with its best-effort metadata."""

    name: str
    path: Path
    kind: str
    size: int = 0
    permissions: str = "-"
    created: str | None = None
    modified: str | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind == KIND_FOLDER


@dataclass(frozen=True)
class ExportRecord:
    """One tab-separated export row derived from a visited entry."""

    relpath: str
    name: str
    kind: str
    size: int
    created: str
    modified: str
    permissions: str

    @classmethod
    def from_entry(cls, entry: Entry, relpath: str) -> ExportRecord:
        return cls(
            relpath=relpath,
            name=entry.name,
            kind=entry.kind,
            size=entry.size,
            created=entry.created or "",
            modified=entry.modified or "",
            permissions=entry.permissions,
        )


@dataclass(frozen=True)
class VisitEvent:
    """Everything a renderer needs to draw or export one visited entry."""

    entry: Entry
    depth: int
    prefix: str
    branch: str
    is_last: bool
    record: ExportRecord


@dataclass
class TraversalState:
    """Running counters and export rows accumulated by one walk.

    ``max_depth`` tracks the deepest level at which an entry was emitted, so
    an empty directory does not count as a layer of its own.
    """

    folders: int = 0
    files: int = 0
    max_depth: int = 0
    records: list[ExportRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.folders + self.files


__all__ = [
    "KIND_FILE",
    "KIND_FOLDER",
    "Entry",
    "ExportRecord",
    "VisitEvent",
    "TraversalState",
]
