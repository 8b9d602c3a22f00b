"""Visibility decisions and metadata collection for single directory entries."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..config import TraversalConfig
from ..pattern import matches
from .fs import FileSystem
from .types import KIND_FILE, KIND_FOLDER, Entry

EXCLUDED_HIDDEN = "hidden"
EXCLUDED_PATTERN = "pattern"
EXCLUDED_NOT_DIRECTORY = "not_directory"


@dataclass(frozen=True)
class Classification:
    """Classifier verdict: an included ``entry`` or an exclusion ``reason``."""

    entry: Entry | None = None
    reason: str | None = None

    @property
    def included(self) -> bool:
        return self.entry is not None


def exclusion_reason(raw: os.DirEntry, is_dir: bool, config: TraversalConfig, platform: FileSystem) -> str | None:
    """Return why ``raw`` is hidden from output, or ``None`` when it is shown.

    Rules are checked in order: hidden entries, exclude pattern, then the
    directories-only filter.
    """
    name = raw.name
    if not config.show_hidden and (name.startswith(".") or platform.is_hidden(raw)):
        return EXCLUDED_HIDDEN
    if config.exclude_pattern and matches(name, config.exclude_pattern):
        return EXCLUDED_PATTERN
    if config.directories_only and not is_dir:
        return EXCLUDED_NOT_DIRECTORY
    return None


def classify_entry(raw: os.DirEntry, config: TraversalConfig, platform: FileSystem) -> Classification:
    """Classify one raw directory entry and collect metadata when included."""
    is_dir = platform.is_dir(raw)
    reason = exclusion_reason(raw, is_dir, config, platform)
    if reason is not None:
        return Classification(reason=reason)

    created, modified = platform.timestamps(raw)
    entry = Entry(
        name=raw.name,
        path=Path(raw.path),
        kind=KIND_FOLDER if is_dir else KIND_FILE,
        size=0 if is_dir else platform.file_size(raw),
        permissions=platform.permissions(raw),
        created=created,
        modified=modified,
    )
    return Classification(entry=entry)


__all__ = [
    "EXCLUDED_HIDDEN",
    "EXCLUDED_PATTERN",
    "EXCLUDED_NOT_DIRECTORY",
    "Classification",
    "classify_entry",
    "exclusion_reason",
]
