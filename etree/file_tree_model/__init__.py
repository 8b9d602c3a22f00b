"""Domain model and traversal for filesystem directory trees.

This package contains the non-rendering core:
- entry/record/state datatypes
- platform filesystem capabilities (listing, hidden flag, metadata)
- entry classification (hidden / pattern / directories-only filters)
- the depth-first walker producing visit events
"""

from __future__ import annotations

from .types import KIND_FILE, KIND_FOLDER, Entry, ExportRecord, TraversalState, VisitEvent
from .fs import FileSystem, WindowsFileSystem, current_platform, format_timestamp, posix_permission_string
from .classify import Classification, classify_entry, exclusion_reason
from .walk import ASCII_GLYPHS, UNICODE_GLYPHS, BranchGlyphs, ErrorReporter, glyphs_for, walk, walk_tree

__all__ = [
    "KIND_FILE",
    "KIND_FOLDER",
    "Entry",
    "ExportRecord",
    "TraversalState",
    "VisitEvent",
    "FileSystem",
    "WindowsFileSystem",
    "current_platform",
    "format_timestamp",
    "posix_permission_string",
    "Classification",
    "classify_entry",
    "exclusion_reason",
    "BranchGlyphs",
    "UNICODE_GLYPHS",
    "ASCII_GLYPHS",
    "ErrorReporter",
    "glyphs_for",
    "walk",
    "walk_tree",
]
