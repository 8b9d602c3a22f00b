"""Depth-first directory traversal producing one visit event per shown entry.

``walk`` lists a directory, drops entries the classifier excludes, sorts the
survivors by name and yields a ``VisitEvent`` for each before descending into
subdirectories. Statistics and (in export mode) export rows accumulate in the
caller-owned ``TraversalState``. Filesystem failures never escape: a
directory that cannot be listed is reported and skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from ..config import TraversalConfig
from .classify import classify_entry
from .fs import FileSystem, current_platform
from .types import Entry, ExportRecord, TraversalState, VisitEvent

logger = logging.getLogger(__name__)

ErrorReporter = Callable[[str], None]


@dataclass(frozen=True)
class BranchGlyphs:
    """Connector strings drawn in front of entry names."""

    tee: str
    last: str
    vert: str
    space: str


UNICODE_GLYPHS = BranchGlyphs(tee="├── ", last="└── ", vert="│   ", space="    ")
ASCII_GLYPHS = BranchGlyphs(tee="|-- ", last="`-- ", vert="|   ", space="    ")


def glyphs_for(ascii_mode: bool) -> BranchGlyphs:
    return ASCII_GLYPHS if ascii_mode else UNICODE_GLYPHS


def _log_error(message: str) -> None:
    logger.warning("%s", message)


def _sorted_entries(
    directory: Path,
    config: TraversalConfig,
    platform: FileSystem,
    report_error: ErrorReporter,
) -> list[Entry] | None:
    """Return visible children of ``directory`` sorted by name, or ``None`` on scan failure."""
    raw_entries, scan_error = platform.list_directory(directory)
    if scan_error is not None:
        report_error(f"Failed to enumerate directory '{directory}': {scan_error}")
        return None

    entries: list[Entry] = []
    for raw in raw_entries:
        classification = classify_entry(raw, config, platform)
        if not classification.included:
            logger.debug("skipping %s (%s)", raw.path, classification.reason)
            continue
        entries.append(classification.entry)
    # Plain code-point order keeps output identical across platforms.
    entries.sort(key=lambda entry: entry.name)
    return entries


def walk(
    path: Path,
    config: TraversalConfig,
    state: TraversalState,
    depth: int = 1,
    prefix: str = "",
    is_last: bool = True,
    relpath: str = "",
    platform: FileSystem | None = None,
    report_error: ErrorReporter | None = None,
) -> Iterator[VisitEvent]:
    """Yield visit events for everything below ``path`` in display order.

    ``depth`` is the level of ``path``'s children (the root's children are
    level 1). ``is_last`` records whether ``path`` itself was drawn with the
    terminal branch; the prefix already encodes it. Counters in ``state`` are
    bumped as each event is produced, so consuming the iterator partially
    leaves consistent partial counts.
    """
    if config.max_depth > 0 and depth > config.max_depth:
        return
    if platform is None:
        platform = current_platform(follow_symlinks=config.follow_symlinks)
    if report_error is None:
        report_error = _log_error

    entries = _sorted_entries(path, config, platform, report_error)
    if entries is None:
        return

    glyphs = glyphs_for(config.ascii)
    for idx, entry in enumerate(entries):
        entry_is_last = idx == len(entries) - 1
        entry_relpath = f"{relpath}/{entry.name}" if relpath else entry.name
        record = ExportRecord.from_entry(entry, entry_relpath)

        if entry.is_dir:
            state.folders += 1
        else:
            state.files += 1
        state.max_depth = max(state.max_depth, depth)
        if config.export_mode:
            state.records.append(record)

        yield VisitEvent(
            entry=entry,
            depth=depth,
            prefix=prefix,
            branch=glyphs.last if entry_is_last else glyphs.tee,
            is_last=entry_is_last,
            record=record,
        )

        if entry.is_dir:
            yield from walk(
                entry.path,
                config,
                state,
                depth=depth + 1,
                prefix=prefix + (glyphs.space if entry_is_last else glyphs.vert),
                is_last=entry_is_last,
                relpath=entry_relpath,
                platform=platform,
                report_error=report_error,
            )


def walk_tree(
    config: TraversalConfig,
    platform: FileSystem | None = None,
    report_error: ErrorReporter | None = None,
) -> tuple[list[VisitEvent], TraversalState]:
    """Run a complete walk from ``config.root`` and return events plus final state."""
    state = TraversalState()
    events = list(walk(config.root, config, state, platform=platform, report_error=report_error))
    return events, state


__all__ = [
    "ErrorReporter",
    "BranchGlyphs",
    "UNICODE_GLYPHS",
    "ASCII_GLYPHS",
    "glyphs_for",
    "walk",
    "walk_tree",
]
