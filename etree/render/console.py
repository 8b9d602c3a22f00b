"""Console rendering of visit events as colored tree lines.

Each event becomes ``prefix + branch + name`` plus optional size and
permission suffixes. Names go through control-character escaping and, on
interactive terminals, RTL composition. Colors come from a resolved
``Palette``; the plain palette yields escape-free text.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TextIO

from ..file_tree_model.types import TraversalState, VisitEvent
from ..rtl import compose, needs_composition
from ..ui_theme import PLAIN_PALETTE, Palette

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def sanitize_terminal_text(text: str) -> str:
    """Escape terminal control characters to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", text)


def format_size_bytes(size: int) -> str:
    """Format a byte count with thousands separators, e.g. ``1,234 B``."""
    return f"{size:,} B"


def format_summary(state: TraversalState) -> str:
    return f"The tree counts {state.max_depth} layers, {state.folders} folders, {state.files} files."


class ConsoleRenderer:
    """Writes tree lines for visit events to a text stream."""

    def __init__(
        self,
        stream: TextIO,
        palette: Palette = PLAIN_PALETTE,
        *,
        show_size: bool = False,
        show_permissions: bool = False,
        compose_rtl: bool = False,
    ) -> None:
        self.stream = stream
        self.palette = palette
        self.show_size = show_size
        self.show_permissions = show_permissions
        self.compose_rtl = compose_rtl

    def display_name(self, name: str) -> str:
        """Return ``name`` made safe for the terminal, RTL runs composed when enabled."""
        shown = sanitize_terminal_text(name)
        if self.compose_rtl and needs_composition(shown):
            shown = compose(shown)
        return shown

    def format_event(self, event: VisitEvent) -> str:
        """Return the full display line for one event, without a newline."""
        palette = self.palette
        entry = event.entry
        color = palette.directory if entry.is_dir else palette.file
        parts = [event.prefix, color, event.branch, self.display_name(entry.name), palette.reset]
        if self.show_size:
            parts.append(f"{palette.size} [{format_size_bytes(entry.size)}]{palette.reset}")
        if self.show_permissions:
            parts.append(f"{palette.permissions} ({entry.permissions}){palette.reset}")
        return "".join(parts)

    def write_root(self, root: Path | str) -> None:
        palette = self.palette
        self.stream.write(f"{palette.directory}{self.display_name(str(root))}{palette.reset}\n")

    def write_event(self, event: VisitEvent) -> None:
        self.stream.write(self.format_event(event) + "\n")

    def write_summary(self, state: TraversalState) -> None:
        self.stream.write("\n" + format_summary(state) + "\n")


__all__ = [
    "ConsoleRenderer",
    "format_size_bytes",
    "format_summary",
    "sanitize_terminal_text",
]
