"""Output stages for visit events: console tree text and TSV export."""

from __future__ import annotations

from .console import ConsoleRenderer, format_size_bytes, format_summary, sanitize_terminal_text
from .export import TSV_HEADER, format_row, write_tsv

__all__ = [
    "ConsoleRenderer",
    "format_size_bytes",
    "format_summary",
    "sanitize_terminal_text",
    "TSV_HEADER",
    "format_row",
    "write_tsv",
]
