"""Tab-separated export of traversal records.

The file starts with a UTF-8 byte-order mark so spreadsheet tools detect the
encoding, followed by a fixed header and one ``\\n``-terminated row per
record. Fields are written verbatim: a tab or newline inside a name breaks
the row layout, and no quoting is attempted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ..file_tree_model.types import ExportRecord

logger = logging.getLogger(__name__)

TSV_HEADER: tuple[str, ...] = (
    "Relative Path",
    "Name",
    "Type",
    "Size (bytes)",
    "Created",
    "Modified",
    "Permissions",
)


def format_row(record: ExportRecord) -> str:
    """Return one TSV row (with trailing newline) in fixed column order."""
    fields = (
        record.relpath,
        record.name,
        record.kind,
        str(record.size),
        record.created,
        record.modified,
        record.permissions,
    )
    return "\t".join(fields) + "\n"


def write_tsv(path: Path, records: Iterable[ExportRecord]) -> Exception | None:
    """Write ``records`` to ``path`` as BOM-prefixed UTF-8 TSV.

    Returns ``None`` on success or the ``OSError`` that stopped the export;
    a partially written file may remain in that case.
    """
    count = 0
    try:
        with open(path, "w", encoding="utf-8-sig", errors="replace", newline="") as handle:
            handle.write("\t".join(TSV_HEADER) + "\n")
            for record in records:
                handle.write(format_row(record))
                count += 1
    except OSError as exc:
        logger.debug("export to %s failed after %d rows: %s", path, count, exc)
        return exc
    logger.debug("exported %d rows to %s", count, path)
    return None


__all__ = ["TSV_HEADER", "format_row", "write_tsv"]
