"""Host filesystem capabilities used by the tree walker.

The walker never touches ``os`` directly: listing, hidden flags, permission
strings, timestamps and console detection all go through a ``FileSystem``
object so one walker serves every platform. ``current_platform`` picks the
implementation for the running interpreter.
"""

from __future__ import annotations

import logging
import os
import stat
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
NO_PERMISSIONS = "-"

_PERMISSION_BITS: tuple[tuple[int, str], ...] = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)


def format_timestamp(seconds: float | None) -> str | None:
    """Format epoch seconds as local ``YYYY-MM-DD HH:MM:SS`` or ``None``."""
    if seconds is None:
        return None
    try:
        return datetime.fromtimestamp(seconds).strftime(TIMESTAMP_FORMAT)
    except (OverflowError, OSError, ValueError):
        return None


def posix_permission_string(mode: int) -> str:
    """Render the nine owner/group/other ``rwx`` characters for ``mode``."""
    return "".join(char if mode & bit else "-" for bit, char in _PERMISSION_BITS)


class FileSystem:
    """POSIX filesystem capabilities (also the base for other platforms)."""

    def __init__(self, follow_symlinks: bool = False) -> None:
        self.follow_symlinks = follow_symlinks

    def list_directory(self, directory: Path) -> tuple[list[os.DirEntry], Exception | None]:
        """Return all direct children of ``directory``.

        Returns ``(entries, scan_error)``; ``scan_error`` is set and
        ``entries`` empty when the directory cannot be enumerated.
        """
        try:
            with os.scandir(directory) as it:
                return list(it), None
        except OSError as exc:
            logger.debug("scandir failed for %s: %s", directory, exc)
            return [], exc

    def _stat(self, entry: os.DirEntry) -> os.stat_result | None:
        try:
            return entry.stat(follow_symlinks=self.follow_symlinks)
        except OSError:
            pass
        if not self.follow_symlinks:
            return None
        # Dangling symlink: fall back to the link itself.
        try:
            return entry.stat(follow_symlinks=False)
        except OSError:
            return None

    def is_dir(self, entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir(follow_symlinks=self.follow_symlinks)
        except OSError:
            return False

    def is_hidden(self, entry: os.DirEntry) -> bool:
        """Return the platform hidden flag (BSD/macOS ``UF_HIDDEN``)."""
        hidden_flag = getattr(stat, "UF_HIDDEN", 0)
        if not hidden_flag:
            return False
        st = self._stat(entry)
        if st is None:
            return False
        return bool(getattr(st, "st_flags", 0) & hidden_flag)

    def file_size(self, entry: os.DirEntry) -> int:
        """Return size in bytes, or ``0`` when it cannot be read."""
        st = self._stat(entry)
        if st is None:
            return 0
        return int(st.st_size)

    def permissions(self, entry: os.DirEntry) -> str:
        st = self._stat(entry)
        if st is None:
            return NO_PERMISSIONS
        return posix_permission_string(st.st_mode)

    def _creation_seconds(self, st: os.stat_result) -> float | None:
        return getattr(st, "st_birthtime", None)

    def timestamps(self, entry: os.DirEntry) -> tuple[str | None, str | None]:
        """Return ``(created, modified)``; creation time only where the OS keeps it."""
        st = self._stat(entry)
        if st is None:
            return None, None
        return format_timestamp(self._creation_seconds(st)), format_timestamp(st.st_mtime)

    def is_console(self, stream: TextIO) -> bool:
        """Return whether ``stream`` is an interactive terminal."""
        try:
            return bool(stream.isatty())
        except (AttributeError, ValueError):
            return False

    def supports_color(self, stream: TextIO) -> bool:
        if not self.is_console(stream):
            return False
        return os.environ.get("TERM", "") != "dumb"


class WindowsFileSystem(FileSystem):
    """Windows capabilities: attribute letters, hidden attribute, creation time."""

    _ATTRIBUTE_LETTERS: tuple[tuple[str, str], ...] = (
        ("FILE_ATTRIBUTE_READONLY", "R"),
        ("FILE_ATTRIBUTE_HIDDEN", "H"),
        ("FILE_ATTRIBUTE_SYSTEM", "S"),
        ("FILE_ATTRIBUTE_ARCHIVE", "A"),
    )

    def _attributes(self, entry: os.DirEntry) -> int | None:
        st = self._stat(entry)
        if st is None:
            return None
        return getattr(st, "st_file_attributes", None)

    def is_hidden(self, entry: os.DirEntry) -> bool:
        attributes = self._attributes(entry)
        if attributes is None:
            return False
        return bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)

    def permissions(self, entry: os.DirEntry) -> str:
        attributes = self._attributes(entry)
        if attributes is None:
            return NO_PERMISSIONS
        letters = "".join(
            letter for flag_name, letter in self._ATTRIBUTE_LETTERS if attributes & getattr(stat, flag_name)
        )
        return letters or NO_PERMISSIONS

    def _creation_seconds(self, st: os.stat_result) -> float | None:
        birthtime = getattr(st, "st_birthtime", None)
        if birthtime is not None:
            return birthtime
        # Before 3.12 Windows reported creation time through st_ctime.
        return st.st_ctime

    def supports_color(self, stream: TextIO) -> bool:
        if not self.is_console(stream):
            return False
        return _enable_virtual_terminal(stream)


def _enable_virtual_terminal(stream: TextIO) -> bool:
    """Switch the Windows console behind ``stream`` to ANSI escape processing."""
    try:
        import ctypes
        import msvcrt

        handle = msvcrt.get_osfhandle(stream.fileno())
        kernel32 = ctypes.windll.kernel32
        mode = ctypes.c_uint32()
        if not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            return False
        enable_virtual_terminal_processing = 0x0004
        return bool(kernel32.SetConsoleMode(handle, mode.value | enable_virtual_terminal_processing))
    except (AttributeError, ImportError, OSError, ValueError):
        return False


def current_platform(follow_symlinks: bool = False) -> FileSystem:
    """Return the ``FileSystem`` implementation for the running platform."""
    if sys.platform == "win32":
        return WindowsFileSystem(follow_symlinks=follow_symlinks)
    return FileSystem(follow_symlinks=follow_symlinks)


__all__ = [
    "TIMESTAMP_FORMAT",
    "NO_PERMISSIONS",
    "FileSystem",
    "WindowsFileSystem",
    "current_platform",
    "format_timestamp",
    "posix_permission_string",
]
