"""Tests for platform filesystem capabilities."""

from __future__ import annotations

import os
import re
import stat
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace

from etree.file_tree_model import FileSystem, WindowsFileSystem, format_timestamp, posix_permission_string

TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")


class _FakeDirEntry:
    """Minimal ``os.DirEntry`` stand-in returning a canned stat result."""

    def __init__(self, name: str, stat_result: object | None, is_dir: bool = False) -> None:
        self.name = name
        self.path = f"/fake/{name}"
        self._stat_result = stat_result
        self._is_dir = is_dir

    def is_dir(self, follow_symlinks: bool = True) -> bool:
        return self._is_dir

    def stat(self, follow_symlinks: bool = True) -> object:
        if self._stat_result is None:
            raise PermissionError("denied")
        return self._stat_result


class PosixFileSystemTests(unittest.TestCase):
    def test_list_directory_returns_all_children(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_text("a", encoding="utf-8")
            (root / ".hidden").write_text("h", encoding="utf-8")
            (root / "sub").mkdir()

            entries, scan_error = FileSystem().list_directory(root)

            self.assertIsNone(scan_error)
            self.assertEqual(sorted(entry.name for entry in entries), [".hidden", "a.txt", "sub"])

    def test_list_directory_reports_missing_directory_as_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entries, scan_error = FileSystem().list_directory(Path(tmp) / "missing")

        self.assertEqual(entries, [])
        self.assertIsInstance(scan_error, FileNotFoundError)

    def test_file_size_and_timestamps_come_from_stat(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "data.bin"
            target.write_bytes(b"x" * 1234)
            entry = next(e for e in os.scandir(tmp) if e.name == "data.bin")

            platform = FileSystem()
            created, modified = platform.timestamps(entry)

            self.assertEqual(platform.file_size(entry), 1234)
            self.assertRegex(modified, TIMESTAMP_RE)
            if not hasattr(entry.stat(), "st_birthtime"):
                self.assertIsNone(created)

    def test_metadata_failures_fall_back_to_defaults(self) -> None:
        entry = _FakeDirEntry("gone.txt", None)
        platform = FileSystem()

        self.assertEqual(platform.file_size(entry), 0)
        self.assertEqual(platform.permissions(entry), "-")
        self.assertEqual(platform.timestamps(entry), (None, None))
        self.assertFalse(platform.is_hidden(entry))

    @unittest.skipUnless(os.name == "posix", "POSIX permission bits")
    def test_permissions_render_rwx_triplets(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "script.sh"
            target.write_text("#!/bin/sh\n", encoding="utf-8")
            target.chmod(0o750)
            entry = next(e for e in os.scandir(tmp) if e.name == "script.sh")

            self.assertEqual(FileSystem().permissions(entry), "rwxr-x---")

    def test_posix_permission_string_ignores_special_bits(self) -> None:
        self.assertEqual(posix_permission_string(stat.S_IFREG | 0o4644), "rw-r--r--")
        self.assertEqual(posix_permission_string(0), "---------")

    def test_is_console_is_false_for_plain_streams(self) -> None:
        import io

        self.assertFalse(FileSystem().is_console(io.StringIO()))
        self.assertFalse(FileSystem().supports_color(io.StringIO()))


class WindowsFileSystemTests(unittest.TestCase):
    def _stat(self, attributes: int, **extra: object) -> SimpleNamespace:
        values = {"st_file_attributes": attributes, "st_size": 10, "st_mtime": 0.0, "st_ctime": 0.0}
        values.update(extra)
        return SimpleNamespace(**values)

    def test_permissions_use_attribute_letters(self) -> None:
        attributes = stat.FILE_ATTRIBUTE_READONLY | stat.FILE_ATTRIBUTE_ARCHIVE
        entry = _FakeDirEntry("a.txt", self._stat(attributes))

        self.assertEqual(WindowsFileSystem().permissions(entry), "RA")

    def test_all_attribute_letters_in_fixed_order(self) -> None:
        attributes = (
            stat.FILE_ATTRIBUTE_ARCHIVE
            | stat.FILE_ATTRIBUTE_SYSTEM
            | stat.FILE_ATTRIBUTE_HIDDEN
            | stat.FILE_ATTRIBUTE_READONLY
        )
        entry = _FakeDirEntry("sys.dat", self._stat(attributes))

        self.assertEqual(WindowsFileSystem().permissions(entry), "RHSA")

    def test_no_attributes_falls_back_to_dash(self) -> None:
        entry = _FakeDirEntry("plain.txt", self._stat(stat.FILE_ATTRIBUTE_NORMAL))

        self.assertEqual(WindowsFileSystem().permissions(entry), "-")

    def test_hidden_attribute_sets_hidden_flag(self) -> None:
        hidden = _FakeDirEntry("secret", self._stat(stat.FILE_ATTRIBUTE_HIDDEN))
        visible = _FakeDirEntry("shown", self._stat(0))

        self.assertTrue(WindowsFileSystem().is_hidden(hidden))
        self.assertFalse(WindowsFileSystem().is_hidden(visible))

    def test_creation_time_prefers_birthtime_then_ctime(self) -> None:
        with_birth = _FakeDirEntry("a", self._stat(0, st_birthtime=86400.0 * 365, st_ctime=0.0))
        without_birth = _FakeDirEntry("b", self._stat(0, st_ctime=86400.0 * 365))

        created_a, _modified = WindowsFileSystem().timestamps(with_birth)
        created_b, _modified = WindowsFileSystem().timestamps(without_birth)

        self.assertEqual(created_a, format_timestamp(86400.0 * 365))
        self.assertEqual(created_b, format_timestamp(86400.0 * 365))


class FormatTimestampTests(unittest.TestCase):
    def test_none_stays_none(self) -> None:
        self.assertIsNone(format_timestamp(None))

    def test_out_of_range_value_is_none(self) -> None:
        self.assertIsNone(format_timestamp(1e20))

    def test_format_is_fixed_width(self) -> None:
        self.assertRegex(format_timestamp(1_700_000_000.0), TIMESTAMP_RE)


if __name__ == "__main__":
    unittest.main()
