"""Command-line front door for etree.

Parses options (including the classic ``/x`` and combined ``-asp`` forms),
merges them with persisted user defaults into a ``TraversalConfig``, then
either prints the tree to stdout or exports it as TSV.
"""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from pathlib import Path

from . import __version__
from .config import TraversalConfig, load_user_defaults
from .file_tree_model import FileSystem, TraversalState, current_platform, walk
from .render import ConsoleRenderer, write_tsv
from .ui_theme import available_theme_names, resolve_palette

logger = logging.getLogger(__name__)

DEBUG_ENV_VAR = "ETREE_DEBUG"

_SLASH_OPTIONS = {
    "/d": "-d",
    "/a": "-a",
    "/s": "-s",
    "/p": "-p",
    "/l": "-l",
    "/I": "-I",
    "/o": "-o",
    "/nc": "-nc",
    "/v": "-v",
    "/?": "-?",
}
_SLASH_LEVEL_RE = re.compile(r"^/l(\d+)$")

EPILOG = """\
Notes:
  - Output file (-o): exports all fields as tab-separated UTF-8 (TSV, not CSV)
    with a byte-order mark, ready for spreadsheet import.
  - Hidden files and folders are included only with -a.
  - Unicode: all filenames (including RTL/Arabic/Hebrew/Chinese) are supported;
    RTL names are reordered for display on interactive terminals only.
  - Coloring is auto-detected from the terminal; -nc turns it off.
  - Defaults for -a, -s, -p, -nc, --ascii and --theme can be set in the user
    config file (config.json in the platform config directory).

Examples:
  etree -a -l2              # All visible/hidden entries, 2 levels deep
  etree -o files.tsv        # TSV export for spreadsheet import
  etree -a -o all.tsv       # All files, including hidden, to TSV
  etree -I*.tmp -s -p       # Exclude .tmp files, show sizes and permissions
"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        """Report a usage error with full help and exit with status 1."""
        self.print_help(sys.stderr)
        self.exit(1, f"\nError: {message}\n")


def _non_negative_int(value: str) -> int:
    """argparse type for depth limits (0 means unlimited)."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def normalize_argv(argv: list[str]) -> list[str]:
    """Rewrite classic spellings into argparse-friendly ones.

    ``/x`` option tokens become ``-x`` (exact tokens only, so absolute paths
    survive) and a bare ``-l`` not followed by a number means ``-l1``.
    """
    out: list[str] = []
    for idx, arg in enumerate(argv):
        level_match = _SLASH_LEVEL_RE.match(arg)
        if level_match:
            arg = f"-l{level_match.group(1)}"
        else:
            arg = _SLASH_OPTIONS.get(arg, arg)
        if arg == "-l":
            following = argv[idx + 1] if idx + 1 < len(argv) else ""
            if not following.isdigit():
                arg = "-l1"
        out.append(arg)
    return out


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="etree",
        description=f"eTree - Directory Tree Viewer v{__version__}",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("path", nargs="?", default=".", help="Directory to display (default: current directory).")
    parser.add_argument("-d", dest="dirs_only", action="store_true", help="Only show directories (no files).")
    parser.add_argument("-a", dest="all", action="store_true", help="Show hidden files and folders.")
    parser.add_argument(
        "-I",
        dest="exclude",
        metavar="PAT",
        default="",
        help="Exclude files/folders matching pattern (wildcards *, ?).",
    )
    parser.add_argument("-s", dest="size", action="store_true", help="Show file sizes in bytes (with thousands separators).")
    parser.add_argument(
        "-p",
        dest="permissions",
        action="store_true",
        help="Show file permissions (RHSA on Windows, rwx on UNIX).",
    )
    parser.add_argument(
        "-l",
        dest="level",
        metavar="N",
        type=_non_negative_int,
        default=0,
        help="Limit depth to N levels (default: unlimited).",
    )
    parser.add_argument("-nc", dest="no_color", action="store_true", help="Disable color output.")
    parser.add_argument("-o", dest="output", metavar="FILE", default=None, help="Export to FILE as TSV instead of printing.")
    parser.add_argument("--ascii", action="store_true", help="Draw branches with ASCII characters.")
    parser.add_argument("--follow-symlinks", action="store_true", help="Descend into symlinked directories.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"Color theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("-v", "--version", action="version", version=f"eTree version {__version__}")
    parser.add_argument("-?", "--help", action="help", help="Show this help message and exit.")
    return parser


def _report_error(message: str) -> None:
    print(f"[etree] {message}", file=sys.stderr)


def _configure_logging() -> None:
    level = logging.DEBUG if os.environ.get(DEBUG_ENV_VAR) else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def build_config(args: argparse.Namespace, platform: FileSystem) -> TraversalConfig:
    """Merge parsed arguments with user defaults into a ``TraversalConfig``."""
    defaults = load_user_defaults()
    no_color = args.no_color or defaults.no_color
    return TraversalConfig(
        root=Path(args.path),
        max_depth=args.level,
        show_hidden=args.all or defaults.show_hidden,
        directories_only=args.dirs_only,
        exclude_pattern=args.exclude,
        show_size=args.size or defaults.show_size,
        show_permissions=args.permissions or defaults.show_permissions,
        color_enabled=not no_color and platform.supports_color(sys.stdout),
        export_path=Path(args.output) if args.output else None,
        follow_symlinks=args.follow_symlinks,
        ascii=args.ascii or defaults.ascii,
        theme=args.theme or defaults.theme,
    )


def run_console(config: TraversalConfig, platform: FileSystem) -> TraversalState:
    """Stream the tree for ``config`` to stdout and return the final state."""
    renderer = ConsoleRenderer(
        sys.stdout,
        resolve_palette(config.theme, color_enabled=config.color_enabled),
        show_size=config.show_size,
        show_permissions=config.show_permissions,
        compose_rtl=platform.is_console(sys.stdout),
    )
    state = TraversalState()
    renderer.write_root(config.root)
    for event in walk(config.root, config, state, platform=platform, report_error=_report_error):
        renderer.write_event(event)
    renderer.write_summary(state)
    return state


def run_export(config: TraversalConfig, platform: FileSystem) -> int:
    """Walk silently and write collected records to ``config.export_path``."""
    state = TraversalState()
    for _event in walk(config.root, config, state, platform=platform, report_error=_report_error):
        pass
    error = write_tsv(config.export_path, state.records)
    if error is not None:
        _report_error(f"Could not write to file {config.export_path}: {error}")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run one traversal, and return the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(normalize_argv(argv))
    _configure_logging()
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(errors="replace")

    root = Path(args.path)
    if not root.is_dir():
        _report_error(f"Not a directory: {root}")
        return 1

    platform = current_platform(follow_symlinks=args.follow_symlinks)
    config = build_config(args, platform)
    logger.debug("traversal config: %s", config)
    if config.export_mode:
        return run_export(config, platform)
    run_console(config, platform)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
