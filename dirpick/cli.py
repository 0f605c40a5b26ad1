"""Command-line front door for dirpick.

Parses CLI options, merges them with the persisted config, and resolves the
starting directory. Then runs an interactive session and prints the chosen
path on stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .keymap import Keymap
from .render import DEFAULT_CURSOR
from .runtime import run_picker
from .runtime.loop import PickerOptions
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
EXIT_NO_SELECTION = 1


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def configure_logging(log_file: str | None, level_name: str) -> None:
    """Send log records to ``log_file``; without one, logging stays silent."""
    if not log_file:
        return
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(filename=log_file, level=level, format=LOG_FORMAT)


def _interactive_terminal_available() -> bool:
    return sys.stdin.isatty()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirpick",
        description="Pick a file from a directory tree in the terminal and print its path.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to start in. Defaults to current directory.")
    parser.add_argument(
        "--height",
        type=_positive_int,
        default=None,
        help="Fixed number of entry rows (default: terminal height minus chrome).",
    )
    parser.add_argument(
        "--cursor",
        default=None,
        help=f"Cursor marker (default: {DEFAULT_CURSOR!r}). Use --cursor=MARKER for markers starting with '-'.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--save-theme", action="store_true", help="Persist --theme as the default theme.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", default=None, help="Write debug logging to this file.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Log level used with --log-file.",
    )
    return parser


def build_options(args: argparse.Namespace) -> PickerOptions:
    """Merge CLI flags over persisted config into session options."""
    theme_name = args.theme or config.load_theme_name()
    if args.theme and args.save_theme:
        config.save_theme_name(args.theme)
    cursor_marker = args.cursor or config.load_cursor_marker() or DEFAULT_CURSOR
    height = args.height if args.height is not None else config.load_height()
    keymap = Keymap.default().apply_overrides(config.load_key_overrides())
    return PickerOptions(
        height=height,
        cursor_marker=cursor_marker,
        theme=resolve_theme(theme_name, no_color=args.no_color),
        keymap=keymap,
    )


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments, run a picker session, and report its outcome.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. A chosen file is printed to stdout; cancellation or an
    unreadable directory exits with status 1.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path).expanduser() if args.path else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")
    if not _interactive_terminal_available():
        raise SystemExit("dirpick needs an interactive terminal on stdin.")

    options = build_options(args)
    logger.debug("starting in %s with theme %s", path, options.theme.name)
    result = run_picker(path.resolve(), options)
    if result.selected:
        sys.stdout.write(f"{result.path}\n")
        sys.stdout.flush()
        return
    if result.error:
        sys.stderr.write(f"dirpick: {result.error}\n")
    raise SystemExit(EXIT_NO_SELECTION)


if __name__ == "__main__":
    main()
