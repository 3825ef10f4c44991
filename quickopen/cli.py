"""Command-line front door for quickopen.

Parses CLI options, merges them over the config file, and sets up logging.
Then either prints one filtered listing or runs the interactive browser.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .config import load_config
from .navigation import NavigationState
from .render import format_plain_rows
from .runtime import RuntimeTiming, run_browser
from .ui_theme import available_theme_names, resolve_theme

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(log_file: Path | None, level: str) -> None:
    """Route package logs to ``log_file``; the terminal belongs to the UI."""
    if log_file is None:
        return
    logger = logging.getLogger("quickopen")
    logger.setLevel(getattr(logging, level.upper()))
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)


def render_listing(path: Path, filter_text: str, show_hidden: bool) -> str:
    """Render the visible rows for ``filter_text`` in ``path`` as plain text."""
    state = NavigationState(path, show_hidden=show_hidden)
    state.set_filter(filter_text)
    rows = state.visible_entries()
    if state.listing_error is not None:
        raise SystemExit(f"Cannot read {state.current_directory}: {state.listing_error}")
    return "".join(f"{line}\n" for line in format_plain_rows(rows))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a directory with a type-to-filter list and open files with the default application."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to start in. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    hidden = parser.add_mutually_exclusive_group()
    hidden.add_argument("--show-hidden", dest="show_hidden", action="store_true", default=None, help="List dotfiles.")
    hidden.add_argument("--hide-hidden", dest="show_hidden", action="store_false", help="Omit dotfiles.")
    parser.add_argument("--list", action="store_true", help="Print the filtered listing and exit.")
    parser.add_argument("--filter", default="", help="Filter text applied with --list.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level for --log-file (default: WARNING).",
    )
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and start browsing a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. A non-interactive stdin implies ``--list``.
    """
    args = _build_parser().parse_args()
    configure_logging(args.log_file, args.log_level)
    config = load_config()

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    show_hidden = config.show_hidden if args.show_hidden is None else args.show_hidden

    if args.list or not os.isatty(sys.stdin.fileno()):
        sys.stdout.write(render_listing(path, args.filter, show_hidden))
        return

    theme = resolve_theme(args.theme or config.theme, no_color=args.no_color)
    timing = RuntimeTiming(double_click_seconds=config.double_click_seconds)
    run_browser(
        path,
        theme,
        timing,
        sys.stdin.fileno(),
        sys.stdout.fileno(),
        show_hidden=show_hidden,
    )


if __name__ == "__main__":
    main()
