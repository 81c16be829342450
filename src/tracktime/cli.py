"""Command-line interface for tracktime.

tracktime keeps per-category timers across invocations.

COMMANDS:
---------
- start <category>: open a session; fails if one is already running.
- stop <category>:  close the running session and add it to the totals.
- status:           show sessions and total time per category.
- rebuild:          recompute totals.json from timestamps.json.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from tracktime import __version__
from tracktime.config import get_settings
from tracktime.errors import TrackerError, UsageError
from tracktime.formatting import format_duration
from tracktime.storage import TrackerStore
from tracktime.tracker import TimeTracker

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

USAGE_TEXT = """Usage: tracktime [-v] [--data-dir DIR] [start|stop|status|rebuild] [category]
start   : Start tracking time for a category.
stop    : Stop tracking time for a category.
status  : Show total time spent on each category.
rebuild : Recompute totals from the event log."""

# Commands whose next argument is always the category
CATEGORY_COMMANDS = ("start", "stop")


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises ``UsageError`` instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    fmt = "%(name)s: %(message)s" if verbose else "%(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[RichHandler(console=err_console, show_path=verbose)],
    )


def _separate_category(argv: list[str]) -> list[str]:
    """Insert ``--`` after start/stop when the category begins with a dash.

    Categories such as ``-work`` are valid names; without the separator
    argparse would read them as unknown options.

    Args:
        argv: Command-line arguments without the program name

    Returns:
        The arguments, with ``--`` inserted where needed
    """
    i = 0
    while i < len(argv):
        token = argv[i]
        if token == "--data-dir":
            i += 2
            continue
        if token.startswith("-"):
            i += 1
            continue
        if token in CATEGORY_COMMANDS:
            rest = argv[i + 1:]
            if rest and rest[0].startswith("-") and rest[0] not in ("-h", "--help", "--"):
                return [*argv[:i + 1], "--", *rest]
        return argv
    return argv


def _get_tracker(args: argparse.Namespace) -> TimeTracker:
    config = get_settings()
    data_dir = args.data_dir or config.get_data_dir()
    return TimeTracker(TrackerStore(data_dir, lock_timeout=config.lock_timeout))


def cmd_start(args: argparse.Namespace) -> None:
    """Start a timer."""
    _get_tracker(args).start(args.category)
    console.print(f"Started tracking time for '{escape(args.category)}'.", soft_wrap=True)


def cmd_stop(args: argparse.Namespace) -> None:
    """Stop a timer and report the category total."""
    result = _get_tracker(args).stop(args.category)
    console.print(
        f"Stopped tracking time for '{escape(result.category)}'. "
        f"Total time: {format_duration(result.total.time)}.",
        soft_wrap=True,
    )


def cmd_status(args: argparse.Namespace) -> None:
    """Show totals per category, then any running timers."""
    report = _get_tracker(args).status()

    if not report.totals:
        console.print("No tracked categories yet.")
    else:
        table = Table()
        table.add_column("Category", style="cyan")
        table.add_column("Sessions", style="magenta")
        table.add_column("Total Time", style="green")

        for category, entry in report.totals.items():
            table.add_row(escape(category), str(entry.sessions), format_duration(entry.time))

        console.print(table)

    for timer in report.running:
        console.print(
            f"Running: '{escape(timer.category)}' for {format_duration(timer.elapsed)}",
            soft_wrap=True,
        )


def cmd_rebuild(args: argparse.Namespace) -> None:
    """Recompute totals from the event log."""
    totals = _get_tracker(args).rebuild()
    console.print(f"Rebuilt totals for {len(totals)} categories.")


def cmd_version(args: argparse.Namespace) -> None:
    """Show version information."""
    console.print(f"tracktime v{__version__}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all commands."""
    parser = _ArgumentParser(
        prog="tracktime",
        description="Track time spent on named categories",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed output")
    parser.add_argument(
        "--data-dir", type=Path, default=None,
        help="Directory for timestamps.json and totals.json (default: ~/apps/time_tracker)"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    start_parser = subparsers.add_parser("start", help="Start tracking time for a category")
    start_parser.add_argument("category", help="Category name (letters, digits, '-' and '_')")
    start_parser.set_defaults(func=cmd_start)

    stop_parser = subparsers.add_parser("stop", help="Stop tracking time for a category")
    stop_parser.add_argument("category", help="Category name (letters, digits, '-' and '_')")
    stop_parser.set_defaults(func=cmd_stop)

    status_parser = subparsers.add_parser("status", help="Show total time spent on each category")
    status_parser.set_defaults(func=cmd_status)

    rebuild_parser = subparsers.add_parser(
        "rebuild",
        help="Recompute totals from the event log",
        description="Rewrite totals.json from the STOP events in timestamps.json."
    )
    rebuild_parser.set_defaults(func=cmd_rebuild)

    version_parser = subparsers.add_parser("version", help="Show version information")
    version_parser.set_defaults(func=cmd_version)

    return parser


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the tracktime CLI."""
    parser = build_parser()

    try:
        if argv is None:
            argv = sys.argv[1:]
        args = parser.parse_args(_separate_category(argv))
        setup_logging(args.verbose)

        if args.command is None:
            raise UsageError("no command given")

        args.func(args)
    except UsageError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
        err_console.print(USAGE_TEXT, markup=False)
        sys.exit(1)
    except TrackerError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
