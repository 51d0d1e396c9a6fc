"""Command-line entry point: log tasks, stretch, edit and report."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Optional

from worklog_engine.config import load_settings
from worklog_engine.errors import WorklogError
from worklog_engine.formatter import ReportFormat, render
from worklog_engine.report import compute_report
from worklog_engine.store import EntryStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="omw", description="Keep a timesheet of what you did and when")
    parser.add_argument("--file", help="Timesheet path (default: $OMW_FILE or ~/.omw/omw.toml)")
    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="Log a task finished now")
    add.add_argument("words", nargs="+", help="Task text; end with ** for a break or *** to ignore")

    commands.add_parser("hello", help="Log the start of a working day")
    commands.add_parser("stretch", help="Log the most recent task again, extending it to now")
    commands.add_parser("edit", help="Edit the timesheet in $EDITOR")

    today = date.today().isoformat()
    report = commands.add_parser("report", help="Report hours over a date range")
    report.add_argument("--from", dest="date_from", default=today, help="First day, YYYY-M-D (default: today)")
    report.add_argument("--to", dest="date_to", default=today, help="Last day, inclusive (default: today)")
    report.add_argument(
        "--format",
        choices=[fmt.value for fmt in ReportFormat],
        default=ReportFormat.TEXT.value,
    )
    return parser


def _edit(store: EntryStore) -> None:
    while True:
        try:
            store.edit()
            return
        except WorklogError as exc:
            if not exc.retry:
                raise
            try:
                answer = input(f"{exc}\nEdit again? [Y/n] ").strip().lower()
            except EOFError:
                answer = "n"
            if answer not in ("", "y", "yes"):
                raise


def run(args: argparse.Namespace, store: EntryStore) -> Optional[str]:
    if args.command == "add":
        store.add(args.words)
    elif args.command == "hello":
        store.hello()
    elif args.command == "stretch":
        store.stretch()
    elif args.command == "edit":
        _edit(store)
    elif args.command == "report":
        report = compute_report(store, args.date_from, args.date_to)
        return render(report, args.format)
    return None


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"omw {args.command}: {exc}", file=sys.stderr)
        return 1
    if args.file:
        data_file = Path(args.file).expanduser()
        settings = replace(settings, data_dir=data_file.parent, data_file=data_file)
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        settings.ensure_directories()
        output = run(args, EntryStore.from_settings(settings))
    except WorklogError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"omw {args.command}: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"omw {args.command}: {exc}", file=sys.stderr)
        return 1

    if output:
        print(output, end="" if output.endswith("\n") else "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
