"""Command line entry point of the application blocker."""

from __future__ import annotations

import argparse
import os
import sys
from datetime import datetime, time
from pathlib import Path

from foccuss.controller import BlockerController
from foccuss.database import Database, DatabaseError, _normalize_path
from foccuss.detector import AppDetector
from foccuss.models import App, BlockTimeSettings, Week
from foccuss.service import LinuxService

_DAYS = {
    "mon": "monday",
    "tue": "tuesday",
    "wed": "wednesday",
    "thu": "thursday",
    "fri": "friday",
    "sat": "saturday",
    "sun": "sunday",
}


def _parse_time(text: str) -> time:
    try:
        return datetime.strptime(text, "%H:%M").time()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid time {text!r}, expected HH:MM") from exc


def _parse_days(text: str) -> Week:
    enabled = set()
    for part in text.split(","):
        part = part.strip().lower()
        if not part:
            continue
        day = _DAYS.get(part[:3])
        if day is None or not day.startswith(part):
            raise argparse.ArgumentTypeError(f"unknown day {part!r}")
        enabled.add(day)
    return Week(**{day: day in enabled for day in _DAYS.values()})


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="foccuss", description="Block applications during focus hours."
    )
    parser.add_argument("--service", action="store_true", help="run the background monitor")
    parser.add_argument("--elevated", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument("--database", type=Path, help="database file to use")
    parser.add_argument("--desktop-dir", action="append", type=Path, help="desktop entry directory")
    parser.add_argument("--path-dir", action="append", type=Path, help="executable directory")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("status", help="show monitoring, service and schedule status")
    sub.add_parser("list", help="list blocked applications")
    installed = sub.add_parser("installed", help="list installed applications")
    installed.add_argument("search", nargs="?", default="")
    block = sub.add_parser("block", help="block an application")
    block.add_argument("path")
    block.add_argument("--name")
    unblock = sub.add_parser("unblock", help="unblock an application")
    unblock.add_argument("path")
    schedule = sub.add_parser("schedule", help="show or change the blocking schedule")
    schedule.add_argument("--start", type=_parse_time)
    schedule.add_argument("--end", type=_parse_time)
    schedule.add_argument("--days", type=_parse_days)
    active = schedule.add_mutually_exclusive_group()
    active.add_argument("--active", dest="active", action="store_const", const=True)
    active.add_argument("--inactive", dest="active", action="store_const", const=False)
    return parser


def _format_schedule(settings: BlockTimeSettings) -> str:
    days = [day.capitalize() for day in _DAYS.values() if getattr(settings.week, day)]
    return (
        f"{settings.start:%H:%M}-{settings.end:%H:%M} "
        f"days: {', '.join(days) or 'none'} "
        f"active: {'yes' if settings.active else 'no'}"
    )


def _run_service(database: Database) -> int:
    service = LinuxService(database)
    try:
        monitor = service.initialize()
    except RuntimeError:
        print("Failed to initialize service", file=sys.stderr)
        return 1
    print("Starting Foccuss service...")
    monitor.run_forever()
    return 0


def _run_command(args: argparse.Namespace, database: Database) -> int:
    detector = None
    if args.command == "installed":
        detector = AppDetector(desktop_dirs=args.desktop_dir, path_dirs=args.path_dir)
    controller = BlockerController(database, detector)

    if args.command == "list":
        for app in controller.blocked_apps:
            print(f"{app.name}\t{app.path}")
    elif args.command == "installed":
        controller.refresh_installed_apps()
        for app in controller.search_installed(args.search):
            print(f"{app.name}\t{app.path}")
    elif args.command == "block":
        app = App(args.path, args.name or os.path.basename(args.path))
        if not controller.block_app(app):
            print(f"Failed to block application: {app.name}", file=sys.stderr)
            return 1
        print(f"Application has been blocked: {app.name}")
    elif args.command == "unblock":
        wanted = _normalize_path(args.path)
        name = next(
            (a.name for a in controller.blocked_apps if a.path == wanted),
            os.path.basename(args.path),
        )
        app = App(args.path, name)
        if not controller.unblock_app(app):
            print(f"Failed to unblock application: {app.name}", file=sys.stderr)
            return 1
        print(f"Application has been unblocked: {app.name}")
    elif args.command == "schedule":
        settings = controller.load_time_settings()
        changes = {
            "start": args.start,
            "end": args.end,
            "week": args.days,
            "active": args.active,
        }
        changes = {key: value for key, value in changes.items() if value is not None}
        if changes:
            settings = BlockTimeSettings(
                start=changes.get("start", settings.start),
                end=changes.get("end", settings.end),
                week=changes.get("week", settings.week),
                active=changes.get("active", settings.active),
            )
            controller.save_time_settings(settings)
            print("Time settings saved successfully")
        print(_format_schedule(settings))
    else:
        print(controller.monitoring_status())
        print(controller.service_status())
        print(_format_schedule(controller.load_time_settings()))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the blocker from the command line and return the exit status."""
    args = _build_parser().parse_args(argv)
    database = Database(args.database)
    try:
        database.initialize()
    except DatabaseError as exc:
        print(f"Failed to initialize database: {exc}", file=sys.stderr)
        return 1
    try:
        if args.service:
            return _run_service(database)
        try:
            return _run_command(args, database)
        except DatabaseError as exc:
            print(f"Database error: {exc}", file=sys.stderr)
            return 1
    finally:
        database.close()


if __name__ == "__main__":
    sys.exit(main())