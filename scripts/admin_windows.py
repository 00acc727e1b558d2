"""Admin CLI for inspecting stored locations and windows.

Usage examples:
    python scripts/admin_windows.py locations
    python scripts/admin_windows.py windows --location 3f2a... --json
    python scripts/admin_windows.py purge --yes
"""

from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
import sys

from app.db import SessionLocal, init_db
from app.services import WindowStore, reminder_key


def _get_session():
    init_db()
    return SessionLocal()


def cmd_locations(args) -> None:
    session = _get_session()
    try:
        locations = WindowStore(session).list_locations()
        if len(locations) == 0:
            print("No locations saved.")
        elif args.json:
            print(json.dumps([loc.model_dump() for loc in locations], indent=2))
        else:
            for loc in locations:
                print(
                    f"{loc.id}: {loc.name} ({loc.latitude:.4f}, {loc.longitude:.4f})"
                    f" tz={loc.timezone}"
                )
    finally:
        session.close()


def cmd_windows(args) -> None:
    session = _get_session()
    try:
        store = WindowStore(session)
        if store.get_location(args.location) is None:
            sys.stderr.write("Location not found.\n")
            raise SystemExit(1)

        windows = sorted(store.load(args.location), key=lambda w: w.start)
        if len(windows) == 0:
            print("No windows stored.")
        elif args.json:
            print(json.dumps([w.model_dump(mode="json") for w in windows], indent=2))
        else:
            for window in windows:
                print(
                    f"{window.start.isoformat()} -> {window.end.isoformat()}"
                    f" temp={window.min_temperature_c:.1f}..{window.max_temperature_c:.1f}C"
                    f" plan={window.plan or 'n/a'} skipped={'yes' if window.skipped else 'no'}"
                    f" key={reminder_key(args.location, window.id)}"
                )
    finally:
        session.close()


def cmd_purge(args) -> None:
    session = _get_session()
    try:
        now = datetime.fromisoformat(args.before) if args.before else datetime.now(timezone.utc)
        if not args.yes:
            confirmation = input(
                f"Delete every window that ended before {now.isoformat()}? [y/N]: "
            ).strip().lower()
            if confirmation not in {"y", "yes"}:
                print("Cancelled.")
                return

        removed = WindowStore(session).purge_expired(now)
        print(f"Removed {removed} expired windows.")
    finally:
        session.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect Weather.ly windows")
    sub = parser.add_subparsers(dest="command", required=True)

    locations_cmd = sub.add_parser("locations", help="List saved locations")
    locations_cmd.add_argument("--json", action="store_true", help="Return JSON output")
    locations_cmd.set_defaults(func=cmd_locations)

    windows_cmd = sub.add_parser("windows", help="List windows stored for a location")
    windows_cmd.add_argument("--location", required=True, help="Location identifier")
    windows_cmd.add_argument("--json", action="store_true", help="Return JSON output")
    windows_cmd.set_defaults(func=cmd_windows)

    purge_cmd = sub.add_parser("purge", help="Delete windows that have already ended")
    purge_cmd.add_argument("--before", help="Cut-off timestamp in ISO format (default: now)")
    purge_cmd.add_argument("--yes", action="store_true", help="Confirm without prompt")
    purge_cmd.set_defaults(func=cmd_purge)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
