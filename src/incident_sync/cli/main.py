# src/incident_sync/cli/main.py

"""
CLI entrypoint.

Initializes logging, wires an InMemoryCoordinator to a SyncWorker, then runs:
- `pull`: one full pull round (categories, locations, incidents)
- `push`: posts incidents loaded from a JSON file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from ..config import Settings, get_settings
from ..core.records import Category, Incident, Location
from ..logging_setup import setup_logging
from ..sync.coordinator import InMemoryCoordinator
from ..sync.payload import parse_incident_date
from ..sync.sync_api import default_pull_tasks, incidents_by_category_task, post_incidents_task
from ..sync.worker import SyncWorker

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2


def load_incidents(path: Path) -> list[Incident]:
    """
    Read local incidents to submit.

    Expected shape: a JSON array of objects with title, description, date
    ("YYYY-MM-DD HH:MM:SS"), category_id, latitude, longitude, location_name.
    """
    raw = json.loads(path.read_text("utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON array of incidents")

    out: list[Incident] = []
    for entry in raw:
        date = entry.get("date")
        out.append(
            Incident(
                remote_id=int(entry.get("id", 0)),
                title=str(entry["title"]),
                description=str(entry.get("description", "")),
                location=Location(
                    remote_id=int(entry.get("location_id", 0)),
                    name=str(entry.get("location_name", "")),
                    latitude=float(entry["latitude"]),
                    longitude=float(entry["longitude"]),
                ),
                category=Category(remote_id=int(entry["category_id"]), title="", description=""),
                occurred_at=parse_incident_date(date) if date else None,
            )
        )
    return out


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="incident-sync",
        description="Synchronize categories, locations and incidents with a remote incident service.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--base-url", default=None, help="Service base URL (default: INCIDENT_SYNC_BASE_URL)")

    sub = parser.add_subparsers(dest="command", required=True)

    pull_parser = sub.add_parser("pull", parents=[common], help="Fetch categories, locations and incidents")
    pull_parser.add_argument(
        "--by-category",
        action="store_true",
        help="Fetch incidents once per pulled category instead of all at once",
    )
    pull_parser.set_defaults(handler=_cmd_pull)

    push_parser = sub.add_parser("push", parents=[common], help="Post local incidents")
    push_parser.add_argument("--incidents", type=Path, required=True, help="JSON file with incidents to post")
    push_parser.set_defaults(handler=_cmd_push)
    return parser


def _cmd_pull(args: argparse.Namespace, settings: Settings, base_url: str) -> int:
    coordinator = InMemoryCoordinator()
    worker = SyncWorker(coordinator, base_url, settings=settings)

    tasks = default_pull_tasks()
    if args.by_category:
        coordinator.synchronize(worker, tasks[:2])
        fan_out = incidents_by_category_task(sorted(coordinator.categories))
        if fan_out is None:
            logger.warning("No categories pulled; skipping incidents by category")
        tasks = [fan_out] if fan_out is not None else []
    coordinator.synchronize(worker, tasks)

    print(f"categories: {len(coordinator.categories)}")
    print(f"locations:  {len(coordinator.locations)}")
    print(f"incidents:  {len(coordinator.incidents)}")
    return EXIT_OK


def _cmd_push(args: argparse.Namespace, settings: Settings, base_url: str) -> int:
    coordinator = InMemoryCoordinator(load_incidents(args.incidents))
    worker = SyncWorker(coordinator, base_url, settings=settings)
    coordinator.synchronize(worker, [post_incidents_task()])

    print(f"posted: {len(coordinator.posted)}")
    print(f"failed: {len(coordinator.failed)}")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    base_url = (args.base_url or settings.base_url).strip()
    if not base_url:
        print("No base URL. Pass --base-url or set INCIDENT_SYNC_BASE_URL.", file=sys.stderr)
        return EXIT_USAGE

    logger.info("Starting %s %s against %s", settings.app_name, args.command, base_url)
    return args.handler(args, settings, base_url)


if __name__ == "__main__":
    sys.exit(main())
