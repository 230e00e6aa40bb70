"""Terminal CLI entrypoint for Trailbook."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from trailbook.ui.controller import SessionController
from trailbook.ui.geolocation import StaticGeolocation
from trailbook.ui.rendering import summary_rows
from trailbook.workout.model import ValidationError
from trailbook.workout.parser import parse_coordinates
from trailbook.workout.persistence import FileBlobStorage, WorkoutPersistence


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Trailbook workout log")
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="Workout log file (default: ~/.trailbook/workouts.json)",
    )
    parser.add_argument("--list", action="store_true", help="Print logged workouts")
    parser.add_argument(
        "--add",
        choices=("running", "cycling"),
        default=None,
        help="Log a workout from the command line",
    )
    parser.add_argument("--at", default=None, help="Workout position as LAT,LNG")
    parser.add_argument("--distance", default=None, help="Distance in km")
    parser.add_argument("--duration", default=None, help="Duration in minutes")
    parser.add_argument("--cadence", default=None, help="Running cadence in steps/min")
    parser.add_argument("--elevation", default=None, help="Cycling elevation gain in m")
    parser.add_argument("--reset", action="store_true", help="Delete every logged workout")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI) with the workout map",
    )
    parser.add_argument("--web-host", default="127.0.0.1", help="Host bind for --ui-web")
    parser.add_argument("--web-port", type=int, default=8089, help="Port for --ui-web")
    parser.add_argument(
        "--debug-position",
        default=None,
        help="Use a fixed LAT,LNG instead of browser geolocation",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def print_workouts(controller: SessionController) -> int:
    rows = summary_rows(controller.workouts())
    if not rows:
        print("No workouts logged")
        return 0
    for row in rows:
        print(
            f"{row['icon']} {row['description']:<22} {row['distance']:>10} "
            f"{row['duration']:>10} {row['rate']:>12} {row['effort']:>9}  [{row['id']}]"
        )
    return 0


def run_add(controller: SessionController, args: argparse.Namespace) -> int:
    if args.at is None:
        print("--at LAT,LNG is required with --add")
        return 2
    extra = args.cadence if args.add == "running" else args.elevation
    try:
        record = controller.add_workout(
            args.add,
            parse_coordinates(args.at),
            args.distance,
            args.duration,
            extra,
        )
    except ValidationError as exc:
        print(f"Input is not valid: {exc}")
        return 2
    print(f"Logged {record.description} [{record.id}]")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    persistence = WorkoutPersistence(FileBlobStorage(args.data_file))

    geolocation = None
    if args.debug_position is not None:
        try:
            geolocation = StaticGeolocation(parse_coordinates(args.debug_position))
        except ValidationError as exc:
            parser.error(str(exc))

    if args.ui_web:
        from trailbook.ui.web_app import run_web_ui

        return run_web_ui(
            persistence=persistence,
            geolocation=geolocation,
            host=args.web_host,
            port=args.web_port,
        )

    controller = SessionController(persistence=persistence, geolocation=geolocation)

    if args.reset:
        controller.reset()
        print("Workout log cleared")
        return 0

    controller.start()
    if controller.load_error is not None:
        print(f"Warning: saved workouts could not be read ({controller.load_error})")
        if args.add is not None:
            # Saving now would overwrite the unreadable log.
            print("Refusing to add a workout; fix or --reset the log first")
            return 1

    if args.add is not None:
        return run_add(controller, args)
    if args.list:
        return print_workouts(controller)

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
