"""Command line entry point: parse workout text or a template and print the result."""
import argparse
import asyncio
import json
import logging
import sys

from wod_parser.config import settings
from wod_parser.parsers import (
    TemplateFormatError,
    WorkoutInputError,
    parse_text_with_dictionary,
    parse_workout_description,
    parse_workout_text,
)
from wod_parser.services.export_service import ExportService
from wod_parser.services.movement_catalog import MovementCatalogClient, MovementCatalogError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parse a workout description into its canonical form")
    parser.add_argument("input", nargs="?", help="Input file path (default: stdin)")
    parser.add_argument(
        "--template",
        action="store_true",
        help="Treat the input as a stored template description (JSON)",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Print the rendered text instead of canonical JSON",
    )
    parser.add_argument(
        "--catalog",
        action="store_true",
        help="Fetch the movement dictionary from MOVEMENT_CATALOG_URL instead of the bundled one",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))

    try:
        if args.input:
            with open(args.input, "r", encoding="utf-8") as f:
                raw = f.read()
        else:
            raw = sys.stdin.read()

        if args.template:
            workout = parse_workout_description(raw)
        elif args.catalog:
            workout = asyncio.run(parse_text_with_dictionary(raw, MovementCatalogClient().fetch_movements))
        else:
            workout = parse_workout_text(raw)

    except FileNotFoundError:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1
    except (TemplateFormatError, WorkoutInputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except MovementCatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.render:
        print(ExportService.render_text(workout))
    else:
        print(json.dumps(workout.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
