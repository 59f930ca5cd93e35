#!/usr/bin/env python3
"""
Developmental milestone report for a child.

Usage:
    milestone-engine definitions --category motor --max-age 12
    milestone-engine status --birth-date 2024-01-01 --achievements log.json
    milestone-engine progress --birth-date 2024-01-01 --achievements log.json
    milestone-engine upcoming --birth-date 2024-01-01 --reference-date 2024-07-15
    milestone-engine age --birth-date 2024-01-01
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from .age_adaptation.age_calculator import age_in_months, calculate_age, format_age, to_date
from .config import EngineConfig
from .exceptions import MilestoneEngineError
from .logging_config import configure_logging, get_logger
from .milestones.achievements import AchievementRecord
from .milestones.catalog import CATEGORIES, MilestoneCatalog
from .tracker import MilestoneQuery, MilestoneTracker

logger = get_logger(__name__)

COMMANDS = ("definitions", "status", "progress", "upcoming", "age")


def load_achievements(path: Path) -> List[AchievementRecord]:
    """
    Load achievement records from a JSON file.

    The file holds a list of records or an object with an
    ``achievements`` list. Keys may be snake_case or camelCase.

    Raises:
        ValueError: If the content is not a list of record objects
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("achievements", [])

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValueError(f"{path}: achievements must be a list of objects")

    return [AchievementRecord.from_dict(item) for item in data]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="milestone-engine",
        description="Classify a child's developmental milestones and report progress",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    milestone-engine status --birth-date 2024-01-01 --achievements log.json
    milestone-engine upcoming --birth-date 2024-01-01 --reference-date 2024-07-15

Output:
    JSON on stdout (or --output file).
        """,
    )

    parser.add_argument(
        "command",
        choices=COMMANDS,
        help="Report to produce",
    )
    parser.add_argument(
        "--birth-date",
        type=str,
        default=None,
        help="Child's birth date (YYYY-MM-DD); required except for 'definitions'",
    )
    parser.add_argument(
        "--reference-date",
        type=str,
        default=None,
        help="Date to measure age at (default: today)",
    )
    parser.add_argument(
        "--achievements",
        type=str,
        default=None,
        help="JSON file with the child's achievement records",
    )
    parser.add_argument(
        "--baby-id",
        type=str,
        default=None,
        help="Child id to echo in the output",
    )
    parser.add_argument(
        "--category",
        choices=[c.value for c in CATEGORIES],
        default=None,
        help="Restrict to one category",
    )
    parser.add_argument(
        "--min-age",
        type=int,
        default=None,
        help="definitions: keep windows starting at or after this month",
    )
    parser.add_argument(
        "--max-age",
        type=int,
        default=None,
        help="definitions: keep windows ending at or before this month",
    )
    parser.add_argument(
        "--age-appropriate",
        action="store_true",
        help="status: hide milestones the child is not old enough for yet",
    )
    parser.add_argument(
        "--exclude-achieved",
        action="store_true",
        help="status: hide achieved milestones",
    )
    parser.add_argument(
        "--exclude-upcoming",
        action="store_true",
        help="status: hide upcoming milestones",
    )
    parser.add_argument(
        "--imminent-months",
        type=float,
        default=None,
        help="upcoming: horizon for the imminent flag (default: 3)",
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default=None,
        help="Milestone catalog JSON (default: packaged catalog)",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log progress information to stderr",
    )
    return parser


def run(args: argparse.Namespace, config: EngineConfig) -> dict:
    """Execute one command and return its JSON-ready result."""
    catalog = MilestoneCatalog.from_file(config.catalog_path) if args.catalog else None
    tracker = MilestoneTracker(catalog=catalog, config=config)

    if args.command == "definitions":
        definitions = tracker.list_definitions(args.category, args.min_age, args.max_age)
        return {
            "definitions": [d.to_dict() for d in definitions],
            "total": len(definitions),
        }

    if args.birth_date is None:
        raise ValueError(f"--birth-date is required for '{args.command}'")

    birth_date = to_date(args.birth_date)
    reference_date = to_date(args.reference_date) if args.reference_date else date.today()

    if args.command == "age":
        age = calculate_age(birth_date, reference_date)
        return {
            "ageMonths": age_in_months(birth_date, reference_date),
            "age": age.to_dict(),
            "formatted": format_age(age),
        }

    achievements = load_achievements(Path(args.achievements)) if args.achievements else []
    logger.info("achievements_loaded", count=len(achievements))

    if args.command == "status":
        query = MilestoneQuery(
            category=args.category,
            include_achieved=not args.exclude_achieved,
            include_upcoming=not args.exclude_upcoming,
            age_appropriate=args.age_appropriate,
        )
        result = tracker.get_milestones_by_category(
            birth_date, achievements, query, reference_date, baby_id=args.baby_id
        )
    elif args.command == "progress":
        result = tracker.get_progress(birth_date, achievements, reference_date, baby_id=args.baby_id)
    else:
        result = tracker.get_upcoming(birth_date, achievements, reference_date, baby_id=args.baby_id)

    return result.to_dict()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = EngineConfig.from_env()
        if args.catalog:
            config.catalog_path = Path(args.catalog)
        if args.imminent_months is not None:
            config.imminent_horizon_months = args.imminent_months
        if args.verbose:
            config.log_level = "INFO"

        configure_logging(level=config.log_level, json_format=config.json_logs)
        result = run(args, config)
    except (MilestoneEngineError, ValueError, KeyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    json_output = json.dumps(result, indent=2)

    if args.output:
        Path(args.output).write_text(json_output, encoding="utf-8")
        logger.info("results_written", path=args.output)
    else:
        print(json_output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
