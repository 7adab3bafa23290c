"""CLI for searching a local bike dataset by reach and stack."""

import argparse
import csv
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any, Optional

from bikefit.config import get_settings
from bikefit.search import BikeSearchFilter, SearchCriteria, SearchResult, records_from_rows

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def load_dataset(path: Path) -> list[dict[str, Any]]:
    """Load bike records from a CSV export or a JSON file.

    JSON may be a list of records or an object with a `values` array of
    sheet rows (header row first).
    """
    if path.suffix.lower() == ".csv":
        with path.open(newline="", encoding="utf-8") as handle:
            return records_from_rows(list(csv.reader(handle)))

    with path.open(encoding="utf-8") as handle:
        payload = json.load(handle)

    if isinstance(payload, dict) and "values" in payload:
        return records_from_rows(payload["values"])
    if isinstance(payload, dict) and "bikes" in payload:
        payload = payload["bikes"]
    if not isinstance(payload, list):
        raise ValueError(f"{path}: expected a list of bikes or a sheet 'values' array")
    return payload


def criteria_from_args(args: argparse.Namespace) -> SearchCriteria:
    return SearchCriteria(
        reach_target=args.reach,
        stack_target=args.stack,
        reach_range=args.reach_range,
        stack_range=args.stack_range,
        brand_filter=frozenset(args.brand or []),
        material_filter=frozenset(args.material or []),
        style_filter=args.style,
        sr_ratio_min=_or(args.sr_min, -math.inf),
        sr_ratio_max=_or(args.sr_max, math.inf),
        sta_min=_or(args.sta_min, -math.inf),
        sta_max=_or(args.sta_max, math.inf),
    )


def format_table(result: SearchResult) -> str:
    lines = [f"{'Brand':<16} {'Model':<24} {'Size':<6} {'Reach':>6} {'Stack':>6} {'Diff':>6}"]
    for match in result.matches:
        record = match.record
        lines.append(
            f"{record.brand[:16]:<16} {record.model[:24]:<24} {record.size[:6]:<6} "
            f"{record.reach:>6.0f} {record.stack:>6.0f} {match.total_diff:>6.1f}"
        )
    if result.is_truncated:
        lines.append(
            f"Found {result.total_matches} bikes. Displaying the nearest {len(result.matches)}."
        )
    else:
        lines.append(f"Found {result.total_matches} bikes")
    return "\n".join(lines)


def run_search(args: argparse.Namespace) -> SearchResult:
    records = load_dataset(Path(args.dataset))
    logger.info("Loaded %d records from %s", len(records), args.dataset)

    search_filter = BikeSearchFilter(result_limit=args.limit)
    criteria = criteria_from_args(args)
    for warning in search_filter.validate_criteria(criteria):
        logger.warning(warning)

    result = search_filter.search(records, criteria)
    if args.sort:
        result.matches = search_filter.sort_matches(result.matches, args.sort, args.descending)
    return result


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Find frames whose reach and stack are closest to a target fit.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bikefit-search bikes.csv --reach 380 --stack 560
  bikefit-search bikes.json --reach 385 --stack 575 --reach-range 10 --brand Trek --json
        """,
    )
    parser.add_argument("dataset", help="CSV export or JSON file of bikes")
    parser.add_argument("--reach", type=float, required=True, help="Target reach (mm)")
    parser.add_argument("--stack", type=float, required=True, help="Target stack (mm)")
    parser.add_argument("--reach-range", type=float, default=settings.default_reach_range)
    parser.add_argument("--stack-range", type=float, default=settings.default_stack_range)
    parser.add_argument("--brand", action="append", help="Brand to include (repeatable)")
    parser.add_argument("--material", action="append", help="Material to include (repeatable)")
    parser.add_argument("--style", help="Only this style")
    parser.add_argument("--sr-min", type=float, help="Minimum stack/reach ratio")
    parser.add_argument("--sr-max", type=float, help="Maximum stack/reach ratio")
    parser.add_argument("--sta-min", type=float, help="Minimum seat tube angle")
    parser.add_argument("--sta-max", type=float, help="Maximum seat tube angle")
    parser.add_argument("--limit", type=int, default=settings.search_result_limit)
    parser.add_argument("--sort", help="Re-sort displayed matches by this column")
    parser.add_argument("--descending", action="store_true")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        result = run_search(args)
    except (OSError, ValueError) as e:
        logger.error("Search failed: %s", e)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        print(format_table(result))
    return 0


def _or(value: Optional[float], default: float) -> float:
    return default if value is None else value


if __name__ == "__main__":
    sys.exit(main())
