"""
Command-line interface for jobtables.

Usage:
    python -m jobtables README.md --title "Summer 2025 Internships" --csv jobs.csv
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

from jobtables.config import get_settings


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="jobtables",
        description="Harvest job postings from Markdown/HTML job-board tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Summarize a saved README
  python -m jobtables README.md

  # Page metadata for category fallback
  python -m jobtables README.md --title "New Grad Software Jobs" --url https://github.com/org/repo

  # Export results
  python -m jobtables README.md --csv jobs.csv --xlsx jobs.xlsx --json jobs.json

  # Reproducible relative dates
  cat README.md | python -m jobtables - --reference-date 2024-12-29
""",
    )

    parser.add_argument(
        "file",
        help="Document to read (use '-' for stdin)",
    )

    # Page metadata
    parser.add_argument(
        "--title", "-t",
        default="",
        help="Page title, used when section headings carry no category",
    )
    parser.add_argument(
        "--url", "-u",
        default="",
        help="Source URL of the document",
    )
    parser.add_argument(
        "--reference-date",
        type=_iso_date,
        default=None,
        help="Date that relative dates ('2d', '3 weeks ago') count back from (default: today)",
    )

    # Output paths
    parser.add_argument(
        "--csv",
        default=None,
        help="CSV export path",
    )
    parser.add_argument(
        "--xlsx",
        default=None,
        help="Excel export path",
    )
    parser.add_argument(
        "--json",
        default=None,
        help="JSON export path",
    )

    # Behavior
    parser.add_argument(
        "--include-linkless",
        action="store_true",
        help="Keep rows that have no company or aggregator link",
    )

    # Verbosity
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress messages",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress all output except errors",
    )

    return parser.parse_args(argv)


def configure_logging(args: argparse.Namespace) -> None:
    if args.quiet:
        level = logging.ERROR
    elif args.verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, get_settings().log_level, logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def read_document(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def run(args: argparse.Namespace) -> int:
    """Harvest the document and write requested exports."""
    from jobtables.export import export_to_csv, export_to_excel, export_to_json
    from jobtables.pipeline import harvest

    settings = get_settings()
    if args.include_linkless:
        settings = settings.model_copy(update={"require_link": False})

    document = read_document(args.file)
    result = harvest(
        document,
        page_title=args.title,
        page_url=args.url,
        reference_date=args.reference_date,
        settings=settings,
    )

    if args.csv:
        export_to_csv(result.postings, args.csv)
    if args.xlsx:
        export_to_excel(result.postings, args.xlsx)
    if args.json:
        export_to_json(result.postings, args.json)

    if not args.quiet:
        stats = result.stats
        print("=" * 50)
        print("Harvest Summary")
        print("=" * 50)
        print(f"  Format:           {result.format.value}")
        print(f"  Tables:           {result.tables}")
        print(f"  Rows seen:        {stats.rows_seen}")
        print(f"  Rows rejected:    {stats.rows_rejected}")
        print(f"  Without link:     {stats.rows_without_link}")
        print(f"  Duplicates:       {stats.duplicates_removed}")
        print(f"  Postings:         {len(result.postings)}")
        for warning in result.warnings:
            print(f"  Warning: {warning}")
        if args.verbose:
            print()
            for posting in result.postings:
                print(f"  {posting}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args)

    try:
        return run(args)

    except KeyboardInterrupt:
        if not args.quiet:
            print("\nInterrupted by user")
        return 130

    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
