#!/usr/bin/env python3
"""
RFP Tournament Results CLI

Parses a petanque tournament workbook (registration, qualifying stage, cup
brackets) and computes rating points, wins and losses for every team.
Player names are resolved against a roster file (JSON or CSV).

Usage:
    python parse_tournament.py --file cup.xlsx --category 1 --roster data/roster.json
    python parse_tournament.py --google-sheet https://docs.google.com/spreadsheets/d/ID --category 2
    python parse_tournament.py --file cup.xlsx --diagnose
    python parse_tournament.py --points-table
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from zipfile import BadZipFile

import requests
from openpyxl.utils.exceptions import InvalidFileException

from rfp import (
    DataFrameRoster,
    RatingEngineError,
    TournamentParser,
    get_all_points_config,
    load_workbook,
    results_to_records,
)
from rfp.diagnostics import analyze_workbook_structure
from rfp.google_sheets import fetch_workbook
from rfp.logging_config import setup_logging
from rfp.schemas import TournamentResultsFile
from rfp.utils import save_json


def print_results(results) -> None:
    """Print a results table sorted by points."""
    print("\n" + "=" * 72)
    print("RESULTS")
    print("=" * 72)

    ranked = sorted(results, key=lambda r: (r.points, r.wins), reverse=True)
    for result in ranked:
        cup = result.cup.value if result.cup else "-"
        position = result.cup_position.value if result.cup_position else "-"
        names = ", ".join(result.team.player_names)
        print(
            f"  #{result.team.order_num:<3} {cup:<2} {position:<4} "
            f"{result.points:>3} pts  {result.wins}-{result.losses}  {names}"
        )


def main():
    parser = argparse.ArgumentParser(description="RFP tournament results and rating points")
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--file", "-f",
        help="Path to the tournament .xlsx workbook",
    )
    source.add_argument(
        "--google-sheet", "-g",
        help="Public Google Sheets URL of the tournament workbook",
    )
    parser.add_argument(
        "--category", "-c",
        type=int,
        choices=[1, 2],
        default=1,
        help="Tournament category: 1 (federal) or 2 (regional)",
    )
    parser.add_argument(
        "--roster", "-r",
        default="data/roster.json",
        help="Roster file, JSON or CSV with id and name columns",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write result records to this JSON file",
    )
    parser.add_argument(
        "--diagnose",
        action="store_true",
        help="Only print the workbook structure report",
    )
    parser.add_argument(
        "--points-table",
        action="store_true",
        help="Print the points table and exit",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging",
    )

    args = parser.parse_args()

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_to_file=False)

    if args.points_table:
        print(json.dumps(get_all_points_config(), indent=2))
        return

    if not args.file and not args.google_sheet:
        parser.error("one of --file or --google-sheet is required")

    if args.file:
        workbook_path = Path(args.file)
        if not workbook_path.exists():
            print(f"❌ Workbook not found: {workbook_path}")
            sys.exit(1)
        try:
            workbook = load_workbook(workbook_path)
        except (InvalidFileException, BadZipFile, OSError) as e:
            print(f"❌ Cannot open workbook {workbook_path}: {e}")
            sys.exit(1)
        source_name = str(workbook_path)
    else:
        try:
            workbook = fetch_workbook(args.google_sheet)
        except ValueError as e:
            print(f"❌ {e}")
            sys.exit(1)
        except requests.RequestException as e:
            print(f"❌ Download failed: {e}")
            sys.exit(1)
        except (InvalidFileException, BadZipFile) as e:
            print(f"❌ Downloaded file is not an .xlsx workbook: {e}")
            sys.exit(1)
        source_name = args.google_sheet

    if args.diagnose:
        analysis = analyze_workbook_structure(workbook, source_name)
        print(json.dumps(analysis, indent=2, ensure_ascii=False, default=str))
        return

    roster_path = Path(args.roster)
    if not roster_path.exists():
        print(f"❌ Roster file not found: {roster_path}")
        sys.exit(1)
    roster = DataFrameRoster.from_file(roster_path)

    print(f"Parsing {source_name} (category {args.category}, {roster.size} players in roster)...")

    try:
        results = asyncio.run(TournamentParser(roster, args.category).parse(workbook))
    except RatingEngineError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print_results(results)

    if args.output:
        export = TournamentResultsFile(
            source=source_name,
            category=args.category,
            teams_count=len(results),
            results=results_to_records(results),
        )
        save_json(args.output, export)
        print(f"\nResults saved: {args.output}")


if __name__ == "__main__":
    main()
