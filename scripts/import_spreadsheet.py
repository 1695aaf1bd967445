"""
Import a litigation spreadsheet as the snapshot of one reference period.

    python -m scripts.import_spreadsheet cases.xlsx --month 9 --year 2026
    python -m scripts.import_spreadsheet cases.xlsx --month 9 --year 2026 --dry-run
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from collections.abc import Sequence

from app.domain.snapshot import ReferencePeriod
from app.formatters import format_liability_view
from app.services.spreadsheet_ingestion_service import (
    SnapshotPersistenceError,
    SpreadsheetReadError,
    get_spreadsheet_ingestion_service,
)
from litigation.aggregation import AggregationEngine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import a litigation spreadsheet snapshot.")
    parser.add_argument("path", help="Path to an .xlsx, .xlsm or .csv spreadsheet.")
    parser.add_argument("--month", type=int, required=True, help="Reference month (1-12).")
    parser.add_argument("--year", type=int, required=True, help="Reference year.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the aggregated view without touching the database.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").strip().upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    try:
        period = ReferencePeriod(year=args.year, month=args.month)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    service = get_spreadsheet_ingestion_service()
    filename = os.path.basename(args.path)

    if args.dry_run:
        try:
            cases = service.load_cases(args.path, filename=filename)
        except SpreadsheetReadError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        view = AggregationEngine().aggregate(cases)
        payload = {"period": period.label, **format_liability_view(view)}
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0 if cases else 1

    from db.session import session_scope

    try:
        with session_scope() as db:
            summary = service.import_snapshot(source=args.path, period=period, db=db, filename=filename)
    except SpreadsheetReadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except SnapshotPersistenceError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    payload = {
        "period": summary.period.label,
        "records_loaded": summary.records_loaded,
        "replaced": summary.replaced,
        "source_filename": summary.source_filename,
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
