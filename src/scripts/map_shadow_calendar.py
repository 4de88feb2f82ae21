#!/usr/bin/env python3
"""
Map a shadow-calendar log to ERP subtask rows.

Parses the log, fuzzy-maps every description against the task mapping CSV,
asks for a subtask ID for each unmapped description (saved to the CSV for
future runs) and prints the rows as JSON.

Usage:
    uv run python src/scripts/map_shadow_calendar.py <shadow-calendar.txt>

Example:
    uv run python src/scripts/map_shadow_calendar.py data/sample_log.txt --employee "Markus Lange" --excel output/shadow_hours.xlsx
"""

import argparse
import asyncio
import json
import sys
from contextlib import redirect_stdout
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DEFAULT_EMPLOYEE, REFERENCE_TABLE_PATH
from services.learning import console_resolver
from services.pipeline import (
    export_records,
    match_entries,
    parse_calendar,
    require_text,
    resolve_unmapped,
    summarize,
)
from services.reference_table import ReferenceTable
from services.reports import save_records_workbook


async def run(
    input_file: Path,
    employee: str,
    mapping_path: Path,
    learn: bool = True,
    excel_path: Path | None = None,
) -> list[dict]:
    """Parse, map, optionally learn, and export one log file."""
    table = ReferenceTable.load(mapping_path)

    text = require_text(input_file.read_text(encoding="utf-8"))
    entries = match_entries(parse_calendar(text), table)

    unmapped = [e for e in entries if e.is_unmapped]
    if learn and unmapped:
        print("\n--- Learning new mappings ---", file=sys.stderr)
        resolved = await resolve_unmapped(entries, table, console_resolver)
        print(f"Resolved {len(resolved)} of {len(unmapped)} unmapped rows", file=sys.stderr)

    records = export_records(entries, employee)

    if excel_path:
        save_records_workbook(records, excel_path)

    return records


def main():
    parser = argparse.ArgumentParser(
        description="Map a shadow-calendar log to ERP subtask rows"
    )
    parser.add_argument(
        "input_file",
        type=Path,
        help="Path to the shadow-calendar text file",
    )
    parser.add_argument(
        "--employee",
        default=DEFAULT_EMPLOYEE,
        help=f"Employee name for the exported rows (default: {DEFAULT_EMPLOYEE})",
    )
    parser.add_argument(
        "--mapping",
        type=Path,
        default=REFERENCE_TABLE_PATH,
        help="Task mapping CSV (Description/Subtask columns)",
    )
    parser.add_argument(
        "--no-learn",
        action="store_true",
        help="Do not prompt for unmapped descriptions",
    )
    parser.add_argument(
        "--excel",
        type=Path,
        help="Also write the rows to this Excel file",
    )

    args = parser.parse_args()

    # stdout carries only the JSON rows; progress and prompts go to stderr
    try:
        with redirect_stdout(sys.stderr):
            records = asyncio.run(
                run(
                    args.input_file,
                    args.employee,
                    args.mapping,
                    learn=not args.no_learn,
                    excel_path=args.excel,
                )
            )
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(records, indent=2, ensure_ascii=False))
    counts = summarize(records)
    print(
        f"\n{counts['total']} rows, {counts['unmapped']} unmapped",
        file=sys.stderr,
    )


if __name__ == "__main__":
    main()
