#!/usr/bin/env python3
"""
Show how descriptions are matched against the task mapping CSV.

Prints the normalized candidate list, then for each description its
normalized form, the winning candidate with score, and the task code.

Usage:
    uv run python src/scripts/debug_map.py "Verlagsinfo-Vorbereitung & Abstimmung"
    uv run python src/scripts/debug_map.py --file data/sample_log.txt
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import MATCH_SCORE_CUTOFF, REFERENCE_TABLE_PATH
from core.normalize import normalize
from services.calendar import parse_calendar
from services.matcher import match_description
from services.reference_table import ReferenceTable


def describe_match(description: str, table: ReferenceTable, score_cutoff: float) -> list[str]:
    """Report lines for one description."""
    result = match_description(description, table, score_cutoff=score_cutoff, confidence_mode="score")
    lines = [
        f"LOG line:   {description}",
        f"normalized: {normalize(description)}",
    ]
    if result.is_mapped:
        lines.append(f"best match: {result.candidate} (score {result.score:.1f})")
    else:
        lines.append(f"best match: none above {score_cutoff:g}")
    lines.append(f"subtask:    {result.task_code}")
    return lines


def main():
    parser = argparse.ArgumentParser(description="Debug fuzzy task mapping")
    parser.add_argument("descriptions", nargs="*", help="Descriptions to match")
    parser.add_argument("--file", type=Path, help="Match every entry of a shadow-calendar file")
    parser.add_argument("--mapping", type=Path, default=REFERENCE_TABLE_PATH)
    parser.add_argument("--cutoff", type=float, default=MATCH_SCORE_CUTOFF)
    parser.add_argument("--quiet", action="store_true", help="Do not list candidates")
    args = parser.parse_args()

    table = ReferenceTable.load(args.mapping)

    descriptions = list(args.descriptions)
    if args.file:
        text = args.file.read_text(encoding="utf-8")
        descriptions.extend(e.description for e in parse_calendar(text))

    if not args.quiet:
        print("Candidates in CSV:")
        for candidate in table.candidates():
            print(f"  {candidate}")

    for description in descriptions:
        print()
        for line in describe_match(description, table, args.cutoff):
            print(line)


if __name__ == "__main__":
    main()
