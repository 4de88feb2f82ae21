#!/usr/bin/env python3
"""
List the ERP subtask codes known to the task mapping CSV.

Usage:
    uv run python src/scripts/list_tasks.py
"""

import argparse
import sys
from collections import Counter
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import REFERENCE_TABLE_PATH
from services.reference_table import ReferenceTable


def main():
    parser = argparse.ArgumentParser(description="List ERP subtask codes")
    parser.add_argument("--mapping", type=Path, default=REFERENCE_TABLE_PATH)
    args = parser.parse_args()

    table = ReferenceTable.load(args.mapping)
    counts = Counter(r.task_code for r in table)

    print(f"\n{len(counts)} subtasks")
    print("=" * 40)
    for task_code in table.task_codes():
        print(f"  {task_code:<24} {counts[task_code]:>4} descriptions")


if __name__ == "__main__":
    main()
