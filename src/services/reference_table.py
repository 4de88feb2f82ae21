"""
Reference table of known descriptions and their ERP subtask codes.

Backed by a CSV file with a header row. The table is loaded once, grows by
appending learned mappings, and never reorders or drops records.
"""

import csv
import threading
from pathlib import Path

from core.config import CSV_FILL_VALUE, DESCRIPTION_COLUMN, TASK_CODE_COLUMN
from core.errors import ReferenceLoadError
from models.entries import ReferenceRecord


class ReferenceTable:
    """
    Ordered, append-only collection of ReferenceRecords.

    Appends are serialized by a lock and written to the backing CSV (if any)
    before the in-memory list grows. Readers work on tuple snapshots.
    """

    def __init__(
        self,
        records: list[ReferenceRecord] | None = None,
        path: Path | None = None,
        fieldnames: list[str] | None = None,
    ):
        self._records: list[ReferenceRecord] = list(records or [])
        self._lock = threading.Lock()
        self.path = Path(path) if path is not None else None
        self.fieldnames = list(fieldnames or [DESCRIPTION_COLUMN, TASK_CODE_COLUMN])
        self.skipped_rows = 0

    @classmethod
    def load(cls, path: Path | str) -> "ReferenceTable":
        """
        Load the table from a CSV file.

        Rows missing a description or task code (including short, ragged rows)
        are skipped and counted in `skipped_rows`.

        Raises:
            ReferenceLoadError: file missing or unreadable, required columns
                absent, or no usable rows
        """
        path = Path(path)
        if not path.exists():
            raise ReferenceLoadError(f"Reference table not found: {path}")

        records = []
        skipped = 0
        try:
            with path.open("r", encoding="utf-8-sig", newline="") as f:
                reader = csv.DictReader(f, skipinitialspace=True)
                fieldnames = [name.strip() for name in reader.fieldnames or []]
                reader.fieldnames = fieldnames

                missing = [
                    c for c in (DESCRIPTION_COLUMN, TASK_CODE_COLUMN) if c not in fieldnames
                ]
                if missing:
                    raise ReferenceLoadError(
                        f"Reference table {path} is missing columns: {', '.join(missing)}"
                    )

                for row in reader:
                    description = (row.get(DESCRIPTION_COLUMN) or "").strip()
                    task_code = (row.get(TASK_CODE_COLUMN) or "").strip()
                    if not description or not task_code:
                        skipped += 1
                        continue
                    records.append(ReferenceRecord(description=description, task_code=task_code))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise ReferenceLoadError(f"Cannot read reference table {path}: {e}") from e

        if not records:
            raise ReferenceLoadError(f"Reference table {path} contains no usable rows")

        table = cls(records, path=path, fieldnames=fieldnames)
        table.skipped_rows = skipped
        print(f"Loaded {len(records)} task mappings from {path} ({skipped} rows skipped)")
        return table

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self.snapshot())

    def snapshot(self) -> tuple[ReferenceRecord, ...]:
        """Records as of now, in table order."""
        return tuple(self._records)

    def candidates(self) -> list[str]:
        """Normalized descriptions in table order (duplicates kept)."""
        return [r.normalized_description for r in self.snapshot()]

    def first_record_for(self, normalized_description: str) -> ReferenceRecord | None:
        """First record, in table order, with this normalized description."""
        for record in self.snapshot():
            if record.normalized_description == normalized_description:
                return record
        return None

    def task_codes(self) -> list[str]:
        """Sorted distinct task codes."""
        return sorted({r.task_code for r in self.snapshot()})

    def append(self, description: str, task_code: str) -> ReferenceRecord:
        """
        Append a learned mapping to the backing file and the in-memory index.

        Raises:
            ValueError: empty description or task code
        """
        description = description.strip()
        task_code = task_code.strip()
        if not description or not task_code:
            raise ValueError("Both description and task code are required")

        record = ReferenceRecord(description=description, task_code=task_code)
        with self._lock:
            if self.path is not None:
                self._append_row(record)
            self._records.append(record)
        return record

    def _append_row(self, record: ReferenceRecord):
        """Append one CSV row, starting a new line if the file lacks one."""
        is_new = not self.path.exists() or self.path.stat().st_size == 0
        needs_newline = False
        if not is_new:
            with self.path.open("rb") as f:
                f.seek(-1, 2)
                needs_newline = f.read(1) not in (b"\n", b"\r")

        row = {name: CSV_FILL_VALUE for name in self.fieldnames}
        row[DESCRIPTION_COLUMN] = record.description
        row[TASK_CODE_COLUMN] = record.task_code

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8", newline="") as f:
            if needs_newline:
                f.write("\n")
            writer = csv.DictWriter(f, fieldnames=self.fieldnames, lineterminator="\n")
            if is_new:
                writer.writeheader()
            writer.writerow(row)
