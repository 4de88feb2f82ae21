"""
Excel export of mapped shadow-calendar rows.
"""

from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from core.config import EXPORT_HEADERS, EXPORT_SHEET_NAME, UNMAPPED
from models.entries import OutputRecord

UNMAPPED_FILL = PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid")
COLUMN_WIDTHS = [16, 12, 8, 8, 48, 16, 12]


def write_records_sheet(ws, records: list[OutputRecord]):
    """
    Write headers and one row per output record.

    UNMAPPED rows are highlighted so they can be fixed by hand before
    submitting.
    """
    for col_idx, header in enumerate(EXPORT_HEADERS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    for row_idx, record in enumerate(records, start=2):
        row_data = [
            record["employee"],
            record["date"],
            record["start_time"],
            record["end_time"],
            record["description"],
            record["task_code"],
            record["confidence"],
        ]
        for col_idx, value in enumerate(row_data, start=1):
            cell = ws.cell(row=row_idx, column=col_idx, value=value)
            if record["task_code"] == UNMAPPED:
                cell.fill = UNMAPPED_FILL

    for col_idx, width in enumerate(COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width
    ws.freeze_panes = "A2"


def create_records_workbook(records: list[OutputRecord]) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = EXPORT_SHEET_NAME
    write_records_sheet(ws, records)
    return wb


def save_records_workbook(records: list[OutputRecord], output_path: Path) -> Path:
    """Write the records workbook to disk and return its path."""
    wb = create_records_workbook(records)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
    print(f"Saved Excel export to: {output_path}")
    return output_path


def records_to_bytes(records: list[OutputRecord]) -> bytes:
    """Serialize the records workbook in memory."""
    buffer = BytesIO()
    create_records_workbook(records).save(buffer)
    return buffer.getvalue()
