"""
Parse -> match -> (learn) -> export pipeline used by the API and CLI tools.
"""

from core.config import DEFAULT_EMPLOYEE, UNMAPPED
from core.errors import InputEmptyError
from models.entries import OutputRecord
from services.calendar import parse_calendar
from services.exporter import to_output_records
from services.learning import Resolver, resolve_unmapped
from services.matcher import match_entries
from services.reference_table import ReferenceTable

export_records = to_output_records

__all__ = [
    "export_records",
    "match_entries",
    "parse_calendar",
    "process_text",
    "process_text_with_learning",
    "require_text",
    "resolve_unmapped",
    "summarize",
]


def require_text(text: str | None) -> str:
    """Return text, or raise InputEmptyError if it is missing or blank."""
    if text is None or not text.strip():
        raise InputEmptyError("'text' is required")
    return text


def process_text(
    text: str, table: ReferenceTable, employee: str | None = None
) -> list[OutputRecord]:
    """Parse, map and export shadow-calendar text."""
    entries = match_entries(parse_calendar(text), table)
    return export_records(entries, employee or DEFAULT_EMPLOYEE)


async def process_text_with_learning(
    text: str,
    table: ReferenceTable,
    resolver: Resolver,
    employee: str | None = None,
) -> list[OutputRecord]:
    """Like process_text, resolving UNMAPPED entries through `resolver` first."""
    entries = match_entries(parse_calendar(text), table)
    await resolve_unmapped(entries, table, resolver)
    return export_records(entries, employee or DEFAULT_EMPLOYEE)


def summarize(records: list[OutputRecord]) -> dict[str, int]:
    """Row counts for logging and CLI output."""
    unmapped = sum(1 for r in records if r["task_code"] == UNMAPPED)
    return {"total": len(records), "unmapped": unmapped, "mapped": len(records) - unmapped}
