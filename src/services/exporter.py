"""
Conversion of matched entries into ERP-ready output records.
"""

from datetime import date
from functools import lru_cache

import dateparser

from core.config import DATE_LANGUAGES, DATE_PARSER_SETTINGS, DEFAULT_EMPLOYEE
from core.errors import DateParseError
from models.entries import MatchedEntry, OutputRecord


@lru_cache(maxsize=512)
def parse_header_date(date_string: str) -> date:
    """
    Convert a date header ("12 Jan, 2024", "3 März 2024") to a date.

    Raises:
        DateParseError: month name not in a supported locale, or the string
            lacks a day, month or year
    """
    parsed = dateparser.parse(
        date_string,
        languages=DATE_LANGUAGES,
        settings=DATE_PARSER_SETTINGS,
    )
    if parsed is None:
        raise DateParseError(date_string)
    return parsed.date()


def to_output_record(entry: MatchedEntry, employee: str = DEFAULT_EMPLOYEE) -> OutputRecord:
    return OutputRecord(
        employee=employee,
        date=parse_header_date(entry.date).isoformat(),
        start_time=entry.start,
        end_time=entry.end,
        description=entry.description,
        task_code=entry.task_code,
        confidence=entry.confidence,
    )


def to_output_records(
    entries: list[MatchedEntry], employee: str = DEFAULT_EMPLOYEE
) -> list[OutputRecord]:
    """Export entries in order. Any unparseable date header raises DateParseError."""
    return [to_output_record(entry, employee) for entry in entries]
