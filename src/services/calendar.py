"""
Shadow-calendar text parsing.

A shadow calendar is a free-text log: date header lines followed by
time-range lines with a description, e.g.

    12 Jan, 2024
    09:00 - 10:00 -> Team sync
    10:00 – 11:30 → > Planning call
"""

import re

from models.entries import TimeEntry

# "12 Jan, 2024", "3 März 2024"
DATE_HEADER_RE = re.compile(r"^(\d{1,2} [A-Za-zÄÖÜäöüß]+,? \d{4})")

# "9:00 - 10:00 -> text", "09:00–10:30 → text", "09:00 — 10:00 - text"
TIME_ENTRY_RE = re.compile(
    r"^(\d{1,2}):(\d{2})\s*[-–—]\s*(\d{1,2}):(\d{2})\s*(?:→|->|-|–|—)\s*(.+)$"
)

QUOTE_MARKER_RE = re.compile(r"^>\s*")


def _format_clock(hour: str, minute: str) -> str | None:
    """Return 'HH:MM' or None if the values are not a time of day."""
    h, m = int(hour), int(minute)
    if h > 23 or m > 59:
        return None
    return f"{h:02d}:{m:02d}"


def parse_time_entry(line: str, current_date: str) -> TimeEntry | None:
    """Parse a single time-range line. Returns None for non-matching lines."""
    match = TIME_ENTRY_RE.match(line)
    if not match:
        return None

    start_h, start_m, end_h, end_m, description = match.groups()
    start = _format_clock(start_h, start_m)
    end = _format_clock(end_h, end_m)
    description = QUOTE_MARKER_RE.sub("", description).strip()
    if start is None or end is None or not description:
        return None

    return TimeEntry(date=current_date, start=start, end=end, description=description)


def parse_calendar(text: str) -> list[TimeEntry]:
    """
    Parse shadow-calendar text into time entries, in input order.

    Date header lines set the date for every following time line; they are
    never evaluated as time entries themselves. Time lines before the first
    header and lines matching neither form are ignored.
    """
    entries = []
    current_date = None

    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        if not line:
            continue

        header = DATE_HEADER_RE.match(line)
        if header:
            current_date = header.group(1)
            continue

        if current_date is None:
            continue

        entry = parse_time_entry(line, current_date)
        if entry is not None:
            entries.append(entry)

    return entries
