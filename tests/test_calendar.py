"""Tests for shadow-calendar parsing."""

import pytest

from models.entries import TimeEntry
from services.calendar import parse_calendar, parse_time_entry


def test_single_entry():
    entries = parse_calendar("12 Jan, 2024\n09:00 - 10:00 -> Team sync")

    assert entries == [
        TimeEntry(date="12 Jan, 2024", start="09:00", end="10:00", description="Team sync")
    ]


def test_dash_variants_and_quote_marker():
    entries = parse_calendar("12 Jan, 2024\n09:00 – 10:00 → > Planning call")

    assert len(entries) == 1
    assert entries[0].description == "Planning call"
    assert (entries[0].start, entries[0].end) == ("09:00", "10:00")


def test_time_line_before_header_is_dropped():
    text = "09:00 - 10:00 -> Orphan\n12 Jan, 2024\n10:00 - 11:00 -> Kept"

    entries = parse_calendar(text)

    assert [e.description for e in entries] == ["Kept"]


def test_no_header_yields_nothing():
    assert parse_calendar("09:00 - 10:00 -> Team sync\n10:00 - 11:00 -> Code review") == []


def test_entries_share_header_until_next(sample_log):
    entries = parse_calendar(sample_log)

    assert [(e.date, e.description) for e in entries] == [
        ("12 Jan, 2024", "Team sync"),
        ("12 Jan, 2024", "Weekly planning call"),
        ("13 Januar 2024", "Code review"),
    ]


def test_header_line_is_not_parsed_as_entry():
    # Header followed by text that would look like a time range elsewhere
    entries = parse_calendar("12 Jan, 2024 09:00 - 10:00 -> Team sync")

    assert entries == []


def test_header_with_umlaut_and_without_comma():
    entries = parse_calendar("3 März 2024\n08:00 - 09:00 -> Jour fixe")

    assert entries[0].date == "3 März 2024"


def test_single_digit_hours_are_padded():
    entries = parse_calendar("12 Jan, 2024\n9:05-9:45 -> Standup")

    assert (entries[0].start, entries[0].end) == ("09:05", "09:45")


@pytest.mark.parametrize(
    "line",
    [
        "09:00 - 10:00 -> Team sync",
        "09:00 – 10:00 → Team sync",
        "09:00 — 10:00 — Team sync",
        "09:00-10:00 - Team sync",
        "09:00 - 10:00 – Team sync",
        "09:00 -10:00->Team sync",
    ],
)
def test_separator_variants(line):
    entry = parse_time_entry(line, "12 Jan, 2024")

    assert entry is not None
    assert entry.description == "Team sync"


@pytest.mark.parametrize(
    "line",
    [
        "Team sync 09:00 - 10:00",
        "09:00 to 10:00 -> Team sync",
        "9 - 10 -> Team sync",
        "25:00 - 26:00 -> Impossible hours",
        "09:00 - 10:75 -> Impossible minutes",
        "09:00 - 10:00 -> >",
        "",
    ],
)
def test_malformed_lines_are_ignored(line):
    assert parse_time_entry(line, "12 Jan, 2024") is None


def test_parser_never_raises_on_garbage():
    text = "\x00\n::::\n12 Jan, 2024\n-> -> ->\n99:99\n\t\n09:00 - 10:00 -> Ok"

    entries = parse_calendar(text)

    assert [e.description for e in entries] == ["Ok"]


def test_empty_text():
    assert parse_calendar("") == []
    assert parse_calendar(None) == []


def test_time_entries_are_immutable():
    entry = parse_calendar("12 Jan, 2024\n09:00 - 10:00 -> Team sync")[0]

    with pytest.raises(AttributeError):
        entry.description = "changed"
