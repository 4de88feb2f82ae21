"""Tests for the learning loop that resolves UNMAPPED entries."""

import asyncio

from core.config import UNMAPPED
from models.entries import TimeEntry
from services.learning import resolve_unmapped, skip_resolver
from services.matcher import match_description, match_entries
from services.reference_table import ReferenceTable


def make_entries(table, *descriptions):
    entries = [
        TimeEntry("12 Jan, 2024", f"{9 + i:02d}:00", f"{10 + i:02d}:00", d)
        for i, d in enumerate(descriptions)
    ]
    return match_entries(entries, table)


class RecordingResolver:
    """Sync resolver returning canned answers and recording prompts."""

    def __init__(self, answers):
        self.answers = answers
        self.asked = []

    def __call__(self, description):
        self.asked.append(description)
        return self.answers.get(description)


def test_resolution_appends_one_record_at_end(reference_table, mapping_csv):
    entries = make_entries(reference_table, "Team sync", "Budget workshop")
    before = reference_table.snapshot()
    resolver = RecordingResolver({"Budget workshop": "FIN-900"})

    resolved = asyncio.run(resolve_unmapped(entries, reference_table, resolver))

    assert resolver.asked == ["Budget workshop"]
    assert resolved == [entries[1]]
    assert entries[1].task_code == "FIN-900"
    assert entries[1].confidence == 1.0

    after = reference_table.snapshot()
    assert after[: len(before)] == before
    assert len(after) == len(before) + 1
    assert (after[-1].description, after[-1].task_code) == ("Budget workshop", "FIN-900")

    reloaded = ReferenceTable.load(mapping_csv)
    assert reloaded.snapshot()[-1].task_code == "FIN-900"


def test_learned_mapping_is_used_next_time(reference_table):
    entries = make_entries(reference_table, "Budget workshop")
    asyncio.run(resolve_unmapped(entries, reference_table, lambda d: "FIN-900"))

    assert match_description("budget workshop!", reference_table).task_code == "FIN-900"


def test_skip_leaves_entry_unmapped(reference_table):
    entries = make_entries(reference_table, "Budget workshop")
    before = len(reference_table)

    resolved = asyncio.run(resolve_unmapped(entries, reference_table, skip_resolver))

    assert resolved == []
    assert entries[0].task_code == UNMAPPED
    assert entries[0].confidence == 0
    assert len(reference_table) == before


def test_blank_answer_counts_as_skip(reference_table):
    entries = make_entries(reference_table, "Budget workshop")

    asyncio.run(resolve_unmapped(entries, reference_table, lambda d: "   "))

    assert entries[0].task_code == UNMAPPED


def test_async_resolver_is_awaited(reference_table):
    async def resolver(description):
        await asyncio.sleep(0)
        return "FIN-900"

    entries = make_entries(reference_table, "Budget workshop")

    asyncio.run(resolve_unmapped(entries, reference_table, resolver))

    assert entries[0].task_code == "FIN-900"


def test_identical_descriptions_prompt_once(reference_table):
    entries = make_entries(
        reference_table, "Budget workshop", "Team sync", "budget workshop!", "Budget Workshop"
    )
    before = len(reference_table)
    resolver = RecordingResolver({"Budget workshop": "FIN-900"})

    resolved = asyncio.run(resolve_unmapped(entries, reference_table, resolver))

    assert resolver.asked == ["Budget workshop"]
    assert len(resolved) == 3
    assert [e.task_code for e in entries] == ["FIN-900", "T-100", "FIN-900", "FIN-900"]
    assert len(reference_table) == before + 1


def test_skipped_description_not_asked_again(reference_table):
    entries = make_entries(reference_table, "Budget workshop", "Budget workshop")
    resolver = RecordingResolver({})

    asyncio.run(resolve_unmapped(entries, reference_table, resolver))

    assert resolver.asked == ["Budget workshop"]
    assert all(e.task_code == UNMAPPED for e in entries)


def test_mapped_entries_are_not_rematched(reference_table):
    # "Team sync" is mapped before the loop; learning a closer record must not change it
    entries = make_entries(reference_table, "Team sync", "Team sync meeting notes")
    entries[1].task_code = UNMAPPED

    asyncio.run(resolve_unmapped(entries, reference_table, lambda d: "T-999"))

    assert entries[0].task_code == "T-100"
    assert entries[1].task_code == "T-999"


def test_nothing_unmapped_never_calls_resolver(reference_table):
    entries = make_entries(reference_table, "Team sync", "Code review")

    def resolver(description):
        raise AssertionError("resolver should not be called")

    assert asyncio.run(resolve_unmapped(entries, reference_table, resolver)) == []
