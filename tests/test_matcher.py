"""Tests for fuzzy task matching."""

import pytest

from core.config import DEFAULT_CONFIDENCE_MODE, UNMAPPED, resolve_confidence_mode
from models.entries import ReferenceRecord, TimeEntry
from services.matcher import match_description, match_entries
from services.reference_table import ReferenceTable


def test_noisy_description_matches(reference_table):
    result = match_description("team   sync!!", reference_table)

    assert result.task_code == "T-100"
    assert result.confidence == 1
    assert result.candidate == "team sync"


def test_exact_description_matches(reference_table):
    result = match_description("Code review", reference_table)

    assert result.task_code == "DEV-600"
    assert result.score == 100


def test_dash_and_ampersand_variants_match(reference_table):
    result = match_description("Pflichtinfo–Umsetzung und Anpassungen", reference_table)

    assert result.task_code == "PFL-310"


@pytest.mark.parametrize("description", ["Team sync", "", "anything at all"])
def test_empty_table_is_unmapped(empty_table, description):
    result = match_description(description, empty_table)

    assert result.task_code == UNMAPPED
    assert result.confidence == 0
    assert not result.is_mapped


def test_unrelated_description_is_unmapped(reference_table):
    result = match_description("xqzv", reference_table)

    assert result.task_code == UNMAPPED
    assert result.confidence == 0


def test_blank_description_is_unmapped(reference_table):
    assert match_description("!!!", reference_table).task_code == UNMAPPED


def test_duplicate_candidates_first_record_wins():
    table = ReferenceTable(
        [
            ReferenceRecord("Other thing", "X-1"),
            ReferenceRecord("Team sync", "T-100"),
            ReferenceRecord("Team Sync!", "T-200"),
        ]
    )

    assert match_description("team sync", table).task_code == "T-100"


def test_matching_is_deterministic(reference_table):
    results = {match_description("weekly planing", reference_table) for _ in range(5)}

    assert len(results) == 1
    assert results.pop().task_code == "T-110"


def test_score_confidence_mode(reference_table):
    exact = match_description("Code review", reference_table, confidence_mode="score")
    fuzzy = match_description("team   sync!!", reference_table, confidence_mode="score")

    assert exact.confidence == 1.0
    assert 0.6 <= fuzzy.confidence < 1.0
    assert fuzzy.confidence == round(fuzzy.score / 100, 4)


def test_unknown_confidence_mode(reference_table):
    with pytest.raises(ValueError):
        match_description("Team sync", reference_table, confidence_mode="fuzzy")


def test_score_cutoff(reference_table):
    assert match_description("weekly planing", reference_table, score_cutoff=100).task_code == UNMAPPED


def test_match_entries_keeps_order_and_fields(reference_table):
    entries = [
        TimeEntry("12 Jan, 2024", "09:00", "10:00", "Team sync"),
        TimeEntry("12 Jan, 2024", "10:00", "11:00", "xqzv"),
        TimeEntry("13 Jan, 2024", "08:00", "09:00", "code review"),
    ]

    matched = match_entries(entries, reference_table)

    assert [(m.description, m.task_code) for m in matched] == [
        ("Team sync", "T-100"),
        ("xqzv", UNMAPPED),
        ("code review", "DEV-600"),
    ]
    assert matched[2].date == "13 Jan, 2024"
    assert (matched[0].start, matched[0].end) == ("09:00", "10:00")


def test_matching_does_not_modify_table(reference_table):
    before = reference_table.snapshot()

    match_entries([TimeEntry("12 Jan, 2024", "09:00", "10:00", "xqzv")], reference_table)

    assert reference_table.snapshot() == before


@pytest.mark.parametrize(
    "value, expected",
    [(None, "binary"), ("Score", "score"), (" binary ", "binary")],
)
def test_resolve_confidence_mode(value, expected):
    assert resolve_confidence_mode(value) == expected


def test_unknown_configured_confidence_mode_falls_back():
    with pytest.warns(UserWarning, match="Unknown CONFIDENCE_MODE"):
        mode = resolve_confidence_mode("fuzzy")

    assert mode == DEFAULT_CONFIDENCE_MODE
