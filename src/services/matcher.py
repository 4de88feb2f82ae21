"""
Fuzzy mapping of free-text descriptions to ERP subtask codes.
"""

from rapidfuzz import fuzz, process

from core.config import CONFIDENCE_MODE, CONFIDENCE_MODES, MATCH_SCORE_CUTOFF, UNMAPPED
from core.normalize import normalize
from models.entries import MatchedEntry, MatchResult, TimeEntry
from services.reference_table import ReferenceTable

NO_MATCH = MatchResult(task_code=UNMAPPED, confidence=0.0)


def _confidence(score: float, mode: str) -> float:
    if mode == "score":
        return round(score / 100.0, 4)
    return 1.0


def match_description(
    description: str,
    table: ReferenceTable,
    score_cutoff: float = MATCH_SCORE_CUTOFF,
    confidence_mode: str = CONFIDENCE_MODE,
) -> MatchResult:
    """
    Find the task code for a description.

    The normalized description is compared against every normalized
    reference description with rapidfuzz's WRatio. The best candidate wins;
    among equal scores the earliest in table order wins. The task code comes
    from the first record carrying the winning normalized description.

    Returns NO_MATCH (UNMAPPED, confidence 0) for an empty table or when no
    candidate reaches `score_cutoff`.
    """
    if confidence_mode not in CONFIDENCE_MODES:
        raise ValueError(f"Unknown confidence mode '{confidence_mode}'")

    query = normalize(description)
    records = table.snapshot()
    if not query or not records:
        return NO_MATCH

    candidates = [r.normalized_description for r in records]
    best = process.extractOne(
        query,
        candidates,
        scorer=fuzz.WRatio,
        score_cutoff=score_cutoff,
    )
    if best is None:
        return NO_MATCH

    candidate, score, _ = best
    record = table.first_record_for(candidate)
    return MatchResult(
        task_code=record.task_code,
        confidence=_confidence(score, confidence_mode),
        score=float(score),
        candidate=candidate,
    )


def match_entries(
    entries: list[TimeEntry],
    table: ReferenceTable,
    score_cutoff: float = MATCH_SCORE_CUTOFF,
    confidence_mode: str = CONFIDENCE_MODE,
) -> list[MatchedEntry]:
    """Map every entry against the table, keeping input order."""
    return [
        MatchedEntry.from_entry(
            entry,
            match_description(entry.description, table, score_cutoff, confidence_mode),
        )
        for entry in entries
    ]
