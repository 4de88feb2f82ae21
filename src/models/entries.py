"""
Data models for parsed, matched and exported shadow-calendar entries.

TimeEntry and ReferenceRecord are immutable; MatchedEntry is updated in place
by the learning loop. OutputRecord is the JSON shape handed to the ERP side.
"""

from dataclasses import asdict, dataclass, field
from typing import TypedDict

from core.config import UNMAPPED
from core.normalize import normalize


@dataclass(frozen=True)
class TimeEntry:
    """One time-range line scoped to the date header above it."""

    date: str  # header as written, e.g. "12 Jan, 2024"
    start: str  # "HH:MM"
    end: str  # "HH:MM"
    description: str


@dataclass(frozen=True)
class ReferenceRecord:
    """Known description -> task code row of the reference table."""

    description: str
    task_code: str
    normalized_description: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "normalized_description", normalize(self.description))


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one description."""

    task_code: str
    confidence: float
    score: float = 0.0  # raw rapidfuzz score, 0-100
    candidate: str | None = None  # winning normalized description

    @property
    def is_mapped(self) -> bool:
        return self.task_code != UNMAPPED


@dataclass
class MatchedEntry:
    """TimeEntry plus the task code it was mapped to."""

    date: str
    start: str
    end: str
    description: str
    task_code: str = UNMAPPED
    confidence: float = 0.0

    @classmethod
    def from_entry(cls, entry: TimeEntry, result: MatchResult) -> "MatchedEntry":
        return cls(
            **asdict(entry),
            task_code=result.task_code,
            confidence=result.confidence,
        )

    @property
    def is_unmapped(self) -> bool:
        return self.task_code == UNMAPPED


class OutputRecord(TypedDict):
    """Exported row consumed by the ERP-facing collaborator."""
    employee: str
    date: str  # ISO 8601, YYYY-MM-DD
    start_time: str
    end_time: str
    description: str
    task_code: str
    confidence: float
