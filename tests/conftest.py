"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from services.reference_table import ReferenceTable  # noqa: E402

MAPPING_CSV = """Client,Project,Phase,Description,Subtask
ANY,-,-,Team sync,T-100
ANY,-,-,Weekly planning call,T-110
Verlag,Verlagsinfo,Vorbereitung,Verlagsinfo-Vorbereitung,VLI-410
Verlag,Pflichtinfo,Umsetzung,Pflichtinfo-Umsetzung & Anpassungen,PFL-310
ANY,-,-,Code review,DEV-600
"""


@pytest.fixture
def sample_log():
    """Two-day shadow-calendar log with one line before the first header."""
    return (
        "07:30 - 08:00 -> Before any header\n"
        "12 Jan, 2024\n"
        "09:00 - 10:00 -> Team sync\n"
        "10:00 – 11:30 → > Weekly planning call\n"
        "\n"
        "random note\n"
        "13 Januar 2024\n"
        "9:15 — 12:00 - Code review\n"
    )


@pytest.fixture
def mapping_csv(tmp_path):
    """Task mapping CSV file in a temp directory."""
    path = tmp_path / "mapping.csv"
    path.write_text(MAPPING_CSV, encoding="utf-8")
    return path


@pytest.fixture
def reference_table(mapping_csv):
    """CSV-backed reference table."""
    return ReferenceTable.load(mapping_csv)


@pytest.fixture
def empty_table():
    """In-memory reference table without records."""
    return ReferenceTable()
