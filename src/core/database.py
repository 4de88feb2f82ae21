"""
SQLite database operations for submitted shadow-hours rows.
"""

import sqlite3
from pathlib import Path

from core import config


def get_connection(db_path: Path | None = None) -> sqlite3.Connection:
    """Get a database connection."""
    return sqlite3.connect(db_path or config.DB_PATH)


def create_submission_record(
    conn: sqlite3.Connection, employee: str, source: str
) -> int:
    """
    Create submission record and return submission_id.

    Not committed here: insert_submission_rows commits the header together
    with its rows.

    source is "text" when rows were mapped from the submitted text and
    "rows" when the caller sent (possibly hand-edited) rows.
    """
    cursor = conn.cursor()
    cursor.execute(
        "INSERT INTO submissions (employee, source) VALUES (?, ?)",
        (employee, source),
    )
    return cursor.lastrowid


def insert_submission_rows(conn: sqlite3.Connection, submission_id: int, records: list[dict]):
    """Insert all output records linked to submission_id."""
    cursor = conn.cursor()
    for record in records:
        cursor.execute(
            """
            INSERT INTO submission_rows (
                submission_id, employee, date, start_time, end_time,
                description, task_code, confidence
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                submission_id,
                record["employee"],
                record["date"],
                record["start_time"],
                record["end_time"],
                record["description"],
                record["task_code"],
                record["confidence"],
            ),
        )
    conn.commit()


def fetch_submission_rows(conn: sqlite3.Connection, submission_id: int) -> list[dict]:
    """Stored rows of one submission, in insertion order."""
    cursor = conn.cursor()
    cursor.execute(
        """
        SELECT employee, date, start_time, end_time, description, task_code, confidence
        FROM submission_rows WHERE submission_id = ? ORDER BY id
        """,
        (submission_id,),
    )
    columns = [col[0] for col in cursor.description]
    return [dict(zip(columns, row)) for row in cursor.fetchall()]
