#!/usr/bin/env python3
"""Create the shadow-hours SQLite3 database with submission and API logging tables."""

import sqlite3
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH


def create_database(db_path: Path | None = None) -> Path:
    """Create the database and tables if they don't exist."""
    db_path = Path(db_path or DB_PATH)
    # Ensure directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA foreign_keys = ON")
    cursor = conn.cursor()

    # Create submissions table (mock ERP submit)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS submissions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            employee TEXT NOT NULL,
            source TEXT NOT NULL CHECK(source IN ('text', 'rows')),
            create_date TEXT DEFAULT CURRENT_TIMESTAMP
        )
    """)

    # Create submission rows table
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS submission_rows (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            submission_id INTEGER NOT NULL,
            employee TEXT,
            date TEXT NOT NULL,
            start_time TEXT NOT NULL,
            end_time TEXT NOT NULL,
            description TEXT,
            task_code TEXT NOT NULL,
            confidence REAL,
            FOREIGN KEY (submission_id) REFERENCES submissions(id)
        )
    """)

    # Create API request logging table
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS api_requests (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            request_id TEXT UNIQUE NOT NULL,
            timestamp TEXT NOT NULL,
            endpoint TEXT NOT NULL,
            method TEXT NOT NULL,
            client_ip TEXT,
            employee TEXT,
            text_size_bytes INTEGER,
            status_code INTEGER NOT NULL,
            error_code TEXT,
            error_message TEXT,
            processing_time_ms INTEGER NOT NULL,
            entries_parsed INTEGER,
            entries_unmapped INTEGER
        )
    """)

    # Create API request details table
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS api_request_details (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            request_id TEXT NOT NULL,
            detail_type TEXT NOT NULL CHECK(detail_type IN ('validation_error', 'unmapped', 'learned', 'warning')),
            message TEXT NOT NULL,
            FOREIGN KEY (request_id) REFERENCES api_requests(request_id)
        )
    """)

    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_submission_rows_submission ON submission_rows(submission_id)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_requests_status ON api_requests(status_code)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_request_details_request ON api_request_details(request_id)"
    )

    conn.commit()
    conn.close()
    print(f"Database created successfully at: {db_path}")
    return db_path


if __name__ == "__main__":
    create_database()
