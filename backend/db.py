"""
Database helpers shared across queries and routers.
No matching logic lives here - only I/O primitives.
"""
from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from fastapi import HTTPException

from config import settings

SCHEMA = """
CREATE TABLE IF NOT EXISTS profiles (
    id           TEXT PRIMARY KEY,
    display_name TEXT,
    email        TEXT,
    preferences  TEXT
);
CREATE TABLE IF NOT EXISTS quest_signups (
    id         TEXT PRIMARY KEY,
    quest_id   TEXT NOT NULL,
    user_id    TEXT NOT NULL,
    status     TEXT NOT NULL DEFAULT 'pending',
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS referrals (
    quest_id         TEXT NOT NULL,
    referrer_user_id TEXT NOT NULL,
    referred_user_id TEXT
);
CREATE INDEX IF NOT EXISTS idx_signups_quest ON quest_signups (quest_id, status);
CREATE INDEX IF NOT EXISTS idx_referrals_quest ON referrals (quest_id);
"""


def row_to_dict(row) -> dict:
    return dict(row)


def open_db(db_path: Path) -> sqlite3.Connection:
    """Open the signup store read-only. Raises FileNotFoundError if it does not exist."""
    db_path = Path(db_path)
    if not db_path.exists():
        raise FileNotFoundError(f"Signup store not found at {db_path}")
    conn = sqlite3.connect(f"{db_path.resolve().as_uri()}?mode=ro", uri=True)
    conn.row_factory = sqlite3.Row
    return conn


def get_db(db_path: Optional[Path] = None) -> sqlite3.Connection:
    try:
        return open_db(db_path or settings.db_path)
    except FileNotFoundError as ex:
        raise HTTPException(status_code=503, detail=str(ex))


def init_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(SCHEMA)
