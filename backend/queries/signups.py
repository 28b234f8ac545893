"""
Signup, profile and referral queries - DB I/O only.
"""
from __future__ import annotations

import json
import logging
import sqlite3

from db import row_to_dict

logger = logging.getLogger(__name__)


def fetch_pending_signups(conn: sqlite3.Connection, quest_id: str) -> list[dict]:
    """Pending signups for one event, oldest first: [{id, user_id}]."""
    rows = conn.execute(
        "SELECT id, user_id FROM quest_signups "
        "WHERE quest_id = ? AND status = 'pending' "
        "ORDER BY created_at, id",
        (quest_id,),
    ).fetchall()
    return [row_to_dict(r) for r in rows]


def _decode_preferences(user_id: str, raw):
    if raw is None or isinstance(raw, dict):
        return raw
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Unreadable preferences for user %s, scoring as neutral", user_id)
        return None


def fetch_profiles(conn: sqlite3.Connection, user_ids: list[str]) -> list[dict]:
    """
    Profiles for the given users: [{id, display_name, preferences}].

    `preferences` is decoded from its JSON column; users without a profile
    row are simply absent.
    """
    if not user_ids:
        return []
    ph = ",".join("?" * len(user_ids))
    rows = conn.execute(
        f"SELECT id, display_name, preferences FROM profiles WHERE id IN ({ph})",
        list(user_ids),
    ).fetchall()
    profiles = []
    for r in rows:
        p = row_to_dict(r)
        p["preferences"] = _decode_preferences(p["id"], p["preferences"])
        profiles.append(p)
    return profiles


def fetch_referral_edges(conn: sqlite3.Connection, quest_id: str) -> list[tuple[str, str]]:
    """Referral pairs recorded for one event, in insertion order."""
    rows = conn.execute(
        "SELECT referrer_user_id, referred_user_id FROM referrals "
        "WHERE quest_id = ? AND referred_user_id IS NOT NULL "
        "ORDER BY rowid",
        (quest_id,),
    ).fetchall()
    return [(r["referrer_user_id"], r["referred_user_id"]) for r in rows]


def fetch_event_inputs(conn: sqlite3.Connection, quest_id: str) -> tuple[list[dict], list[dict], list[tuple[str, str]]]:
    """Everything the engine reads for one event: (signups, profiles, referral edges)."""
    signups  = fetch_pending_signups(conn, quest_id)
    profiles = fetch_profiles(conn, [s["user_id"] for s in signups])
    edges    = fetch_referral_edges(conn, quest_id) if signups else []
    return signups, profiles, edges
