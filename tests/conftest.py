"""
Shared fixtures and helpers for the squad-formation tests.

Engine tests are pure: candidates are built in memory with make_candidate().
Store and API tests write a throwaway SQLite signup store under tmp_path
using the same schema the backend reads.
"""
import json
import sqlite3
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from config import settings                                         # noqa: E402
from db import init_schema                                          # noqa: E402
from matching.profiles import CandidateSignup, PreferenceProfile    # noqa: E402


# --------------------------------------------------------------------------
# In-memory candidates
# --------------------------------------------------------------------------

def make_profile(vibe=None, age=None, area=None, quests=(), tags=()) -> PreferenceProfile:
    return PreferenceProfile(
        vibe_preference=vibe,
        age_range=age,
        area=area,
        quest_type_interests=tuple(quests),
        context_tags=tuple(tags),
    )


def make_candidate(user_id: str, profile: PreferenceProfile | None = None, name: str | None = None) -> CandidateSignup:
    return CandidateSignup(
        signup_id=f"s-{user_id}",
        user_id=user_id,
        display_name=name or user_id.upper(),
        profile=profile,
    )


def make_pool(n: int, prefix: str = "u") -> list[CandidateSignup]:
    """n candidates with no preferences: u1, u2, ..."""
    return [make_candidate(f"{prefix}{i}") for i in range(1, n + 1)]


def chain_edges(user_ids: list[str]) -> list[tuple[str, str]]:
    """Referral edges linking consecutive users into one cluster."""
    return [(a, b) for a, b in zip(user_ids, user_ids[1:])]


def member_ids(squad: dict) -> list[str]:
    return [m["user_id"] for m in squad["members"]]


# --------------------------------------------------------------------------
# SQLite signup store
# --------------------------------------------------------------------------

class StoreBuilder:
    """Writes rows into a fresh signup store; signups keep insertion order."""

    def __init__(self, path: Path):
        self.path = path
        self.conn = sqlite3.connect(str(path))
        init_schema(self.conn)
        self._tick = 0

    def profile(self, user_id: str, display_name: str | None = None, preferences=None) -> "StoreBuilder":
        raw = preferences if isinstance(preferences, str) or preferences is None else json.dumps(preferences)
        self.conn.execute(
            "INSERT INTO profiles (id, display_name, email, preferences) VALUES (?,?,?,?)",
            (user_id, display_name, f"{user_id}@example.com", raw),
        )
        return self

    def signup(self, quest_id: str, user_id: str, status: str = "pending", signup_id: str | None = None) -> "StoreBuilder":
        self._tick += 1
        self.conn.execute(
            "INSERT INTO quest_signups (id, quest_id, user_id, status, created_at) VALUES (?,?,?,?,?)",
            (signup_id or f"s-{quest_id}-{user_id}-{self._tick}", quest_id, user_id, status,
             f"2026-01-01T00:00:{self._tick:02d}"),
        )
        return self

    def referral(self, quest_id: str, referrer: str, referred: str | None) -> "StoreBuilder":
        self.conn.execute(
            "INSERT INTO referrals (quest_id, referrer_user_id, referred_user_id) VALUES (?,?,?)",
            (quest_id, referrer, referred),
        )
        return self

    def close(self) -> Path:
        self.conn.commit()
        self.conn.close()
        return self.path


@pytest.fixture
def store(tmp_path) -> StoreBuilder:
    return StoreBuilder(tmp_path / "signups.db")


@pytest.fixture
def use_store(monkeypatch):
    """Point the backend at a finished store: use_store(builder)."""
    def _use(builder: StoreBuilder) -> Path:
        path = builder.close()
        monkeypatch.setattr(settings, "db_path", path)
        return path
    return _use
