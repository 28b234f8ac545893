"""
Candidate and preference-profile records - pure functions only.

Profiles arrive from the profile store as a nested JSON document:

    {
      "social_style": {"vibe_preference": 70},
      "demographics": {"age_range": "25_34", "area": "downtown"},
      "interests":    {"quest_types": ["food_drink", "live_music"]},
      "context_tags": ["new_to_city"]
    }

parse_preferences() flattens that into a PreferenceProfile with one named
optional field per compatibility factor. Anything missing or unparseable is
left as None / empty, which the scorer treats as "not comparable".
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from matching.errors import MalformedInputError

# Ordinal age buckets, youngest first
AGE_RANGES = ("18_24", "25_34", "35_44", "45_54", "55_plus")

# One-directional "nearby" lookup per zone. "other" has no neighbours.
NEARBY_AREAS: dict[str, tuple[str, ...]] = {
    "downtown":                ("east_austin", "central", "south_austin"),
    "east_austin":             ("downtown", "central", "north_austin"),
    "south_austin":            ("downtown", "central"),
    "north_austin":            ("east_austin", "central", "round_rock_pflugerville", "cedar_park_leander"),
    "central":                 ("downtown", "east_austin", "south_austin", "north_austin"),
    "round_rock_pflugerville": ("north_austin", "cedar_park_leander"),
    "cedar_park_leander":      ("north_austin", "round_rock_pflugerville"),
}

AREAS = tuple(NEARBY_AREAS) + ("other",)

UNKNOWN_NAME = "Unknown"


@dataclass(frozen=True)
class PreferenceProfile:
    vibe_preference:      Optional[int] = None
    age_range:            Optional[str] = None
    area:                 Optional[str] = None
    quest_type_interests: tuple[str, ...] = ()
    context_tags:         tuple[str, ...] = ()


@dataclass(frozen=True)
class CandidateSignup:
    """One pending signup. `profile` is None when the user never filled in preferences."""
    signup_id:    str
    user_id:      str
    display_name: str = UNKNOWN_NAME
    profile:      Optional[PreferenceProfile] = None

    @property
    def area(self) -> Optional[str]:
        return self.profile.area if self.profile else None


# ── Parsing ───────────────────────────────────────────────────────────────────

def _section(raw: dict, key: str) -> dict:
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def _tags(value) -> tuple[str, ...]:
    """Deduplicate a tag list, keeping first-seen order."""
    if not isinstance(value, (list, tuple)):
        return ()
    seen: dict[str, None] = {}
    for tag in value:
        if isinstance(tag, str) and tag:
            seen.setdefault(tag, None)
    return tuple(seen)


def _vibe(value) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return None
    return int(min(max(round(value), 0), 100))


def parse_preferences(raw: Optional[dict]) -> Optional[PreferenceProfile]:
    """
    Convert a stored preferences document into a PreferenceProfile.

    Returns None for a missing or non-dict document. `demographics.austin_area`
    is read when `demographics.area` is absent. Unknown age buckets are dropped.
    """
    if not isinstance(raw, dict):
        return None

    social       = _section(raw, "social_style")
    demographics = _section(raw, "demographics")
    interests    = _section(raw, "interests")

    age_range = demographics.get("age_range")
    if age_range not in AGE_RANGES:
        age_range = None

    area = demographics.get("area") or demographics.get("austin_area")
    if not isinstance(area, str) or not area:
        area = None

    return PreferenceProfile(
        vibe_preference=_vibe(social.get("vibe_preference")),
        age_range=age_range,
        area=area,
        quest_type_interests=_tags(interests.get("quest_types")),
        context_tags=_tags(raw.get("context_tags")),
    )


def build_candidates(signups: list[dict], profiles: list[dict]) -> list[CandidateSignup]:
    """
    Join signup rows to profile rows by user id, keeping signup order.

    signups  - list of dicts: {id, user_id}
    profiles - list of dicts: {id, display_name, preferences}
    Raises MalformedInputError when a user appears in more than one signup.
    """
    profile_map = {p["id"]: p for p in profiles}
    seen: set[str] = set()
    candidates = []
    for s in signups:
        user_id = s["user_id"]
        if user_id in seen:
            raise MalformedInputError(f"User {user_id!r} has more than one pending signup")
        seen.add(user_id)

        profile = profile_map.get(user_id) or {}
        candidates.append(CandidateSignup(
            signup_id=s["id"],
            user_id=user_id,
            display_name=profile.get("display_name") or UNKNOWN_NAME,
            profile=parse_preferences(profile.get("preferences")),
        ))
    return candidates
