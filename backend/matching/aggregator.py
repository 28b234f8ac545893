"""
Squad proposal packaging - pure functions only.

Turns assembled squads into the response shape reviewers see: a name, the
member roster, a compatibility score over every member pair, and how many
members were placed through referral protection.
"""
from __future__ import annotations

from itertools import combinations
from string import ascii_uppercase

from matching.assembler import Member, Scorer
from matching.compatibility import NEUTRAL_SCORE, compatibility
from matching.profiles import CandidateSignup


def squad_name(index: int) -> str:
    """0 → "Squad A", 25 → "Squad Z", 26 → "Squad AA", ..."""
    letters = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters = ascii_uppercase[rem] + letters
    return f"Squad {letters}"


def squad_compatibility(candidates: list[CandidateSignup], scorer: Scorer = compatibility) -> float:
    """Mean score over all unordered member pairs; neutral for fewer than two members."""
    pairs = [scorer(a.profile, b.profile) for a, b in combinations(candidates, 2)]
    if not pairs:
        return NEUTRAL_SCORE
    return sum(pairs) / len(pairs)


def _member_row(candidate: CandidateSignup, cluster_id) -> dict:
    return {
        "user_id":          candidate.user_id,
        "signup_id":        candidate.signup_id,
        "display_name":     candidate.display_name,
        "area":             candidate.area,
        "referral_cluster": cluster_id,
    }


def _unassigned_row(candidate: CandidateSignup) -> dict:
    return {
        "user_id":      candidate.user_id,
        "signup_id":    candidate.signup_id,
        "display_name": candidate.display_name,
    }


def build_proposal(index: int, members: list[Member], scorer: Scorer = compatibility) -> dict:
    score = squad_compatibility([c for c, _ in members], scorer)
    return {
        "suggested_name":      squad_name(index),
        "members":             [_member_row(c, cid) for c, cid in members],
        "compatibility_score": round(score, 2),
        "referral_bonds":      sum(1 for _, cid in members if cid is not None),
    }


def aggregate_result(
    squads: list[list[Member]],
    unassigned: list[CandidateSignup],
    candidates: list[CandidateSignup],
    scorer: Scorer = compatibility,
) -> dict:
    """
    Package assembled squads into the engine response.

    candidates - the full pool in stable order; unassigned users are
                 reported in that order and it defines total_pending.
    """
    left = {c.user_id for c in unassigned}
    return {
        "success":          True,
        "squads":           [build_proposal(i, members, scorer) for i, members in enumerate(squads)],
        "unassigned_users": [_unassigned_row(c) for c in candidates if c.user_id in left],
        "total_pending":    len(candidates),
    }
