"""
Squad assembly - pure functions only.

Single-pass greedy packing, no backtracking:

  1. Each referral cluster (ascending id) is cut into consecutive chunks of
     at most `squad_size`.
  2. Each chunk is topped up from the unclustered pool, one candidate at a
     time: the candidate with the highest mean compatibility against the
     current members wins; ties go to the earliest candidate in pool order.
  3. A chunk reaching the threshold min(3, squad_size) becomes a squad.
     Otherwise every member of the chunk, borrowed fill-ins included, is
     left unassigned.
  4. The unclustered remainder is seeded in pool order and filled the same
     way until fewer than `threshold` candidates are left.
  5. Whoever is left is unassigned.

Referrals are the stronger signal, so clusters are placed before any
compatibility-driven grouping happens.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from matching.compatibility import compatibility
from matching.profiles import CandidateSignup, PreferenceProfile

logger = logging.getLogger(__name__)

DEFAULT_SQUAD_SIZE = 6
MIN_VIABLE_SQUAD = 3

Scorer = Callable[[Optional[PreferenceProfile], Optional[PreferenceProfile]], float]

# A placed member and the referral cluster it came from (None for fill-ins)
Member = tuple[CandidateSignup, Optional[int]]


def viable_threshold(squad_size: int) -> int:
    return min(MIN_VIABLE_SQUAD, squad_size)


def _best_fill(members: list[Member], pool: list[CandidateSignup], scorer: Scorer) -> int:
    """Index in `pool` of the candidate with the highest mean score against `members`."""
    best_idx   = -1
    best_score = -1.0
    for idx, candidate in enumerate(pool):
        total = sum(scorer(candidate.profile, m.profile) for m, _ in members)
        avg = total / len(members)
        if avg > best_score:
            best_score = avg
            best_idx = idx
    return best_idx


def _fill(members: list[Member], pool: list[CandidateSignup], squad_size: int, scorer: Scorer) -> None:
    """Move best-matching candidates from `pool` into `members` until full or pool is empty."""
    while len(members) < squad_size and pool:
        idx = _best_fill(members, pool, scorer)
        members.append((pool.pop(idx), None))


def assemble_squads(
    clustered: list[tuple[int, list[CandidateSignup]]],
    unclustered: list[CandidateSignup],
    squad_size: int = DEFAULT_SQUAD_SIZE,
    scorer: Scorer = compatibility,
) -> tuple[list[list[Member]], list[CandidateSignup]]:
    """
    Pack clusters and unclustered candidates into squads.

    clustered   - [(cluster_id, members), ...], members in pool order
    unclustered - candidates with no cluster, in pool order
    Returns (squads, unassigned). Each squad is a list of (candidate, cluster_id)
    in placement order. `unassigned` is not ordered; callers that report it
    should re-sort against the original pool.
    """
    if squad_size < 1:
        raise ValueError(f"squad_size must be at least 1, got {squad_size}")

    threshold = viable_threshold(squad_size)
    pool      = list(unclustered)

    squads:     list[list[Member]] = []
    unassigned: list[CandidateSignup] = []

    for cluster_id, cluster_members in clustered:
        for start in range(0, len(cluster_members), squad_size):
            chunk = cluster_members[start:start + squad_size]
            members: list[Member] = [(c, cluster_id) for c in chunk]
            _fill(members, pool, squad_size, scorer)

            if len(members) >= threshold:
                squads.append(members)
                logger.debug("cluster %d chunk -> squad of %d", cluster_id, len(members))
                continue

            unassigned.extend(c for c, _ in members)
            logger.debug("cluster %d chunk of %d dissolved", cluster_id, len(chunk))

    while len(pool) >= threshold:
        members = [(pool.pop(0), None)]
        _fill(members, pool, squad_size, scorer)
        if len(members) >= threshold:
            squads.append(members)
            logger.debug("unclustered squad of %d", len(members))
        else:
            unassigned.extend(c for c, _ in members)

    unassigned.extend(pool)
    return squads, unassigned
