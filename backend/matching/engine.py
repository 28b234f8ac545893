"""
Squad recommendation entry point - pure functions only.

candidates + referral edges → clusters → assembled squads → response dict.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from matching.aggregator import aggregate_result
from matching.assembler import DEFAULT_SQUAD_SIZE, Scorer, assemble_squads
from matching.compatibility import compatibility
from matching.profiles import CandidateSignup
from matching.referrals import build_referral_clusters, group_clusters

logger = logging.getLogger(__name__)

NO_PENDING_MESSAGE = "No pending signups found"


def empty_result() -> dict:
    return {
        "success":          True,
        "squads":           [],
        "unassigned_users": [],
        "total_pending":    0,
        "message":          NO_PENDING_MESSAGE,
    }


def recommend_squads(
    candidates: list[CandidateSignup],
    referral_edges: Iterable[Sequence] = (),
    squad_size: int = DEFAULT_SQUAD_SIZE,
    prioritize_referrals: bool = True,
    scorer: Scorer = compatibility,
) -> dict:
    """
    Propose squads for one event's pending candidates.

    candidates           - pending signups in stable order
    referral_edges       - (user_a, user_b) pairs recorded for the event
    prioritize_referrals - when False, edges are ignored and everyone is
                           grouped by compatibility alone
    """
    if not candidates:
        return empty_result()

    pool = [c.user_id for c in candidates]
    clusters = build_referral_clusters(referral_edges, pool) if prioritize_referrals else {}
    clustered, unclustered = group_clusters(candidates, clusters)

    squads, unassigned = assemble_squads(clustered, unclustered, squad_size, scorer)
    result = aggregate_result(squads, unassigned, candidates, scorer)

    logger.info(
        "Generated %d squads from %d candidates (%d clusters), %d unassigned",
        len(result["squads"]), len(candidates), len(clustered), len(result["unassigned_users"]),
    )
    return result
