"""
Referral clusters - pure functions only.

A cluster is a connected component of the undirected referral graph,
restricted to the current candidate pool. Cluster ids are handed out in
pool order so the same input always yields the same numbering.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Optional

import networkx as nx

from matching.errors import MalformedInputError
from matching.profiles import CandidateSignup


def _endpoints(edge) -> tuple:
    if isinstance(edge, (str, bytes)) or not isinstance(edge, Sequence) or len(edge) != 2:
        raise MalformedInputError(f"Referral edge must be a (user_a, user_b) pair, got {edge!r}")
    return edge[0], edge[1]


def build_referral_graph(edges: Iterable[Sequence], pool: Sequence[str]) -> nx.Graph:
    """
    Undirected graph over the referral edges whose endpoints are both in `pool`.

    Self-referrals are dropped. Users that end up in no edge are not nodes.
    """
    members = set(pool)
    G = nx.Graph()
    for edge in edges:
        a, b = _endpoints(edge)
        if a == b or a not in members or b not in members:
            continue
        G.add_edge(a, b)
    return G


def build_referral_clusters(edges: Iterable[Sequence], pool: Sequence[str]) -> dict[str, int]:
    """
    Map each clustered user id to its cluster id (1, 2, ...).

    edges - iterable of (user_a, user_b) pairs
    pool  - candidate user ids in stable order
    Users that appear in no surviving edge are absent from the result.
    """
    G = build_referral_graph(edges, pool)

    clusters: dict[str, int] = {}
    next_id = 0
    for user_id in pool:
        if user_id not in G or user_id in clusters:
            continue
        next_id += 1
        clusters[user_id] = next_id
        for _, reached in nx.bfs_edges(G, user_id):
            clusters[reached] = next_id
    return clusters


def group_clusters(
    candidates: list[CandidateSignup],
    clusters: dict[str, int],
) -> tuple[list[tuple[int, list[CandidateSignup]]], list[CandidateSignup]]:
    """
    Split candidates into referral clusters and the unclustered remainder.

    Returns ([(cluster_id, members), ...] in ascending id, unclustered).
    Members and unclustered candidates keep their pool order.
    """
    grouped: dict[int, list[CandidateSignup]] = {}
    unclustered: list[CandidateSignup] = []
    for c in candidates:
        cid: Optional[int] = clusters.get(c.user_id)
        if cid is None:
            unclustered.append(c)
        else:
            grouped.setdefault(cid, []).append(c)
    return sorted(grouped.items()), unclustered
