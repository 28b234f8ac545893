"""
Pairwise compatibility between two preference profiles - pure functions only.

compatibility(a, b) averages one sub-score per factor that both profiles
define; factors missing on either side are skipped. With no comparable
factor the result is the neutral NEUTRAL_SCORE.

Factors:
  vibe          1 - |va - vb| / 100
  age range     (4 - |ia - ib|) / 4 over AGE_RANGES positions
  area          1.0 same zone, 0.7 if b is in a's nearby list, else 0.3
  quest types   |A ∩ B| / max(|A|, |B|), both non-empty
  context tags  |A ∩ B| / max(|A|, |B|), both non-empty
"""
from __future__ import annotations

from typing import Optional

from matching.profiles import AGE_RANGES, NEARBY_AREAS, PreferenceProfile

NEUTRAL_SCORE = 0.5

SAME_AREA_SCORE   = 1.0
NEARBY_AREA_SCORE = 0.7
FAR_AREA_SCORE    = 0.3


def _overlap(a: tuple[str, ...], b: tuple[str, ...]) -> Optional[float]:
    if not a or not b:
        return None
    common = len(set(a) & set(b))
    return common / max(len(a), len(b))


def _vibe_score(a: PreferenceProfile, b: PreferenceProfile) -> Optional[float]:
    if a.vibe_preference is None or b.vibe_preference is None:
        return None
    return 1 - abs(a.vibe_preference - b.vibe_preference) / 100


def _age_score(a: PreferenceProfile, b: PreferenceProfile) -> Optional[float]:
    if a.age_range not in AGE_RANGES or b.age_range not in AGE_RANGES:
        return None
    span = len(AGE_RANGES) - 1
    diff = abs(AGE_RANGES.index(a.age_range) - AGE_RANGES.index(b.age_range))
    return (span - diff) / span


def _area_score(a: PreferenceProfile, b: PreferenceProfile) -> Optional[float]:
    if not a.area or not b.area:
        return None
    if a.area == b.area:
        return SAME_AREA_SCORE
    if b.area in NEARBY_AREAS.get(a.area, ()):
        return NEARBY_AREA_SCORE
    return FAR_AREA_SCORE


def factor_scores(a: PreferenceProfile, b: PreferenceProfile) -> dict[str, float]:
    """Sub-score per comparable factor, keyed by factor name."""
    candidates = {
        "vibe":         _vibe_score(a, b),
        "age_range":    _age_score(a, b),
        "area":         _area_score(a, b),
        "quest_types":  _overlap(a.quest_type_interests, b.quest_type_interests),
        "context_tags": _overlap(a.context_tags, b.context_tags),
    }
    return {k: v for k, v in candidates.items() if v is not None}


def compatibility(a: Optional[PreferenceProfile], b: Optional[PreferenceProfile]) -> float:
    if a is None or b is None:
        return NEUTRAL_SCORE
    scores = factor_scores(a, b)
    if not scores:
        return NEUTRAL_SCORE
    return sum(scores.values()) / len(scores)
