import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from config import settings
from db import get_db
from queries.signups import fetch_event_inputs
from matching.engine import recommend_squads
from matching.profiles import build_candidates

logger = logging.getLogger(__name__)

router = APIRouter()


class RecommendOptions(BaseModel):
    prioritize_referrals: bool = True
    # Accepted for client compatibility; assembly does not use it
    balance_vibe:         bool = False


class RecommendSquadsRequest(BaseModel):
    event_id:   str = Field(..., min_length=1)
    squad_size: int = Field(default_factory=lambda: settings.default_squad_size, ge=1)
    options:    RecommendOptions = Field(default_factory=RecommendOptions)


def _load_candidates(event_id: str):
    conn = get_db()
    try:
        signups, profiles, edges = fetch_event_inputs(conn, event_id)
    finally:
        conn.close()
    return build_candidates(signups, profiles), edges


@router.post("/api/recommend-squads")
def recommend(req: RecommendSquadsRequest):
    if req.squad_size > settings.max_squad_size:
        raise HTTPException(
            status_code=422,
            detail=f"squad_size must be at most {settings.max_squad_size}",
        )
    logger.info("Recommend squads request: event_id=%s squad_size=%d", req.event_id, req.squad_size)

    candidates, edges = _load_candidates(req.event_id)
    return recommend_squads(
        candidates,
        edges,
        squad_size=req.squad_size,
        prioritize_referrals=req.options.prioritize_referrals,
    )


@router.get("/api/events/{event_id}/pending")
def pending_candidates(event_id: str):
    candidates, _ = _load_candidates(event_id)
    return {
        "event_id":      event_id,
        "total_pending": len(candidates),
        "candidates": [
            {
                "user_id":      c.user_id,
                "signup_id":    c.signup_id,
                "display_name": c.display_name,
                "area":         c.area,
                "has_profile":  c.profile is not None,
            }
            for c in candidates
        ],
    }
