"""
Offline squad recommendation pass.

Runs the matching engine for one event, either against the SQLite signup
store or against a JSON snapshot of the same three inputs, and writes the
proposal as JSON.

Usage:
    python3 recommend.py EVENT_ID                          # default store (SQUADS_DB_PATH)
    python3 recommend.py EVENT_ID --db data/signups.db     # explicit store
    python3 recommend.py EVENT_ID --squad-size 4 --no-referrals
    python3 recommend.py EVENT_ID --snapshot event.json --out squads.json

Snapshot format:
    {"signups":   [{"id": ..., "user_id": ...}, ...],
     "profiles":  [{"id": ..., "display_name": ..., "preferences": {...}}, ...],
     "referrals": [["user_a", "user_b"], ...]}
"""
from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

BACKEND = Path(__file__).parent
sys.path.insert(0, str(BACKEND))

from config import settings                               # noqa: E402
from db import open_db                                    # noqa: E402
from matching.engine import recommend_squads              # noqa: E402
from matching.profiles import build_candidates            # noqa: E402
from queries.signups import fetch_event_inputs            # noqa: E402


# ── Input loading ─────────────────────────────────────────────────────────────

def load_snapshot(path: Path) -> tuple[list[dict], list[dict], list[tuple[str, str]]]:
    data = json.loads(Path(path).read_text())
    signups   = data.get("signups", [])
    profiles  = data.get("profiles", [])
    referrals = [tuple(e) for e in data.get("referrals", [])]
    return signups, profiles, referrals


def load_store(db_path: Path, event_id: str) -> tuple[list[dict], list[dict], list[tuple[str, str]]]:
    conn = open_db(db_path)
    try:
        return fetch_event_inputs(conn, event_id)
    finally:
        conn.close()


def run(
    event_id: str,
    db_path: Path | None = None,
    snapshot: Path | None = None,
    squad_size: int | None = None,
    prioritize_referrals: bool = True,
) -> dict:
    if snapshot:
        signups, profiles, edges = load_snapshot(snapshot)
    else:
        signups, profiles, edges = load_store(db_path or settings.db_path, event_id)

    candidates = build_candidates(signups, profiles)
    result = recommend_squads(
        candidates,
        edges,
        squad_size=squad_size or settings.default_squad_size,
        prioritize_referrals=prioritize_referrals,
    )
    return {"event_id": event_id, **result}


def print_summary(result: dict) -> None:
    if result.get("message"):
        print(result["message"])
        return
    for squad in result["squads"]:
        names = ", ".join(m["display_name"] for m in squad["members"])
        print(
            f"  {squad['suggested_name']}: {len(squad['members'])} members, "
            f"compat={squad['compatibility_score']:.2f}, bonds={squad['referral_bonds']}  [{names}]"
        )
    if result["unassigned_users"]:
        names = ", ".join(u["display_name"] for u in result["unassigned_users"])
        print(f"  Unassigned ({len(result['unassigned_users'])}): {names}")


# ── CLI ───────────────────────────────────────────────────────────────────────

def main() -> None:
    parser = argparse.ArgumentParser(description="Propose squads for an event's pending signups.")
    parser.add_argument("event_id", help="Event (quest) id")
    parser.add_argument("--db", type=Path, default=None,
                        help=f"Signup store path (default: {settings.db_path})")
    parser.add_argument("--snapshot", type=Path, default=None,
                        help="Read inputs from a JSON snapshot instead of the store")
    parser.add_argument("--squad-size", type=int, default=None,
                        help=f"Target squad size (default: {settings.default_squad_size})")
    parser.add_argument("--no-referrals", action="store_true",
                        help="Ignore referral clusters; group by compatibility only")
    parser.add_argument("--out", type=Path, default=None,
                        help="Write the JSON result here instead of stdout")
    args = parser.parse_args()

    if args.squad_size is not None and args.squad_size < 1:
        parser.error("--squad-size must be at least 1")

    t0 = time.time()
    source = args.snapshot or args.db or settings.db_path
    print(f"Loading pending signups for {args.event_id} from {source}...", file=sys.stderr, flush=True)
    try:
        result = run(
            args.event_id,
            db_path=args.db,
            snapshot=args.snapshot,
            squad_size=args.squad_size,
            prioritize_referrals=not args.no_referrals,
        )
    except FileNotFoundError as ex:
        print(f"ERROR {ex}", file=sys.stderr)
        sys.exit(1)

    print(
        f"{len(result['squads'])} squads, {len(result['unassigned_users'])} unassigned "
        f"of {result['total_pending']} pending in {round(time.time() - t0, 2)}s",
        file=sys.stderr, flush=True,
    )

    payload = json.dumps(result, indent=2)
    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(payload)
        print_summary(result)
        print(f"\nWritten → {args.out}", flush=True)
    else:
        print(payload)


if __name__ == "__main__":
    main()
