import logging
from typing import List

from app.db.store import MatchStore
from app.schemas.ranking import RankingEntry

logger = logging.getLogger(__name__)


def build_rankings(rows: List[dict], participants: List[dict]) -> List[RankingEntry]:
    """
    Aggregate per-prediction points into a ranked table.

    Only predictions made by `participants` (active tournament participants)
    count. Users with equal totals share a rank and the next rank is
    skipped (1, 1, 3), the same as SQL RANK(). Ties are listed by user id.
    """
    profiles = {str(p["user_id"]): p for p in participants}
    totals: dict[str, int] = {}
    counts: dict[str, int] = {}

    for row in rows:
        user_id = str(row["user_id"])
        if user_id not in profiles:
            continue
        totals[user_id] = totals.get(user_id, 0) + (row.get("points_earned") or 0)
        counts[user_id] = counts.get(user_id, 0) + 1

    ordered = sorted(totals, key=lambda user_id: (-totals[user_id], user_id))

    rankings = []
    previous_total = None
    rank = 0
    for position, user_id in enumerate(ordered, start=1):
        if totals[user_id] != previous_total:
            rank = position
            previous_total = totals[user_id]

        rankings.append(
            RankingEntry(
                rank=rank,
                user_id=user_id,
                screen_name=profiles[user_id].get("screen_name"),
                avatar_url=profiles[user_id].get("avatar_url"),
                total_points=totals[user_id],
                predictions_count=counts[user_id],
            )
        )

    return rankings


def get_tournament_rankings(store: MatchStore, tournament_id: str) -> List[RankingEntry]:
    """Calculate the current rankings for a tournament from stored prediction points."""
    participants = store.list_active_participants(tournament_id)
    rows = store.list_tournament_points(tournament_id)
    rankings = build_rankings(rows, participants)
    logger.debug(f"Computed {len(rankings)} ranking entries for tournament {tournament_id}")
    return rankings
