from typing import List

from app.db.store import MatchStore, get_match_store
from app.schemas.ranking import RankingEntry
from app.services.rankings import get_tournament_rankings
from fastapi import APIRouter, Depends

router = APIRouter()


@router.get("/{tournament_id}/rankings", response_model=List[RankingEntry])
def get_rankings(tournament_id: str, store: MatchStore = Depends(get_match_store)):
    """Get the current rankings for a tournament."""
    return get_tournament_rankings(store, tournament_id)
