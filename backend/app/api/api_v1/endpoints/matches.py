import logging

from app.core.auth import require_admin
from app.db.store import MatchNotFoundError, MatchStore, get_match_store
from app.schemas.match import MatchScoreUpdate, ScoreUpdateResponse
from app.services.rescoring import score_match
from fastapi import APIRouter, Depends, HTTPException

logger = logging.getLogger(__name__)

router = APIRouter()


def update_match_score(
    match_id: str, score_in: MatchScoreUpdate, store: MatchStore
) -> ScoreUpdateResponse:
    """Record a result and rescore predictions, translating failures to HTTP errors."""
    try:
        outcome = score_match(
            store,
            match_id,
            home_score=score_in.home_score,
            away_score=score_in.away_score,
            status=score_in.status,
        )
    except MatchNotFoundError:
        raise HTTPException(status_code=404, detail="Match not found")
    except Exception:
        logger.exception(f"Error updating match score for match {match_id}")
        raise HTTPException(status_code=500, detail="Failed to update match score")

    return ScoreUpdateResponse(
        action=outcome.action,
        predictions_updated=outcome.predictions_updated,
    )


@router.post("/{match_id}/score", response_model=ScoreUpdateResponse)
def post_match_score(
    match_id: str,
    score_in: MatchScoreUpdate,
    _admin_id: str = Depends(require_admin),
    store: MatchStore = Depends(get_match_store),
):
    """Set a match's score and status, and update points for its predictions."""
    return update_match_score(match_id, score_in, store)
