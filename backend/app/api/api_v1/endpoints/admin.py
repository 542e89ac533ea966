"""
Admin-only endpoints for match scoring and prediction maintenance.
"""

import logging

from app.api.api_v1.endpoints.matches import update_match_score
from app.core.auth import require_admin
from app.db.store import MatchStore, get_match_store
from app.schemas.match import (
    MatchScoreUpdate,
    ResetPredictionsResponse,
    ScoreUpdateResponse,
)
from app.services.rescoring import reset_incomplete_predictions
from fastapi import APIRouter, Depends, HTTPException

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/matches/{match_id}/score", response_model=ScoreUpdateResponse)
def admin_post_match_score(
    match_id: str,
    score_in: MatchScoreUpdate,
    _admin_id: str = Depends(require_admin),
    store: MatchStore = Depends(get_match_store),
):
    """Set a match's score and status, and update points for its predictions."""
    return update_match_score(match_id, score_in, store)


@router.post("/reset-incomplete-predictions", response_model=ResetPredictionsResponse)
def reset_predictions(
    _admin_id: str = Depends(require_admin),
    store: MatchStore = Depends(get_match_store),
):
    """
    Reset points to 0 for every prediction on a match that is not completed.

    Restores consistency if points were left behind on a match that was
    moved back out of the completed state.
    """
    try:
        matches_affected = reset_incomplete_predictions(store)
    except Exception:
        logger.exception("Error resetting predictions")
        raise HTTPException(status_code=500, detail="Failed to reset predictions")

    if not matches_affected:
        return ResetPredictionsResponse(message="No non-completed matches found")

    return ResetPredictionsResponse(
        message="Successfully reset predictions for non-completed matches",
        matches_affected=matches_affected,
    )
