"""
Rescoring of predictions when a match result or status changes.

Every time a match is scored, the points_earned of its predictions are
recomputed from scratch (never incremented), so running the same update
twice leaves the same values behind. Rankings are derived from these
stored points and are not touched here.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from app.db.store import MatchStore
from app.schemas.match import MatchStatus, RescoreAction
from app.services.scoring import calculate_points

logger = logging.getLogger(__name__)

S = MatchStatus

# (previous status, new status) -> action on the match's predictions
STATUS_TRANSITIONS = {
    (S.SCHEDULED, S.SCHEDULED): RescoreAction.NOOP,
    (S.SCHEDULED, S.IN_PROGRESS): RescoreAction.NOOP,
    (S.SCHEDULED, S.COMPLETED): RescoreAction.RESCORE,
    (S.SCHEDULED, S.CANCELLED): RescoreAction.NOOP,
    (S.IN_PROGRESS, S.SCHEDULED): RescoreAction.NOOP,
    (S.IN_PROGRESS, S.IN_PROGRESS): RescoreAction.NOOP,
    (S.IN_PROGRESS, S.COMPLETED): RescoreAction.RESCORE,
    (S.IN_PROGRESS, S.CANCELLED): RescoreAction.NOOP,
    # Re-saving a completed match recomputes, so a final score can be corrected
    (S.COMPLETED, S.COMPLETED): RescoreAction.RESCORE,
    (S.COMPLETED, S.SCHEDULED): RescoreAction.UNSCORE,
    (S.COMPLETED, S.IN_PROGRESS): RescoreAction.UNSCORE,
    (S.COMPLETED, S.CANCELLED): RescoreAction.UNSCORE,
    (S.CANCELLED, S.SCHEDULED): RescoreAction.NOOP,
    (S.CANCELLED, S.IN_PROGRESS): RescoreAction.NOOP,
    (S.CANCELLED, S.COMPLETED): RescoreAction.RESCORE,
    (S.CANCELLED, S.CANCELLED): RescoreAction.NOOP,
}


@dataclass(frozen=True)
class MatchResult:
    """Snapshot of a match update, shared by every prediction in one rescoring run."""

    previous_status: Optional[MatchStatus]
    new_status: MatchStatus
    home_score: int
    away_score: int
    multiplier: int = 1

    @property
    def action(self) -> RescoreAction:
        return resolve_action(self.previous_status, self.new_status)


@dataclass(frozen=True)
class RescoreOutcome:
    action: RescoreAction
    predictions_updated: int


def parse_status(value: Optional[str]) -> Optional[MatchStatus]:
    """Convert a stored status string, None for missing or unknown values."""
    if value is None:
        return None
    try:
        return MatchStatus(value)
    except ValueError:
        logger.warning(f"Unknown match status {value!r}, treating as not completed")
        return None


def resolve_action(
    previous_status: Optional[MatchStatus], new_status: MatchStatus
) -> RescoreAction:
    """Look up what a status change does to prediction points.

    An unknown previous status behaves like "scheduled": it was never completed.
    """
    return STATUS_TRANSITIONS[(previous_status or S.SCHEDULED, new_status)]


def points_for_prediction(prediction: dict, result: MatchResult) -> Optional[int]:
    """Get the new points_earned for a prediction, or None if it must not be written."""
    action = result.action

    if action == RescoreAction.UNSCORE:
        return 0

    if action == RescoreAction.RESCORE:
        return calculate_points(
            prediction["predicted_home_score"],
            prediction["predicted_away_score"],
            result.home_score,
            result.away_score,
            result.multiplier,
        )

    return None


def rescore_predictions(store: MatchStore, match_id: str, result: MatchResult) -> int:
    """
    Apply a match result to every prediction on the match.

    Returns the number of predictions written. Persistence errors are raised
    as soon as they happen; predictions already written keep their new value.
    """
    if result.action == RescoreAction.NOOP:
        previous = result.previous_status.value if result.previous_status else None
        logger.info(
            f"Match {match_id}: {previous} -> {result.new_status.value}, "
            "no prediction updates"
        )
        return 0

    predictions = store.list_predictions(match_id)

    updated = 0
    for prediction in predictions:
        points = points_for_prediction(prediction, result)
        if points is None:
            continue
        store.set_prediction_points(prediction["id"], points)
        updated += 1

    logger.info(
        f"Match {match_id}: {result.action.value} applied to {updated} predictions"
    )
    return updated


def score_match(
    store: MatchStore,
    match_id: str,
    home_score: int,
    away_score: int,
    status: Optional[MatchStatus] = None,
) -> RescoreOutcome:
    """
    Record a match result and rescore its predictions.

    Args:
        store: Persistence layer
        match_id: ID of the match
        home_score: Final (or current) home score
        away_score: Final (or current) away score
        status: New match status, defaults to completed

    Raises:
        MatchNotFoundError: If the match does not exist. Nothing is written.
    """
    match = store.get_match(match_id)

    new_status = MatchStatus(status) if status else MatchStatus.COMPLETED
    result = MatchResult(
        previous_status=parse_status(match.get("status")),
        new_status=new_status,
        home_score=home_score,
        away_score=away_score,
        multiplier=int(match.get("multiplier") or 1),
    )

    store.update_match_result(
        match_id,
        home_score=home_score,
        away_score=away_score,
        status=new_status.value,
        updated_at=datetime.now(timezone.utc).isoformat(),
    )

    updated = rescore_predictions(store, match_id, result)
    return RescoreOutcome(action=result.action, predictions_updated=updated)


def reset_incomplete_predictions(store: MatchStore) -> int:
    """Zero the points of every prediction on a match that is not completed.

    Returns the number of matches affected.
    """
    match_ids = store.list_match_ids(exclude_status=MatchStatus.COMPLETED.value)

    if not match_ids:
        logger.info("No non-completed matches found")
        return 0

    store.reset_points_for_matches(match_ids)
    logger.info(f"Reset prediction points for {len(match_ids)} non-completed matches")
    return len(match_ids)
