from enum import Enum

from pydantic import BaseModel, Field

MULTIPLIER_MIN = 1
MULTIPLIER_MAX = 3


class MatchStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RescoreAction(str, Enum):
    """What a status change means for the points on a match's predictions."""

    RESCORE = "rescore"
    UNSCORE = "unscore"
    NOOP = "noop"


class MatchScoreUpdate(BaseModel):
    home_score: int = Field(..., ge=0)
    away_score: int = Field(..., ge=0)
    status: MatchStatus = Field(
        default=MatchStatus.COMPLETED,
        description="New match status, defaults to completed",
    )


class ScoreUpdateResponse(BaseModel):
    success: bool = True
    action: RescoreAction
    predictions_updated: int = 0


class ResetPredictionsResponse(BaseModel):
    success: bool = True
    message: str
    matches_affected: int = 0
