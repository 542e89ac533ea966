# Schemas package
from app.schemas.match import (
    MULTIPLIER_MAX,
    MULTIPLIER_MIN,
    MatchScoreUpdate,
    MatchStatus,
    RescoreAction,
    ResetPredictionsResponse,
    ScoreUpdateResponse,
)
from app.schemas.ranking import RankingEntry

__all__ = [
    "MULTIPLIER_MAX",
    "MULTIPLIER_MIN",
    "MatchScoreUpdate",
    "MatchStatus",
    "RescoreAction",
    "ResetPredictionsResponse",
    "ScoreUpdateResponse",
    "RankingEntry",
]
