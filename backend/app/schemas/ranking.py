from typing import Optional

from pydantic import BaseModel


class RankingEntry(BaseModel):
    rank: int
    user_id: str
    screen_name: Optional[str] = None
    avatar_url: Optional[str] = None
    total_points: int
    predictions_count: int
