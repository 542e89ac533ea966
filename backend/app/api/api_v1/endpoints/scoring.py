"""
Scoring API endpoint to serve scoring configuration to the frontend.
"""

from app.services.scoring import get_scoring_rules
from fastapi import APIRouter

router = APIRouter()


@router.get("")
def get_scoring_config():
    """Get the current scoring configuration."""
    return get_scoring_rules()
