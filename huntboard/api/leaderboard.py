"""
Leaderboard endpoints
"""
from fastapi import APIRouter, Depends

from huntboard.api.deps import get_competition
from huntboard.core.competition import Competition
from huntboard.services.leaderboard import get_leaderboard_data


router = APIRouter(prefix="/api", tags=["leaderboard"])


@router.get("/leaderboard")
async def leaderboard(competition: Competition = Depends(get_competition)):
    """
    Get the ranking for display

    Returns teams ordered by total points (descending), or by the fixed
    shuffled order while suspense mode is on, in which case totals are
    masked (null).
    """
    return get_leaderboard_data(competition)
