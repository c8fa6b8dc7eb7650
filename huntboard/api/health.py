"""
Health check and system status endpoints
"""
from fastapi import APIRouter, Depends

from huntboard.config import VERSION
from huntboard.api.deps import get_competition
from huntboard.core.competition import Competition


router = APIRouter(tags=["health"])


@router.get("/")
async def health_check(competition: Competition = Depends(get_competition)):
    """Health check endpoint"""
    snapshot = competition.snapshot()
    return {
        "status": "ok",
        "message": "Huntboard - Scavenger Hunt Scoring Server",
        "version": VERSION,
        "total_teams": len(snapshot.teams),
        "total_challenges": len(snapshot.challenges),
        "error_policy": competition.settings.error_policy.value,
    }
