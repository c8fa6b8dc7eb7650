"""
Admin endpoints for competition maintenance
"""
from fastapi import APIRouter, BackgroundTasks, Depends
import logging

from huntboard.api.deps import get_competition, schedule_snapshot
from huntboard.core.competition import Competition


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["admin"])


@router.api_route("/reset", methods=["GET", "POST"])
async def reset_competition(
    background_tasks: BackgroundTasks,
    competition: Competition = Depends(get_competition),
):
    """
    Reload teams and challenges from the seed files

    Suspense and pause survive the reset unless reset_clears_session is
    enabled in the settings.
    """
    competition.reset()
    schedule_snapshot(competition, background_tasks)

    return {
        "success": True,
        "sessionCleared": competition.settings.reset_clears_session,
        "message": "Teams and challenges reloaded from seed"
    }
