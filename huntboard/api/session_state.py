"""
Global state endpoints: suspense mode and game pause
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from huntboard.api.deps import get_competition
from huntboard.core.competition import Competition
from huntboard.utils import parse_timestamp


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["session"])


def _pause_payload(competition: Competition) -> dict:
    pause_until = competition.get_session_state().pause_until
    return {
        "success": True,
        "pauseUntil": pause_until.isoformat() if pause_until else None,
        "isPaused": competition.is_paused(),
    }


@router.get("/state")
async def get_state(competition: Competition = Depends(get_competition)):
    """Current suspense and pause state"""
    payload = competition.get_session_state().to_wire()
    payload["isPaused"] = competition.is_paused()
    return payload


@router.post("/setSuspense")
async def set_suspense(payload: dict, competition: Competition = Depends(get_competition)):
    """
    Admin: hide or reveal the ranking

    Request:
        {"active": true}
    """
    active = payload.get("active")
    if not isinstance(active, bool):
        raise HTTPException(status_code=400, detail="active must be a boolean")

    state = competition.set_suspense(active)
    return {"success": True, "suspenseMode": state.suspense_mode}


@router.post("/setPause")
async def set_pause(payload: dict, competition: Competition = Depends(get_competition)):
    """
    Admin: start or cancel a pause

    Request:
        {"resumeAt": "2024-06-01T14:00:00"}   # null or "" cancels the pause
    """
    resume_at = payload.get("resumeAt", payload.get("resume_at"))

    if resume_at is None or (isinstance(resume_at, str) and not resume_at.strip()):
        competition.cancel_pause()
        return _pause_payload(competition)

    if not isinstance(resume_at, str):
        raise HTTPException(status_code=400, detail="resumeAt must be an ISO-8601 string")
    try:
        resume_ts = parse_timestamp(resume_at)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid resumeAt: {resume_at}") from exc

    competition.start_pause(resume_ts)
    return _pause_payload(competition)


@router.post("/cancelPause")
async def cancel_pause(competition: Competition = Depends(get_competition)):
    competition.cancel_pause()
    return _pause_payload(competition)
