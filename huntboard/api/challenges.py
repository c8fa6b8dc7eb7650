"""
Challenge endpoints: listing, validation and disabling
"""
from datetime import datetime

from fastapi import APIRouter, BackgroundTasks, Depends

from huntboard.api.deps import get_competition, mutation_response, require_str
from huntboard.core.competition import Competition
from huntboard.services.challenge_board import visible_challenges


router = APIRouter(prefix="/api", tags=["challenges"])


def _state_payload(competition: Competition) -> dict:
    # one snapshot so teams and challenges always agree
    snapshot = competition.snapshot()
    return {
        "teams": [t.to_wire() for t in snapshot.teams],
        "challenges": [c.to_wire() for c in snapshot.challenges],
    }


@router.get("/challenges")
async def list_challenges(competition: Competition = Depends(get_competition)):
    return [c.to_wire() for c in competition.get_challenges()]


@router.get("/challenges/visible")
async def list_visible_challenges(competition: Competition = Depends(get_competition)):
    """Challenges players can see right now (available and not disabled)"""
    now = datetime.now().astimezone()
    return [c.to_wire() for c in visible_challenges(competition.get_challenges(), now)]


@router.post("/validate")
async def validate_challenge(
    payload: dict,
    background_tasks: BackgroundTasks,
    competition: Competition = Depends(get_competition),
):
    """
    Admin: validate or un-validate a challenge for a team

    Request:
        {"teamId": "red", "challengeId": "c1"}
    """
    team_id = require_str(payload, "teamId", "team_id")
    challenge_id = require_str(payload, "challengeId", "challenge_id")

    result = competition.toggle_completion(team_id, challenge_id)
    return mutation_response(competition, result, background_tasks, **_state_payload(competition))


@router.post("/toggleDisabled")
async def toggle_disabled(
    payload: dict,
    background_tasks: BackgroundTasks,
    competition: Competition = Depends(get_competition),
):
    """
    Admin: disable or re-enable a challenge

    Request:
        {"challengeId": "c1"}
    """
    challenge_id = require_str(payload, "challengeId", "challenge_id")

    result = competition.toggle_disabled(challenge_id)
    return mutation_response(competition, result, background_tasks, **_state_payload(competition))
