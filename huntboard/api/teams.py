"""
Team endpoints: listing, personal points and player swaps
"""
from datetime import datetime

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from huntboard.api.deps import get_competition, mutation_response, require_str
from huntboard.core.competition import Competition
from huntboard.services.challenge_board import team_board


router = APIRouter(prefix="/api", tags=["teams"])


def _teams_payload(competition: Competition):
    return [t.to_wire() for t in competition.get_teams()]


@router.get("/teams")
async def list_teams(competition: Competition = Depends(get_competition)):
    return _teams_payload(competition)


@router.get("/teams/{team_id}/board")
async def get_team_board(team_id: str, competition: Competition = Depends(get_competition)):
    """Challenges currently visible to a team, with completed / taken flags"""
    snapshot = competition.snapshot()
    team = snapshot.find_team(team_id)
    if team is None:
        raise HTTPException(status_code=404, detail=f"Team {team_id} not found")
    return {
        "team_id": team_id,
        "isPaused": competition.is_paused(),
        "challenges": team_board(team, snapshot.challenges, datetime.now().astimezone()),
    }


@router.post("/addPersonalPoints")
async def add_personal_points(
    payload: dict,
    background_tasks: BackgroundTasks,
    competition: Competition = Depends(get_competition),
):
    """
    Admin: grant personal points to a player

    Request:
        {"teamId": "red", "playerId": "p1", "amount": 5}
    """
    team_id = require_str(payload, "teamId", "team_id")
    player_id = require_str(payload, "playerId", "player_id")
    amount = payload.get("amount")
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise HTTPException(status_code=400, detail="amount must be an integer")

    result = competition.add_personal_points(team_id, player_id, amount)
    return mutation_response(competition, result, background_tasks, teams=_teams_payload(competition))


@router.post("/swapPlayers")
async def swap_players(
    payload: dict,
    background_tasks: BackgroundTasks,
    competition: Competition = Depends(get_competition),
):
    """
    Admin: exchange two players between teams

    Request:
        {"playerId": "p1", "targetTeamId": "blue", "targetPlayerId": "p7"}
    """
    player_id = require_str(payload, "playerId", "player_id")
    target_team_id = require_str(payload, "targetTeamId", "target_team_id")
    target_player_id = require_str(payload, "targetPlayerId", "target_player_id")

    result = competition.swap_players(player_id, target_team_id, target_player_id)
    return mutation_response(competition, result, background_tasks, teams=_teams_payload(competition))
