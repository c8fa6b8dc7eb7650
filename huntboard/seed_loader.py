"""
Seed data loader from JSON files
"""
import json
import logging
from pathlib import Path
from typing import List

from huntboard.models import Challenge, Snapshot, Team


logger = logging.getLogger(__name__)


def _read_json_list(path: Path, label: str) -> List[dict]:
    if not path.exists():
        raise FileNotFoundError(f"{label} file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{label} file {path} must contain a JSON array")
    return data


def validate_snapshot(snapshot: Snapshot) -> Snapshot:
    """
    Check identifiers and cross-references of a teams/challenges pair

    Raises:
        ValueError: On duplicate ids, dangling references, more than one
                    winner on an exclusive challenge, winners/completed
                    disagreement, or a cached team total that does not
                    match its players and challenges
    """
    team_ids = [t.id for t in snapshot.teams]
    if len(set(team_ids)) != len(team_ids):
        raise ValueError("Duplicate team ids in seed data")

    challenge_ids = [c.id for c in snapshot.challenges]
    if len(set(challenge_ids)) != len(challenge_ids):
        raise ValueError("Duplicate challenge ids in seed data")

    player_ids = [p.id for t in snapshot.teams for p in t.players]
    if len(set(player_ids)) != len(player_ids):
        raise ValueError("Player ids must be unique across all teams")

    teams_by_id = {t.id: t for t in snapshot.teams}
    challenges_by_id = {c.id: c for c in snapshot.challenges}

    for challenge in snapshot.challenges:
        if challenge.type.is_exclusive and len(challenge.winners) > 1:
            raise ValueError(
                f"Challenge {challenge.id}: {challenge.type.value} challenge has "
                f"{len(challenge.winners)} winners"
            )
        if len(set(challenge.winners)) != len(challenge.winners):
            raise ValueError(f"Challenge {challenge.id}: duplicate winners")
        for team_id in challenge.winners:
            team = teams_by_id.get(team_id)
            if team is None:
                raise ValueError(f"Challenge {challenge.id}: unknown winner {team_id}")
            if not challenge.disabled and challenge.id not in team.completed_challenges:
                raise ValueError(
                    f"Challenge {challenge.id}: winner {team_id} does not list it as completed"
                )

    for team in snapshot.teams:
        if len(set(team.completed_challenges)) != len(team.completed_challenges):
            raise ValueError(f"Team {team.id}: duplicate completed challenges")

        earned = 0
        for challenge_id in team.completed_challenges:
            challenge = challenges_by_id.get(challenge_id)
            if challenge is None:
                raise ValueError(f"Team {team.id}: unknown completed challenge {challenge_id}")
            if challenge.disabled:
                raise ValueError(f"Team {team.id}: disabled challenge {challenge_id} listed as completed")
            if team.id not in challenge.winners:
                raise ValueError(f"Team {team.id}: not a winner of completed challenge {challenge_id}")
            earned += challenge.points

        expected = team.personal_total + earned
        if team.points != expected:
            raise ValueError(f"Team {team.id}: points {team.points} != computed {expected}")

    return snapshot


def load_seed(teams_path: str, challenges_path: str) -> Snapshot:
    """
    Load seed teams and challenges from JSON files

    Both files hold a JSON array in the wire format, e.g. teams.json:
        [{"id": "red", "name": "Red", "color": "#e53935", "points": 0,
          "completedChallenges": [], "players": [...]}]

    Args:
        teams_path: Path to teams.json
        challenges_path: Path to challenges.json

    Returns:
        Validated Snapshot

    Raises:
        FileNotFoundError: If a file is missing
        ValueError: If the data is malformed or inconsistent
    """
    raw_teams = _read_json_list(Path(teams_path), "Teams")
    raw_challenges = _read_json_list(Path(challenges_path), "Challenges")

    snapshot = Snapshot(
        teams=[Team(**row) for row in raw_teams],
        challenges=[Challenge(**row) for row in raw_challenges],
    )
    validate_snapshot(snapshot)

    logger.info(
        f"✅ Loaded {len(snapshot.teams)} teams and {len(snapshot.challenges)} challenges "
        f"from {teams_path}, {challenges_path}"
    )
    return snapshot
