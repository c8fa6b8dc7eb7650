"""Player-facing challenge lists"""
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from huntboard.models import Challenge, Team
from huntboard.utils import aligned_now


def is_visible(challenge: Challenge, now: Optional[datetime] = None) -> bool:
    if challenge.disabled:
        return False
    return challenge.available_at <= aligned_now(challenge.available_at, now)


def visible_challenges(challenges: Sequence[Challenge], now: Optional[datetime] = None) -> List[Challenge]:
    """Enabled challenges already available at ``now``, earliest first"""
    visible = [c for c in challenges if is_visible(c, now)]
    # naive timestamps are local time; astimezone() makes every key aware
    return sorted(visible, key=lambda c: c.available_at.astimezone())


def team_board(team: Team, challenges: Sequence[Challenge], now: Optional[datetime] = None) -> List[Dict]:
    board = []
    for challenge in visible_challenges(challenges, now):
        completed = challenge.id in team.completed_challenges
        taken = (
            challenge.type.is_exclusive
            and not completed
            and bool(challenge.winners)
        )
        row = challenge.to_wire()
        row["completed"] = completed
        row["taken"] = taken
        board.append(row)
    return board
