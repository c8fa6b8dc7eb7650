"""
Ranking projector - derive the leaderboard from current state

Read-only. Totals are recomputed from players and challenges instead of
trusting Team.points, so a drift in the cached value shows up as
``consistent=False``.
"""
from typing import Dict, List, Sequence

from huntboard.models import Challenge, RankedTeam, SessionState, Team


def compute_total(team: Team, challenges: Sequence[Challenge]) -> int:
    """Personal points + points of the enabled challenges in completed_challenges"""
    by_id = {c.id: c for c in challenges}
    earned = 0
    for challenge_id in team.completed_challenges:
        challenge = by_id.get(challenge_id)
        if challenge is None or challenge.disabled:
            continue
        earned += challenge.points
    return team.personal_total + earned


def has_valid_suspense_order(teams: Sequence[Team], session: SessionState) -> bool:
    order = session.suspense_order
    return (
        session.suspense_mode
        and len(order) == len(teams)
        and set(order) == {t.id for t in teams}
    )


def project_ranking(
    teams: Sequence[Team],
    challenges: Sequence[Challenge],
    session: SessionState,
) -> List[RankedTeam]:
    """
    Build the ordered leaderboard

    Sorted by recomputed total (desc), ties keep input order. In suspense
    mode with a full permutation of the current teams, the stored suspense
    order is used instead.
    """
    totals: Dict[str, int] = {t.id: compute_total(t, challenges) for t in teams}

    if has_valid_suspense_order(teams, session):
        by_id = {t.id: t for t in teams}
        ordered = [by_id[team_id] for team_id in session.suspense_order]
    else:
        ordered = sorted(teams, key=lambda t: totals[t.id], reverse=True)

    return [
        RankedTeam(
            id=team.id,
            name=team.name,
            color=team.color,
            rank=idx + 1,
            total=totals[team.id],
            cached_points=team.points,
            consistent=totals[team.id] == team.points,
        )
        for idx, team in enumerate(ordered)
    ]
