"""
Leaderboard service - Assemble and format leaderboard data
"""
from typing import Dict

from huntboard.core.competition import Competition


def get_leaderboard_data(competition: Competition) -> Dict:
    """
    Get leaderboard data for display

    In suspense mode the order is the fixed shuffled one and totals,
    shares and consistency flags are masked.

    Returns:
        Formatted leaderboard data
    """
    session = competition.get_session_state()
    ranking = competition.ranking(session)
    masked = session.suspense_mode

    leader_total = ranking[0].total if ranking else 0
    teams = []
    for row in ranking:
        share = 0.0
        if not masked and leader_total > 0:
            share = round(min(row.total / leader_total, 1.0) * 100, 1)
        teams.append({
            "id": row.id,
            "name": row.name,
            "color": row.color,
            "rank": row.rank,
            "total": None if masked else row.total,
            "share": share,
            "consistent": None if masked else row.consistent,
        })

    return {
        "suspenseMode": masked,
        "isPaused": competition.is_paused(),
        "teams": teams,
        "total_teams": len(teams),
    }
