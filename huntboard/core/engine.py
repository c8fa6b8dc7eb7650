"""
Scoring engine - state transitions on teams and challenges

Every operation keeps the point accounting invariant:
  team.points == sum(player.personal_points) + sum(points of completed, enabled challenges)

Precondition failures never raise to the caller: they come back as a
rejected OperationResult and leave the store untouched.
"""
import logging

from huntboard.core.store import EntityStore
from huntboard.models import (
    Challenge, OperationResult, RejectionReason, Snapshot, Team
)


logger = logging.getLogger(__name__)


class OperationRejected(Exception):
    def __init__(self, reason: RejectionReason):
        super().__init__(reason.value)
        self.reason = reason


def _subtract_clamped(team: Team, amount: int) -> None:
    team.points = max(0, team.points - amount)


def _require_team(draft: Snapshot, team_id: str) -> Team:
    team = draft.find_team(team_id)
    if team is None:
        raise OperationRejected(RejectionReason.TEAM_NOT_FOUND)
    return team


def _require_challenge(draft: Snapshot, challenge_id: str) -> Challenge:
    challenge = draft.find_challenge(challenge_id)
    if challenge is None:
        raise OperationRejected(RejectionReason.CHALLENGE_NOT_FOUND)
    return challenge


class ScoringEngine:
    def __init__(self, store: EntityStore):
        self._store = store

    def _run(self, operation: str, mutate, *args) -> OperationResult:
        try:
            with self._store.transaction() as draft:
                mutate(draft, *args)
        except OperationRejected as exc:
            logger.info(f"⛔ {operation}{args} rejected: {exc.reason.value}")
            return OperationResult.rejected(exc.reason)
        logger.info(f"✅ {operation}{args} applied")
        return OperationResult.ok()

    # ==================== CHALLENGE COMPLETION ====================

    def toggle_completion(self, team_id: str, challenge_id: str) -> OperationResult:
        """
        Validate or un-validate a challenge for a team

        Exclusive (rare/secret) challenges are first-come: a team that is not
        the current winner cannot take one over.
        """
        return self._run("toggle_completion", self._toggle_completion, team_id, challenge_id)

    @staticmethod
    def _toggle_completion(draft: Snapshot, team_id: str, challenge_id: str) -> None:
        team = _require_team(draft, team_id)
        challenge = _require_challenge(draft, challenge_id)

        if challenge.disabled:
            raise OperationRejected(RejectionReason.CHALLENGE_DISABLED)

        is_winner = team_id in challenge.winners
        if challenge.type.is_exclusive and not is_winner and challenge.winners:
            raise OperationRejected(RejectionReason.EXCLUSIVE_TAKEN)

        if is_winner:
            challenge.winners.remove(team_id)
            if challenge_id in team.completed_challenges:
                team.completed_challenges.remove(challenge_id)
            _subtract_clamped(team, challenge.points)
        else:
            challenge.winners.append(team_id)
            if challenge_id not in team.completed_challenges:
                team.completed_challenges.append(challenge_id)
            team.points += challenge.points

    # ==================== DISABLE / ENABLE ====================

    def toggle_disabled(self, challenge_id: str) -> OperationResult:
        """
        Flip a challenge's disabled flag and retract or restore its reward

        The winners list is kept as-is so re-enabling restores exactly the
        teams that had completed the challenge.
        """
        return self._run("toggle_disabled", self._toggle_disabled, challenge_id)

    @staticmethod
    def _toggle_disabled(draft: Snapshot, challenge_id: str) -> None:
        challenge = _require_challenge(draft, challenge_id)
        was_disabled = challenge.disabled
        challenge.disabled = not was_disabled

        for team_id in challenge.winners:
            team = draft.find_team(team_id)
            if team is None:
                continue
            has_completed = challenge_id in team.completed_challenges
            if was_disabled and not has_completed:
                team.completed_challenges.append(challenge_id)
                team.points += challenge.points
            elif not was_disabled and has_completed:
                team.completed_challenges.remove(challenge_id)
                _subtract_clamped(team, challenge.points)

    # ==================== PERSONAL POINTS ====================

    def add_personal_points(self, team_id: str, player_id: str, amount: int) -> OperationResult:
        return self._run("add_personal_points", self._add_personal_points, team_id, player_id, amount)

    @staticmethod
    def _add_personal_points(draft: Snapshot, team_id: str, player_id: str, amount: int) -> None:
        team = _require_team(draft, team_id)
        player = team.find_player(player_id)
        if player is None:
            raise OperationRejected(RejectionReason.PLAYER_NOT_FOUND)
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise OperationRejected(RejectionReason.INVALID_AMOUNT)

        player.personal_points += amount
        team.points += amount

    # ==================== PLAYER TRANSFER ====================

    def swap_players(self, player_id: str, target_team_id: str, target_player_id: str) -> OperationResult:
        """
        Exchange two players between teams

        Each player takes the other's slot. Personal points follow the
        player; challenge credit stays with the team.
        """
        return self._run("swap_players", self._swap_players, player_id, target_team_id, target_player_id)

    @staticmethod
    def _swap_players(draft: Snapshot, player_id: str, target_team_id: str, target_player_id: str) -> None:
        source_team, source_idx = None, -1
        for team in draft.teams:
            idx = team.player_index(player_id)
            if idx >= 0:
                source_team, source_idx = team, idx
                break
        if source_team is None:
            raise OperationRejected(RejectionReason.PLAYER_NOT_FOUND)

        target_team = _require_team(draft, target_team_id)
        target_idx = target_team.player_index(target_player_id)
        if target_idx < 0:
            raise OperationRejected(RejectionReason.PLAYER_NOT_FOUND)
        if player_id == target_player_id:
            raise OperationRejected(RejectionReason.SAME_PLAYER)

        leaving = source_team.players[source_idx]
        arriving = target_team.players[target_idx]
        source_team.players[source_idx] = arriving
        target_team.players[target_idx] = leaving

        if source_team is not target_team:
            source_team.points += arriving.personal_points - leaving.personal_points
            target_team.points += leaving.personal_points - arriving.personal_points

    # ==================== RESET ====================

    def reset(self) -> OperationResult:
        """Reload teams and challenges from the seed"""
        snapshot = self._store.reload()
        logger.info(f"🔄 Reset: reloaded {len(snapshot.teams)} teams, {len(snapshot.challenges)} challenges")
        return OperationResult.ok()
