"""
Competition - single owner of the store, scoring engine and session state
"""
import logging
import random
from datetime import datetime
from typing import List, Optional

from huntboard.core.engine import ScoringEngine
from huntboard.core.ranking import project_ranking
from huntboard.core.session import SessionManager
from huntboard.core.store import EntityStore, SeedLoader
from huntboard.models import (
    Challenge, OperationResult, RankedTeam, SessionState, Settings, Snapshot, Team
)
from huntboard.services.persistence import SnapshotWriter


logger = logging.getLogger(__name__)


class Competition:
    """
    Facade consumed by the transport layer

    Build one per process (see huntboard.main) and pass it around; there is
    no module-level instance.
    """

    def __init__(
        self,
        seed_loader: SeedLoader,
        settings: Optional[Settings] = None,
        initial: Optional[Snapshot] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or Settings()
        self.store = EntityStore(seed_loader, initial=initial)
        self.engine = ScoringEngine(self.store)
        self.session = SessionManager(rng=rng, lock=self.store.lock)
        self.snapshot_writer = (
            SnapshotWriter(self.settings.snapshot_path) if self.settings.snapshot_path else None
        )

    # ==================== QUERIES ====================

    def snapshot(self) -> Snapshot:
        return self.store.snapshot

    def get_teams(self) -> List[Team]:
        return self.store.snapshot.teams

    def get_challenges(self) -> List[Challenge]:
        return self.store.snapshot.challenges

    def get_session_state(self) -> SessionState:
        return self.session.state

    def is_paused(self, now: Optional[datetime] = None) -> bool:
        return self.session.is_paused(now)

    def ranking(self, session: Optional[SessionState] = None) -> List[RankedTeam]:
        """Leaderboard for the current snapshot, under ``session`` if given"""
        snapshot = self.store.snapshot
        if session is None:
            session = self.session.state
        return project_ranking(snapshot.teams, snapshot.challenges, session)

    # ==================== SCORING ====================

    def toggle_completion(self, team_id: str, challenge_id: str) -> OperationResult:
        return self.engine.toggle_completion(team_id, challenge_id)

    def toggle_disabled(self, challenge_id: str) -> OperationResult:
        return self.engine.toggle_disabled(challenge_id)

    def add_personal_points(self, team_id: str, player_id: str, amount: int) -> OperationResult:
        return self.engine.add_personal_points(team_id, player_id, amount)

    def swap_players(self, player_id: str, target_team_id: str, target_player_id: str) -> OperationResult:
        return self.engine.swap_players(player_id, target_team_id, target_player_id)

    def reset(self) -> OperationResult:
        """Reload the seed; session flags survive unless reset_clears_session is set"""
        with self.store.lock:
            result = self.engine.reset()
            if self.settings.reset_clears_session:
                self.session.clear()
                logger.info("🔄 Reset also cleared suspense and pause")
        return result

    # ==================== SESSION ====================

    def set_suspense(self, active: bool) -> SessionState:
        with self.store.lock:
            team_ids = [t.id for t in self.store.snapshot.teams]
            return self.session.set_suspense(active, team_ids)

    def start_pause(self, resume_at: datetime) -> SessionState:
        return self.session.start_pause(resume_at)

    def cancel_pause(self) -> SessionState:
        return self.session.cancel_pause()
