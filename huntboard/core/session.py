"""
Competition-wide session state: suspense mode and game pause

Independent of per-team data. The "paused" predicate is derived from
pause_until and the current time on every call, never stored.
"""
import logging
import random
import threading
from datetime import datetime
from typing import Iterable, Optional

from huntboard.models import SessionState
from huntboard.utils import aligned_now


logger = logging.getLogger(__name__)


class SessionManager:
    def __init__(self, rng: Optional[random.Random] = None, lock: Optional[threading.RLock] = None):
        self._rng = rng or random.Random()
        self._lock = lock or threading.RLock()
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    def _publish(self, **changes) -> SessionState:
        with self._lock:
            self._state = self._state.model_copy(update=changes)
            return self._state

    def set_suspense(self, active: bool, team_ids: Iterable[str]) -> SessionState:
        """
        Turn suspense mode on or off

        Turning it on shuffles the given team ids into a fixed display order,
        re-rolled on every activation.
        """
        if not active:
            logger.info("👁️ Suspense mode off")
            return self._publish(suspense_mode=False, suspense_order=[])

        order = list(team_ids)
        self._rng.shuffle(order)
        logger.info(f"🙈 Suspense mode on, order: {order}")
        return self._publish(suspense_mode=True, suspense_order=order)

    def start_pause(self, resume_at: datetime) -> SessionState:
        """Pause gameplay until resume_at (a past instant means not paused)"""
        logger.info(f"⏸️ Game paused until {resume_at.isoformat()}")
        return self._publish(pause_until=resume_at)

    def cancel_pause(self) -> SessionState:
        logger.info("▶️ Pause cancelled")
        return self._publish(pause_until=None)

    def clear(self) -> SessionState:
        with self._lock:
            self._state = SessionState()
            return self._state

    def is_paused(self, now: Optional[datetime] = None) -> bool:
        pause_until = self._state.pause_until
        if pause_until is None:
            return False
        return pause_until > aligned_now(pause_until, now)
