from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import INTERSTITIAL_COOLDOWN_SECONDS, MAX_INTERSTITIALS_PER_SESSION

logger = logging.getLogger(__name__)


class AdSession:
    """Ad/consent state for one app session.

    Created by the container at startup and passed to whoever needs to gate
    an interstitial. Attendance and aggregation code only ever see it through
    `PostSaveGate.allow_post_save_effect()`.
    """

    def __init__(
        self,
        *,
        cooldown_seconds: int = INTERSTITIAL_COOLDOWN_SECONDS,
        max_per_session: int = MAX_INTERSTITIALS_PER_SESSION,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._cooldown_seconds = int(cooldown_seconds)
        self._max_per_session = int(max_per_session)
        self._clock = clock or now_local
        self._lock = threading.Lock()

        self.consent_granted = False
        self.ads_initialized = False
        self.shown_count = 0
        self.last_shown_at: Optional[datetime] = None

    def grant_consent(self) -> None:
        self.consent_granted = True
        logger.debug("ads enabled")

    def revoke_consent(self) -> None:
        self.consent_granted = False
        logger.debug("ads disabled")

    def mark_initialized(self) -> None:
        self.ads_initialized = True

    def can_show_interstitial(self, now: Optional[datetime] = None) -> bool:
        now = now or self._clock()
        if not (self.consent_granted and self.ads_initialized):
            return False
        if self.shown_count >= self._max_per_session:
            return False
        if self.last_shown_at is not None:
            elapsed = (now - self.last_shown_at).total_seconds()
            if elapsed < self._cooldown_seconds:
                return False
        return True

    def allow_post_save_effect(self, now: Optional[datetime] = None) -> bool:
        """Check the frequency caps and, if allowed, record the show."""
        now = now or self._clock()
        with self._lock:
            if not self.can_show_interstitial(now):
                logger.debug("interstitial skipped (count=%d)", self.shown_count)
                return False

            self.last_shown_at = now
            self.shown_count += 1
            count = self.shown_count
        logger.debug("showing interstitial (count=%d)", count)
        return True
