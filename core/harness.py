"""Glue between a running GameSession and the ProgressStore."""

import logging

from .session import GameSession, INSTRUCTIONS, COUNTDOWN, COMPLETE

logger = logging.getLogger(__name__)


class SessionRecorder:
    """Records a session's result exactly once per play-through.

    Hosts call sync() after every state change. The recorder re-arms when the
    session returns to instructions or countdown, so a restart records again.
    """

    def __init__(self, game: dict, store, session: GameSession):
        self.game = game
        self.store = store
        self.session = session
        self.recorded = False
        self.last_result = None
        self.last_unlocked = []

    def sync(self):
        """Returns (stored_result, newly_unlocked) when a recording happened, else None."""
        status = self.session.status
        if status in (INSTRUCTIONS, COUNTDOWN):
            self.recorded = False
            return None
        if status != COMPLETE or self.recorded:
            return None

        self.recorded = True
        payload = self.session.build_result(self.game, self.store.current_timestamp())
        stored, unlocked = self.store.record_game_result(payload)
        if stored is None:
            logger.warning(f"Result for {self.game['id']} was not recorded")
            return None
        self.store.mark_today_game_complete(self.game['id'], stored)
        self.last_result = stored
        self.last_unlocked = unlocked
        return stored, unlocked
