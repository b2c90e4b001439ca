"""Pacing of automated turns.

The session itself never waits. A pacer asks a scheduler to run the next
automated turn after a delay, in the style of a GUI toolkit's
``after(ms, callback)``. The session state does not change while a turn is
pending.
"""

import logging
import time
from collections import deque
from typing import Callable

from racko.models.game_state import TurnPhase

from .session import GameSession

logger = logging.getLogger(__name__)

ScheduleFn = Callable[[float, Callable[[], None]], None]


class SleepScheduler:
    """Blocking scheduler for console play.

    schedule() only queues the callback; run() sleeps and calls queued
    callbacks in order until none are left.
    """

    def __init__(self, sleep: Callable[[float], None] = time.sleep):
        self._sleep = sleep
        self._pending: deque[tuple[float, Callable[[], None]]] = deque()

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        self._pending.append((delay, callback))

    def run(self) -> int:
        """Run queued callbacks.

        Returns:
            Number of callbacks run
        """
        count = 0
        while self._pending:
            delay, callback = self._pending.popleft()
            if delay > 0:
                self._sleep(delay)
            callback()
            count += 1
        return count

    @property
    def pending(self) -> int:
        return len(self._pending)


class TurnPacer:
    """Schedules automated turns one after another."""

    def __init__(self, session: GameSession, schedule: ScheduleFn):
        """Initialize pacer.

        Args:
            session: Session whose automated turns are played
            schedule: Function taking (delay_seconds, callback)
        """
        self.session = session
        self._schedule = schedule
        self._scheduled = False

    def resume(self, delay: float | None = None) -> bool:
        """Schedule the current player's turn if it is automated.

        Args:
            delay: Seconds to wait (config.ai_turn_delay if not provided)

        Returns:
            True if a turn was scheduled
        """
        if self._scheduled or not self._automated_turn_due():
            return False

        if delay is None:
            delay = self.session.config.ai_turn_delay

        game_number = self.session.state.game_number
        turn_number = self.session.state.turn_number
        self._scheduled = True
        self._schedule(delay, lambda: self._play(game_number, turn_number))
        return True

    def _automated_turn_due(self) -> bool:
        player = self.session.current_player
        return (
            self.session.phase == TurnPhase.AWAITING_DRAW
            and player is not None
            and player.is_automated
        )

    def _play(self, game_number: int, turn_number: int) -> None:
        self._scheduled = False
        state = self.session.state
        if state.game_number != game_number or state.turn_number != turn_number:
            logger.debug(f"Skipping stale turn {game_number}/{turn_number}")
            return
        if not self._automated_turn_due():
            return

        self.session.play_automated_turn()
        self.resume()
