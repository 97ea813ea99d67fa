from __future__ import annotations

import logging
import threading
from typing import Optional

from .core import NumberMatchGame
from .timer import TimerState


logger = logging.getLogger(__name__)


class CountdownClock:
    """Real-time driver calling `NumberMatchGame.tick` once per `interval` seconds.

    The clock follows the game's countdown: it starts a worker thread when the
    timer starts running and cancels it when the timer is paused or stopped.
    Each worker checks its own cancel flag under the game lock before ticking,
    so no tick lands after a pause, a game over or a mode change.
    """

    def __init__(self, game: NumberMatchGame, interval: float = 1.0) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.game = game
        self.interval = float(interval)
        self._guard = threading.Lock()
        self._cancel: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        with self._guard:
            return self._cancel is not None and not self._cancel.is_set()

    def attach(self) -> None:
        self.game.add_timer_listener(self._on_timer_state)
        if self.game.timer_state is TimerState.RUNNING:
            self.start()

    def detach(self) -> None:
        self.game.remove_timer_listener(self._on_timer_state)
        self.stop()

    def close(self, timeout: Optional[float] = None) -> None:
        """Detach and wait for the worker to exit. Must not be called while holding the game lock."""
        self.detach()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def start(self) -> None:
        with self._guard:
            if self._cancel is not None and not self._cancel.is_set():
                return
            cancel = threading.Event()
            self._cancel = cancel
            self._thread = threading.Thread(
                target=self._run, args=(cancel,), name="countdown-clock", daemon=True
            )
            self._thread.start()
        logger.debug("Countdown clock started")

    def stop(self) -> None:
        with self._guard:
            if self._cancel is None:
                return
            self._cancel.set()
            self._cancel = None
        logger.debug("Countdown clock stopped")

    def _on_timer_state(self, state: TimerState) -> None:
        if state is TimerState.RUNNING:
            self.start()
        else:
            self.stop()

    def _run(self, cancel: threading.Event) -> None:
        while not cancel.wait(self.interval):
            with self.game.lock:
                if cancel.is_set():
                    break
                self.game.tick()
