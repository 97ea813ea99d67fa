from __future__ import annotations

from enum import Enum


class TimerState(str, Enum):
    INACTIVE = "inactive"
    RUNNING = "running"
    PAUSED = "paused"


class ModeTimer:
    """Per-row countdown of time mode.

    The timer only counts; the game decides what an expiry means and which
    duration to restart from. Pausing freezes `time_left` as is.
    """

    def __init__(self, duration: int) -> None:
        self.time_left = int(duration)
        self.state = TimerState.INACTIVE

    @property
    def running(self) -> bool:
        return self.state is TimerState.RUNNING

    def start(self) -> None:
        self.state = TimerState.RUNNING

    def pause(self) -> None:
        if self.state is TimerState.RUNNING:
            self.state = TimerState.PAUSED

    def resume(self) -> None:
        if self.state is TimerState.PAUSED:
            self.state = TimerState.RUNNING

    def stop(self) -> None:
        self.state = TimerState.INACTIVE

    def tick(self) -> bool:
        """Advance one second; return True when the countdown expires.

        An expiring tick leaves `time_left` at 0 until `restart` is called.
        """
        if not self.running:
            return False
        if self.time_left <= 1:
            self.time_left = 0
            return True
        self.time_left -= 1
        return False

    def restart(self, duration: int) -> None:
        self.time_left = int(duration)
