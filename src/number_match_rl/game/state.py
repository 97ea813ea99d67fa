from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union

from .blocks import Block
from .timer import ModeTimer


class GameMode(str, Enum):
    CLASSIC = "classic"  # a new row after every match
    TIME = "time"  # a new row whenever the countdown expires


class SessionStatus(str, Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAMEOVER = "gameover"


@dataclass
class MenuState:
    status: ClassVar[SessionStatus] = SessionStatus.MENU
    mode: ClassVar[Optional[GameMode]] = None


@dataclass
class ClassicPlay:
    paused: bool = False

    status: ClassVar[SessionStatus] = SessionStatus.PLAYING
    mode: ClassVar[GameMode] = GameMode.CLASSIC


@dataclass
class TimedPlay:
    timer: ModeTimer
    paused: bool = False

    status: ClassVar[SessionStatus] = SessionStatus.PLAYING
    mode: ClassVar[GameMode] = GameMode.TIME


@dataclass(frozen=True)
class GameOverState:
    mode: GameMode
    final_score: int

    status: ClassVar[SessionStatus] = SessionStatus.GAMEOVER


PlayState = Union[ClassicPlay, TimedPlay]
SessionState = Union[MenuState, ClassicPlay, TimedPlay, GameOverState]


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of everything a front end needs to draw one frame."""

    status: SessionStatus
    mode: Optional[GameMode]
    paused: bool
    score: int
    level: int
    match_count: int
    combo: int
    target: int
    current_sum: int
    time_left: Optional[int]
    blocks: Tuple[Block, ...]
