"""Game module for Number Match RL.

Exports the headless game engine and supporting classes:
- Block / NumberSource: numbered blocks and the injectable random provider
- BlockGrid: ordered block storage, row growth and overflow detection
- ScoringRules / ProgressTracker: points, combo, level progression
- ModeTimer: time-mode countdown
- NumberMatchGame: session control, selection evaluation and growth
- CountdownClock: background driver for the countdown
"""

from .blocks import Block, NumberSource
from .grid import BlockGrid, RowResult
from .rules import ScoringRules
from .progress import ProgressTracker, MatchOutcome
from .timer import ModeTimer, TimerState
from .state import GameMode, SessionStatus, GameSnapshot
from .core import NumberMatchGame, GameConfig, MoveResult
from .clock import CountdownClock
from .solver import find_subset, is_reachable

__all__ = [
    "Block",
    "NumberSource",
    "BlockGrid",
    "RowResult",
    "ScoringRules",
    "ProgressTracker",
    "MatchOutcome",
    "ModeTimer",
    "TimerState",
    "GameMode",
    "SessionStatus",
    "GameSnapshot",
    "NumberMatchGame",
    "GameConfig",
    "MoveResult",
    "CountdownClock",
    "find_subset",
    "is_reachable",
]
