from __future__ import annotations

import dataclasses
import logging
import random
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from .blocks import Block, NumberSource
from .grid import BlockGrid, RowResult
from .progress import ProgressTracker
from .rules import (
    GRID_COLUMNS,
    GRID_ROWS,
    INITIAL_ROWS,
    MAX_NUMBER,
    MAX_TARGET,
    MIN_NUMBER,
    MIN_TARGET,
    ScoringRules,
)
from .solver import find_subset
from .state import (
    ClassicPlay,
    GameMode,
    GameOverState,
    GameSnapshot,
    MenuState,
    SessionState,
    SessionStatus,
    TimedPlay,
)
from .timer import ModeTimer, TimerState


logger = logging.getLogger(__name__)

TimerListener = Callable[[TimerState], None]


@dataclass
class GameConfig:
    columns: int = GRID_COLUMNS
    rows: int = GRID_ROWS
    initial_rows: int = INITIAL_ROWS
    min_number: int = MIN_NUMBER
    max_number: int = MAX_NUMBER
    min_target: int = MIN_TARGET
    max_target: int = MAX_TARGET
    random_seed: Optional[int] = None
    # Leave classic-mode row growth to an external scheduler (see apply_pending_growth)
    defer_row_growth: bool = False

    def __post_init__(self) -> None:
        if self.columns <= 0 or self.rows <= 0:
            raise ValueError(f"grid must be at least 1x1, got {self.columns}x{self.rows}")
        if not 0 <= self.initial_rows <= self.rows:
            raise ValueError(f"initial_rows must be within [0, {self.rows}], got {self.initial_rows}")
        if self.min_number > self.max_number:
            raise ValueError(f"empty block value range [{self.min_number}, {self.max_number}]")
        if self.min_target > self.max_target:
            raise ValueError(f"empty target range [{self.min_target}, {self.max_target}]")


@dataclass
class MoveResult:
    snapshot: GameSnapshot
    matched: bool = False
    over_target: bool = False
    leveled_up: bool = False
    game_over: bool = False
    row_added: bool = False
    pending_row_growth: bool = False
    points: int = 0
    combo: int = 0


class NumberMatchGame:
    """Headless engine of the number matching puzzle.

    Every mutation goes through `lock`, so toggles, row growth and countdown
    ticks never interleave. Requests that do not apply to the current state
    (unknown block, paused session, `tick` in classic mode, ...) are ignored
    and return the unchanged snapshot.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        source: Optional[NumberSource] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.source = source or NumberSource(
            rng=random.Random(self.config.random_seed),
            min_number=self.config.min_number,
            max_number=self.config.max_number,
            min_target=self.config.min_target,
            max_target=self.config.max_target,
        )
        self.grid = BlockGrid(self.config.columns, self.config.rows)
        self.progress = ProgressTracker(self.rules)
        self.target = 0
        self.state: SessionState = MenuState()
        self.lock = threading.RLock()
        self._pending_growth = 0
        self._timer_listeners: List[TimerListener] = []

    # ---------- Read-only projections ----------
    @property
    def status(self) -> SessionStatus:
        return self.state.status

    @property
    def mode(self) -> Optional[GameMode]:
        return self.state.mode

    @property
    def is_playing(self) -> bool:
        return self.state.status is SessionStatus.PLAYING

    @property
    def paused(self) -> bool:
        return isinstance(self.state, (ClassicPlay, TimedPlay)) and self.state.paused

    @property
    def game_over(self) -> bool:
        return isinstance(self.state, GameOverState)

    @property
    def score(self) -> int:
        return self.progress.score

    @property
    def level(self) -> int:
        return self.progress.level

    @property
    def combo(self) -> int:
        return self.progress.combo

    @property
    def match_count(self) -> int:
        return self.progress.match_count

    @property
    def current_sum(self) -> int:
        return self.grid.selection_sum()

    @property
    def time_left(self) -> Optional[int]:
        if isinstance(self.state, TimedPlay):
            return self.state.timer.time_left
        return None

    @property
    def timer_state(self) -> TimerState:
        if isinstance(self.state, TimedPlay):
            return self.state.timer.state
        return TimerState.INACTIVE

    @property
    def has_pending_growth(self) -> bool:
        return self._pending_growth > 0

    def snapshot(self) -> GameSnapshot:
        with self.lock:
            return GameSnapshot(
                status=self.status,
                mode=self.mode,
                paused=self.paused,
                score=self.score,
                level=self.level,
                match_count=self.match_count,
                combo=self.combo,
                target=self.target,
                current_sum=self.current_sum,
                time_left=self.time_left,
                blocks=tuple(dataclasses.replace(b) for b in self.grid),
            )

    def find_match(self) -> Optional[List[Block]]:
        """Blocks that would hit the current target, or None if it is unreachable."""
        with self.lock:
            blocks = list(self.grid)
            indices = find_subset([b.value for b in blocks], self.target)
            if indices is None:
                return None
            return [blocks[i] for i in indices]

    # ---------- Timer listeners ----------
    def add_timer_listener(self, listener: TimerListener) -> None:
        self._timer_listeners.append(listener)

    def remove_timer_listener(self, listener: TimerListener) -> None:
        if listener in self._timer_listeners:
            self._timer_listeners.remove(listener)

    def _emit_timer_change(self, before: TimerState) -> None:
        after = self.timer_state
        if after is before:
            return
        logger.debug("Countdown %s -> %s", before.value, after.value)
        for listener in list(self._timer_listeners):
            listener(after)

    # ---------- Session control ----------
    def start_game(self, mode: GameMode | str, seed: Optional[int] = None) -> GameSnapshot:
        mode = GameMode(mode)
        with self.lock:
            before = self.timer_state
            if isinstance(self.state, TimedPlay):
                self.state.timer.stop()
            if seed is not None:
                self.source.seed(seed)
            self._reset_board()
            for _ in range(self.config.initial_rows):
                self.grid.add_row(self.source.row(self.config.columns))
            self.target = self.source.target()
            if mode is GameMode.TIME:
                timer = ModeTimer(self.rules.time_mode_duration)
                timer.start()
                self.state = TimedPlay(timer=timer)
            else:
                self.state = ClassicPlay()
            logger.info("Started %s game with %d blocks, target %d", mode.value, len(self.grid), self.target)
            self._emit_timer_change(before)
            return self.snapshot()

    def restart(self) -> GameSnapshot:
        with self.lock:
            if self.mode is None:
                return self.snapshot()
            return self.start_game(self.mode)

    def return_to_menu(self) -> GameSnapshot:
        with self.lock:
            if isinstance(self.state, MenuState):
                return self.snapshot()
            before = self.timer_state
            if isinstance(self.state, TimedPlay):
                self.state.timer.stop()
            self._reset_board()
            self.state = MenuState()
            logger.info("Returned to menu")
            self._emit_timer_change(before)
            return self.snapshot()

    def pause(self) -> GameSnapshot:
        with self.lock:
            if isinstance(self.state, (ClassicPlay, TimedPlay)) and not self.state.paused:
                before = self.timer_state
                self.state.paused = True
                if isinstance(self.state, TimedPlay):
                    self.state.timer.pause()
                logger.debug("Paused")
                self._emit_timer_change(before)
            return self.snapshot()

    def resume(self) -> GameSnapshot:
        with self.lock:
            if isinstance(self.state, (ClassicPlay, TimedPlay)) and self.state.paused:
                before = self.timer_state
                self.state.paused = False
                if isinstance(self.state, TimedPlay):
                    self.state.timer.resume()
                logger.debug("Resumed")
                self._emit_timer_change(before)
            return self.snapshot()

    def _reset_board(self) -> None:
        self.grid.reset()
        self.progress.reset()
        self.target = 0
        self._pending_growth = 0

    def _end_game(self) -> None:
        before = self.timer_state
        if isinstance(self.state, TimedPlay):
            self.state.timer.stop()
        if not isinstance(self.state, (ClassicPlay, TimedPlay)):
            return
        self.state = GameOverState(mode=self.state.mode, final_score=self.score)
        self._pending_growth = 0
        logger.info("Game over: %d blocks on the board, final score %d", len(self.grid), self.score)
        self._emit_timer_change(before)

    # ---------- Grid growth ----------
    def _grow(self) -> RowResult:
        result = self.grid.add_row(self.source.row(self.config.columns))
        logger.debug("Added a row, %d blocks on the board", len(self.grid))
        if result.overflow:
            self._end_game()
        return result

    def add_row(self) -> Optional[RowResult]:
        """Push a new random row in at the bottom. Ignored unless playing."""
        with self.lock:
            if not self.is_playing:
                return None
            return self._grow()

    def apply_pending_growth(self) -> Optional[RowResult]:
        """Run one row growth deferred by a classic-mode match.

        Each match owes exactly one row, so call once per pending growth.
        Does nothing when none is pending or the session is no longer
        being played.
        """
        with self.lock:
            if not self.is_playing:
                self._pending_growth = 0
                return None
            if self._pending_growth <= 0:
                return None
            self._pending_growth -= 1
            return self._grow()

    # ---------- Selection ----------
    def toggle_block(self, block_id: int) -> MoveResult:
        with self.lock:
            if not self.is_playing or self.paused:
                return MoveResult(self.snapshot())
            block = self.grid.find(block_id)
            if block is None:
                return MoveResult(self.snapshot())

            if block.selected:
                block.selected = False
                return MoveResult(self.snapshot())

            block.selected = True
            selection = self.grid.selected()
            total = sum(b.value for b in selection)
            if total == self.target:
                return self._resolve_match(selection)
            if total > self.target:
                logger.debug("Sum %d overshot target %d, selection cleared", total, self.target)
                self.progress.break_combo()
                self.grid.clear_selection()
                return MoveResult(self.snapshot(), over_target=True)
            return MoveResult(self.snapshot())

    def _resolve_match(self, selection: List[Block]) -> MoveResult:
        outcome = self.progress.record_match(len(selection))
        self.grid.remove(b.id for b in selection)
        logger.debug(
            "Matched target %d with %d blocks: +%d points, combo %d",
            self.target, len(selection), outcome.points, outcome.combo,
        )
        if outcome.leveled_up:
            logger.info("Level up: %d", self.level)
        self.target = self.source.target()

        row_added = False
        if isinstance(self.state, ClassicPlay):
            if self.config.defer_row_growth:
                self._pending_growth += 1
            else:
                self._grow()
                row_added = True

        return MoveResult(
            self.snapshot(),
            matched=True,
            leveled_up=outcome.leveled_up,
            game_over=self.game_over,
            row_added=row_added,
            pending_row_growth=self._pending_growth > 0,
            points=outcome.points,
            combo=outcome.combo,
        )

    # ---------- Countdown ----------
    def tick(self) -> MoveResult:
        """Advance the time-mode countdown by one second."""
        with self.lock:
            if not isinstance(self.state, TimedPlay) or self.state.paused:
                return MoveResult(self.snapshot())
            timer = self.state.timer
            if not timer.tick():
                return MoveResult(self.snapshot())
            self._grow()
            if self.is_playing:
                timer.restart(self.rules.countdown_for_level(self.level))
            return MoveResult(self.snapshot(), game_over=self.game_over, row_added=True)
