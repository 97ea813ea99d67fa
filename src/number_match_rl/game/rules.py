from __future__ import annotations

from dataclasses import dataclass


GRID_COLUMNS = 6
GRID_ROWS = 10
INITIAL_ROWS = 4
MIN_NUMBER = 1
MAX_NUMBER = 9

MIN_TARGET = 10
MAX_TARGET = 25

TIME_MODE_DURATION = 15  # seconds per row
MIN_TIME_MODE_DURATION = 5
SCORE_PER_BLOCK = 10
BONUS_PER_EXTRA_BLOCK = 5  # for every block beyond the second
COMBO_BONUS = 5
MATCHES_PER_LEVEL = 5


@dataclass
class ScoringRules:
    score_per_block: int = SCORE_PER_BLOCK
    bonus_per_extra_block: int = BONUS_PER_EXTRA_BLOCK
    combo_bonus: int = COMBO_BONUS
    matches_per_level: int = MATCHES_PER_LEVEL
    time_mode_duration: int = TIME_MODE_DURATION
    min_time_mode_duration: int = MIN_TIME_MODE_DURATION

    def __post_init__(self) -> None:
        if self.matches_per_level <= 0:
            raise ValueError("matches_per_level must be positive")
        if self.min_time_mode_duration <= 0:
            raise ValueError("min_time_mode_duration must be positive")

    def score_for_match(self, count: int, combo: int) -> int:
        """Points for clearing `count` blocks with the combo streak before the match."""
        if count <= 0:
            return 0
        points = count * self.score_per_block + max(0, count - 2) * self.bonus_per_extra_block
        return points + combo * self.combo_bonus

    def is_level_up(self, match_count: int) -> bool:
        return match_count > 0 and match_count % self.matches_per_level == 0

    def countdown_for_level(self, level: int) -> int:
        # Shrinks by one second per level, never below the floor
        return max(self.min_time_mode_duration, self.time_mode_duration - (level - 1))
