from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .rules import ScoringRules


@dataclass
class MatchOutcome:
    points: int
    combo: int
    leveled_up: bool


class ProgressTracker:
    """Score, combo streak, match count and level of one session."""

    def __init__(self, rules: Optional[ScoringRules] = None) -> None:
        self.rules = rules or ScoringRules()
        self.score = 0
        self.combo = 0
        self.match_count = 0
        self.level = 1

    def reset(self) -> None:
        self.score = 0
        self.combo = 0
        self.match_count = 0
        self.level = 1

    def record_match(self, count: int) -> MatchOutcome:
        # Combo bonus uses the streak as it was before this match
        points = self.rules.score_for_match(count, self.combo)
        self.score += points
        self.combo += 1
        self.match_count += 1
        leveled_up = self.rules.is_level_up(self.match_count)
        if leveled_up:
            self.level += 1
        return MatchOutcome(points=points, combo=self.combo, leveled_up=leveled_up)

    def break_combo(self) -> None:
        self.combo = 0
