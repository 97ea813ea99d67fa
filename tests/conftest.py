from __future__ import annotations

from typing import Iterable, List, Optional

import pytest

from number_match_rl.game import GameConfig, GameMode, NumberMatchGame, NumberSource
from number_match_rl.game.rules import MAX_TARGET, MIN_TARGET


class ScriptedRandom:
    """Stand-in RNG: block values and targets come from separate queues.

    Draws in the target range pop from `targets`, everything else from
    `values`. Empty queues fall back to `default_value` / the lowest target.
    """

    def __init__(self, values: Iterable[int] = (), targets: Iterable[int] = (), default_value: int = 5) -> None:
        self.values: List[int] = list(values)
        self.targets: List[int] = list(targets)
        self.default_value = default_value

    def randint(self, a: int, b: int) -> int:
        if (a, b) == (MIN_TARGET, MAX_TARGET):
            return self.targets.pop(0) if self.targets else a
        return self.values.pop(0) if self.values else self.default_value

    def seed(self, seed: Optional[int]) -> None:
        pass


def make_game(values: Iterable[int] = (), targets: Iterable[int] = (), default_value: int = 5,
              mode: GameMode = GameMode.CLASSIC, config: Optional[GameConfig] = None,
              start: bool = True) -> NumberMatchGame:
    rng = ScriptedRandom(values, targets, default_value)
    game = NumberMatchGame(config, source=NumberSource(rng=rng))
    if start:
        game.start_game(mode)
    return game


def select_values(game: NumberMatchGame, *values: int):
    """Toggle one unselected block per requested value; return the last result."""
    result = None
    for value in values:
        block = next(b for b in game.grid if b.value == value and not b.selected)
        result = game.toggle_block(block.id)
    return result


@pytest.fixture
def classic_game() -> NumberMatchGame:
    return make_game(targets=[10] * 20)


@pytest.fixture
def time_game() -> NumberMatchGame:
    return make_game(targets=[10] * 20, mode=GameMode.TIME)
