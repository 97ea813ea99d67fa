from __future__ import annotations

import itertools
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .rules import MAX_NUMBER, MAX_TARGET, MIN_NUMBER, MIN_TARGET


@dataclass
class Block:
    id: int
    value: int
    selected: bool = False


class NumberSource:
    """Random provider for block values, block ids and targets.

    `rng` only needs a `randint(a, b)` method, so tests can pass a scripted
    sequence instead of a `random.Random`. Ids come from a monotonic counter.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        ids: Optional[Iterator[int]] = None,
        min_number: int = MIN_NUMBER,
        max_number: int = MAX_NUMBER,
        min_target: int = MIN_TARGET,
        max_target: int = MAX_TARGET,
    ) -> None:
        if min_number > max_number:
            raise ValueError(f"empty block value range [{min_number}, {max_number}]")
        if min_target > max_target:
            raise ValueError(f"empty target range [{min_target}, {max_target}]")
        self.rng = rng or random.Random()
        self.ids = ids or itertools.count(1)
        self.min_number = min_number
        self.max_number = max_number
        self.min_target = min_target
        self.max_target = max_target

    def block(self) -> Block:
        value = self.rng.randint(self.min_number, self.max_number)
        return Block(id=next(self.ids), value=value)

    def row(self, columns: int) -> List[Block]:
        return [self.block() for _ in range(columns)]

    def target(self) -> int:
        return self.rng.randint(self.min_target, self.max_target)

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)
