from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import numpy as np

from .blocks import Block


@dataclass
class RowResult:
    blocks_added: int
    overflow: bool


class BlockGrid:
    """Ordered collection of numbered blocks laid out in fixed-width rows.

    Storage index 0 is the newest block: a new row is prepended, so every
    older block moves one row up. Slot `i` sits in row `i // columns`
    counted from the bottom. Removing blocks keeps the relative order of
    the rest, so later blocks slide down to fill the gap.
    """

    def __init__(self, columns: int, rows: int) -> None:
        self.columns = int(columns)
        self.rows = int(rows)
        self.blocks: List[Block] = []

    @property
    def capacity(self) -> int:
        return self.columns * self.rows

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)

    def reset(self) -> None:
        self.blocks = []

    def add_row(self, row: Sequence[Block]) -> RowResult:
        """Prepend `row` as the newest row and report whether capacity is exceeded."""
        self.blocks = list(row) + self.blocks
        return RowResult(blocks_added=len(row), overflow=self.is_overflowing())

    def is_overflowing(self) -> bool:
        return len(self.blocks) > self.capacity

    def remove(self, ids: Iterable[int]) -> List[Block]:
        doomed = set(ids)
        removed = [b for b in self.blocks if b.id in doomed]
        self.blocks = [b for b in self.blocks if b.id not in doomed]
        return removed

    def find(self, block_id: int) -> Optional[Block]:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    def block_at(self, slot: int) -> Optional[Block]:
        if 0 <= slot < len(self.blocks):
            return self.blocks[slot]
        return None

    def selected(self) -> List[Block]:
        return [b for b in self.blocks if b.selected]

    def selection_sum(self) -> int:
        return sum(b.value for b in self.blocks if b.selected)

    def clear_selection(self) -> None:
        for block in self.blocks:
            block.selected = False

    def values(self) -> List[int]:
        return [b.value for b in self.blocks]

    def _as_array(self, attr: str) -> np.ndarray:
        # Blocks past capacity (the row that overflowed) are not shown
        flat = np.zeros(self.capacity, dtype=np.int8)
        for i, block in enumerate(self.blocks[: self.capacity]):
            flat[i] = int(getattr(block, attr))
        return flat.reshape(self.rows, self.columns)

    def values_array(self) -> np.ndarray:
        """Values as a (rows, columns) array, row 0 at the bottom, 0 for empty slots."""
        return self._as_array("value")

    def selected_array(self) -> np.ndarray:
        return self._as_array("selected")

    def fill_ratio(self) -> float:
        return min(len(self.blocks), self.capacity) / float(self.capacity)
