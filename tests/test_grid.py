from __future__ import annotations

import numpy as np

from number_match_rl.game import Block, BlockGrid


def _row(start_id: int, values):
    return [Block(id=start_id + i, value=v) for i, v in enumerate(values)]


def test_new_rows_go_to_the_bottom():
    grid = BlockGrid(columns=3, rows=4)
    grid.add_row(_row(1, [1, 2, 3]))
    grid.add_row(_row(4, [4, 5, 6]))
    assert [b.id for b in grid] == [4, 5, 6, 1, 2, 3]
    values = grid.values_array()
    assert values.shape == (4, 3)
    np.testing.assert_array_equal(values[0], [4, 5, 6])
    np.testing.assert_array_equal(values[1], [1, 2, 3])
    assert not values[2:].any()


def test_overflow_only_past_capacity():
    grid = BlockGrid(columns=2, rows=2)
    assert not grid.add_row(_row(1, [1, 1])).overflow
    result = grid.add_row(_row(3, [1, 1]))
    assert result.blocks_added == 2
    assert not result.overflow
    assert grid.add_row(_row(5, [1, 1])).overflow
    assert len(grid) == 6
    # The overflowing row is not part of the array view
    assert grid.values_array().shape == (2, 2)
    assert grid.fill_ratio() == 1.0


def test_remove_keeps_relative_order():
    grid = BlockGrid(columns=4, rows=2)
    grid.add_row(_row(1, [1, 2, 3, 4]))
    removed = grid.remove([2, 4])
    assert [b.id for b in removed] == [2, 4]
    assert [b.id for b in grid] == [1, 3]
    assert grid.remove([99]) == []


def test_selection_helpers():
    grid = BlockGrid(columns=3, rows=2)
    grid.add_row(_row(1, [4, 5, 6]))
    grid.find(1).selected = True
    grid.find(3).selected = True
    assert grid.selection_sum() == 10
    assert [b.id for b in grid.selected()] == [1, 3]
    np.testing.assert_array_equal(grid.selected_array()[0], [1, 0, 1])
    grid.clear_selection()
    assert grid.selection_sum() == 0
    assert grid.find(42) is None
    assert grid.block_at(2).id == 3
    assert grid.block_at(3) is None
