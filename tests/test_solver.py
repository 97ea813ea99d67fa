from __future__ import annotations

from number_match_rl.game import find_subset, is_reachable


def test_prefers_longest_subset():
    values = [9, 1, 2, 3, 4, 6]
    indices = find_subset(values, 10)
    assert sum(values[i] for i in indices) == 10
    assert len(indices) == 4


def test_unreachable_target():
    assert find_subset([9, 9, 9], 10) is None
    assert not is_reachable([], 10)


def test_each_block_used_once():
    assert find_subset([5], 10) is None
    assert sorted(find_subset([5, 5], 10)) == [0, 1]
