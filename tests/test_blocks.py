from __future__ import annotations

import random

import pytest

from number_match_rl.game import NumberSource


def test_blocks_have_unique_increasing_ids():
    source = NumberSource(rng=random.Random(3))
    ids = [source.block().id for _ in range(100)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 100


def test_values_and_targets_stay_in_range():
    source = NumberSource(rng=random.Random(7))
    row = source.row(500)
    assert {b.value for b in row} == set(range(1, 10))
    assert all(not b.selected for b in row)
    targets = {source.target() for _ in range(2000)}
    assert targets == set(range(10, 26))


def test_same_seed_same_sequence():
    a = NumberSource(rng=random.Random(11))
    b = NumberSource(rng=random.Random(11))
    assert [x.value for x in a.row(30)] == [x.value for x in b.row(30)]


def test_empty_ranges_rejected():
    with pytest.raises(ValueError):
        NumberSource(min_number=5, max_number=4)
    with pytest.raises(ValueError):
        NumberSource(min_target=30, max_target=10)
