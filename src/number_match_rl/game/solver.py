from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple


def find_subset(values: Sequence[int], target: int) -> Optional[List[int]]:
    """Indices of a subset of `values` summing to `target`, or None.

    Among all such subsets the one with the most elements is returned,
    since longer matches score more. Values are assumed positive, so partial
    sums above `target` are dropped.
    """
    if target <= 0:
        return None
    # partial sum -> longest index tuple reaching it
    best: Dict[int, Tuple[int, ...]] = {0: ()}
    for i, value in enumerate(values):
        if value <= 0:
            continue
        for total, indices in list(best.items()):
            new_total = total + value
            if new_total > target:
                continue
            candidate = indices + (i,)
            current = best.get(new_total)
            if current is None or len(candidate) > len(current):
                best[new_total] = candidate
    found = best.get(target)
    return list(found) if found is not None else None


def is_reachable(values: Sequence[int], target: int) -> bool:
    return find_subset(values, target) is not None
