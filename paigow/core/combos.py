from __future__ import annotations

from itertools import combinations
from typing import Iterator, List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def choose_indices(n: int, k: int) -> Iterator[Tuple[int, ...]]:
    """All k-index subsets of range(n), in lexicographic order."""
    return combinations(range(n), k)


def choose_split(items: Sequence[T], k: int) -> Iterator[Tuple[List[T], List[T]]]:
    """Yield (chosen k items, the other n-k items) for every k-subset.

    Works on positions rather than equality, so equal items are never
    collapsed.
    """
    items = list(items)
    n = len(items)
    for idx in choose_indices(n, k):
        picked = set(idx)
        yield [items[i] for i in idx], [items[i] for i in range(n) if i not in picked]
