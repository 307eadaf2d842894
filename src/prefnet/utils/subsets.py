# src/prefnet/utils/subsets.py

"""
Lazy subset enumeration used by the structure learner.

Candidate parent sets are produced on demand, in a deterministic order
(smallest first, then lexicographic over the sorted items), so a search that
stops at the first acceptable candidate never builds the rest.
"""

from __future__ import annotations

from itertools import combinations
from typing import FrozenSet, Hashable, Iterable, Iterator, TypeVar

__all__ = ["k_subsets", "bounded_subsets"]

T = TypeVar("T", bound=Hashable)


def k_subsets(items: Iterable[T], k: int) -> Iterator[FrozenSet[T]]:
    """
    Yield every ``k``-element subset of ``items`` once.

    ``k == 0`` yields the empty set; ``k`` larger than the number of distinct
    items yields nothing.
    """
    if k < 0:
        raise ValueError("k must be >= 0")
    pool = sorted(set(items))
    for combo in combinations(pool, k):
        yield frozenset(combo)


def bounded_subsets(items: Iterable[T], max_size: int) -> Iterator[FrozenSet[T]]:
    """Yield subsets of size ``0..max_size``, smallest first."""
    if max_size < 0:
        raise ValueError("max_size must be >= 0")
    pool = sorted(set(items))
    for k in range(min(max_size, len(pool)) + 1):
        yield from k_subsets(pool, k)
