"""
Connectivity: how many groups ("clusters") of 8-connected pieces each side has, and how big they are.

Sizes are computed with an explicit stack (no recursion) and kept in a small cache that the Board
throws away whenever its cells change.
"""

from typing import Sequence

from src.loa.geometry import ADJACENT_INDICES
from src.loa.pieces import PLAYER_MARKS, Mark


def cluster_sizes(cells: Sequence[Mark], mark: Mark) -> list[int]:
    """
    Sizes of all maximal groups of `mark` where every piece touches another one of the group
    (orthogonally or diagonally). Largest group first.

    A side without pieces has no groups at all: returns [] (so it is never 'contiguous').
    """
    seen = [False] * len(cells)
    sizes: list[int] = []
    for start, occupant in enumerate(cells):
        if occupant is not mark or seen[start]:
            continue
        seen[start] = True
        stack = [start]
        size = 0
        while stack:
            current = stack.pop()
            size += 1
            for neighbour in ADJACENT_INDICES[current]:
                if not seen[neighbour] and cells[neighbour] is mark:
                    seen[neighbour] = True
                    stack.append(neighbour)
        sizes.append(size)
    return sorted(sizes, reverse=True)


class RegionCache:
    """Cluster sizes per side, computed on first request after each invalidation."""

    def __init__(self) -> None:
        self._sizes: dict[Mark, list[int]] = {}

    def sizes(self, cells: Sequence[Mark], mark: Mark) -> list[int]:
        if mark not in PLAYER_MARKS:
            raise ValueError(f"Only sides have clusters, got {mark}")
        if mark not in self._sizes:
            self._sizes[mark] = cluster_sizes(cells, mark)
        return list(self._sizes[mark])

    def invalidate(self) -> None:
        self._sizes.clear()
