from __future__ import annotations

from collections import deque
from collections.abc import Iterable

import numpy as np

from procmap.grid import Grid
from procmap.types import TilePos


def is_four_connected(positions: Iterable[TilePos]) -> bool:
    """True if every position is reachable from every other via 4-steps."""
    remaining = set(positions)
    if not remaining:
        return False
    start = next(iter(remaining))
    queue = deque([start])
    seen = {start}
    while queue:
        x, y = queue.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            neighbor = (x + dx, y + dy)
            if neighbor in remaining and neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen == remaining


def grid_with_blocks(width: int, height: int, label: int = 9) -> Grid:
    """A grid with a few pre-placed non-background blocks."""
    grid = Grid(width, height)
    grid.cells[0 : width // 3, 0 : height // 3] = label
    grid.cells[width // 2 : width // 2 + 2, :] = label
    return grid


def changed_cells(before: np.ndarray, after: np.ndarray) -> set[TilePos]:
    xs, ys = np.nonzero(before != after)
    return {(int(x), int(y)) for x, y in zip(xs, ys, strict=True)}
