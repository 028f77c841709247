"""Organic terrain growth.

TerrainGrowthLayer grows one connected blob of a label outward from a single
random seed cell, one cell at a time:

1. Pick a random cell as the seed. If something already claimed it, stop.
2. Keep a frontier of region cells that still touch background.
3. Each step, pick a random frontier cell and claim one of its background
   neighbors at random.

Because every new cell is adjacent to a cell already in the region, the
result is always 4-connected. Growth only ever claims background cells, so
terrain never eats into regions placed by earlier operations.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from procmap.generation.layer import GenerationLayer

if TYPE_CHECKING:
    from procmap.grid import Grid
    from procmap.types import Label, TilePos
    from procmap.util.rng import RNG

logger = logging.getLogger(__name__)


class _Frontier:
    """Set of positions with O(1) add, remove, and uniform random choice."""

    def __init__(self) -> None:
        self._items: list[TilePos] = []
        self._index: dict[TilePos, int] = {}

    def __len__(self) -> int:
        return len(self._items)

    def add(self, pos: TilePos) -> None:
        if pos not in self._index:
            self._index[pos] = len(self._items)
            self._items.append(pos)

    def discard(self, pos: TilePos) -> None:
        idx = self._index.pop(pos, None)
        if idx is None:
            return
        last = self._items.pop()
        if idx < len(self._items):
            # Move the last item into the hole left by pos
            self._items[idx] = last
            self._index[last] = idx

    def choose(self, rng: RNG) -> TilePos:
        return self._items[rng.randrange(len(self._items))]


class TerrainGrowthLayer(GenerationLayer):
    """Grows one connected region of a label from a random seed cell."""

    def __init__(self, label: Label, iterations: int) -> None:
        """Initialize the layer.

        Args:
            label: Label written into every grown cell.
            iterations: Number of growth steps after the seed. The region ends
                up with at most iterations + 1 cells.

        Raises:
            ValueError: If iterations is negative.
        """
        if iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {iterations}")
        self.label = label
        self.iterations = iterations

    def apply(self, grid: Grid, rng: RNG) -> None:
        """Grow the region on the grid.

        Args:
            grid: The grid to modify.
            rng: Random stream for seed and growth choices.

        Raises:
            ValueError: If the label is the grid's background label.
        """
        grid.check_foreground(self.label)
        seed = (rng.randrange(grid.width), rng.randrange(grid.height))
        if not grid.is_background(*seed):
            logger.debug(
                f"Terrain seed {seed} already holds {grid.get(*seed)}; "
                f"label {self.label} not grown"
            )
            return

        grid.set(*seed, self.label)
        region_size = 1 + self.grow_from(grid, rng, seed)
        logger.debug(
            f"Grew terrain label {self.label} to {region_size} cells "
            f"({self.iterations} steps requested)"
        )

    def grow_from(self, grid: Grid, rng: RNG, seed: TilePos) -> int:
        """Run the growth steps outward from an already labelled seed cell.

        Returns:
            The number of cells claimed, which is less than self.iterations
            only when the region ran out of background to grow into.
        """
        frontier = _Frontier()
        if self._open_neighbors(grid, seed):
            frontier.add(seed)

        grown = 0
        while grown < self.iterations and frontier:
            cell = frontier.choose(rng)
            open_neighbors = self._open_neighbors(grid, cell)
            if not open_neighbors:
                # Boxed in by cells claimed since it joined the frontier
                frontier.discard(cell)
                continue

            new_cell = rng.choice(open_neighbors)
            grid.set(*new_cell, self.label)
            grown += 1

            if self._open_neighbors(grid, new_cell):
                frontier.add(new_cell)
            if len(open_neighbors) == 1:
                frontier.discard(cell)

        if grown < self.iterations:
            logger.debug(
                f"Terrain label {self.label} boxed in after {grown} of "
                f"{self.iterations} steps"
            )
        return grown

    def _open_neighbors(self, grid: Grid, pos: TilePos) -> list[TilePos]:
        return [n for n in grid.neighbors4(*pos) if grid.is_background(*n)]
