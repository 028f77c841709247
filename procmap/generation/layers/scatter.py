"""Scattered clusters.

ClusterScatterLayer drops many small blobs of a label across the grid. Each
blob is a random seed cell followed by a short random walk. Unlike terrain
growth, clusters overwrite whatever they land on, so they can merge into or
punch through regions from earlier operations.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from procmap import config
from procmap.generation.layer import GenerationLayer

if TYPE_CHECKING:
    from procmap.grid import Grid
    from procmap.types import Label, TilePos
    from procmap.util.rng import RNG

logger = logging.getLogger(__name__)


class ClusterScatterLayer(GenerationLayer):
    """Scatters independent random-walk clusters of a label."""

    def __init__(
        self,
        label: Label,
        count: int,
        min_steps: int = config.CLUSTER_MIN_WALK_STEPS,
        max_steps: int = config.CLUSTER_MAX_WALK_STEPS,
    ) -> None:
        """Initialize the scatter layer.

        Args:
            label: Label written into every cluster cell.
            count: Number of clusters (random walks) to perform.
            min_steps: Fewest walk steps after the seed cell.
            max_steps: Most walk steps after the seed cell.

        Raises:
            ValueError: If count is negative or the step bounds are invalid.
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        if min_steps < 0 or min_steps > max_steps:
            raise ValueError(
                f"invalid walk step bounds: min={min_steps}, max={max_steps}"
            )
        self.label = label
        self.count = count
        self.min_steps = min_steps
        self.max_steps = max_steps

    def apply(self, grid: Grid, rng: RNG) -> None:
        """Scatter clusters on the grid.

        Args:
            grid: The grid to modify.
            rng: Random stream for seeds, walk lengths and directions.
        """
        touched: set[TilePos] = set()
        for _ in range(self.count):
            touched.update(self.spawn_cluster(grid, rng))
        logger.debug(
            f"Scattered {self.count} clusters of label {self.label} "
            f"covering {len(touched)} cells"
        )

    def spawn_cluster(self, grid: Grid, rng: RNG) -> list[TilePos]:
        """Perform one seed-and-walk and return the cells it labelled, in order."""
        pos = (rng.randrange(grid.width), rng.randrange(grid.height))
        grid.set(*pos, self.label)
        path = [pos]

        for _ in range(rng.randint(self.min_steps, self.max_steps)):
            neighbors = grid.neighbors4(*pos)
            if not neighbors:
                # 1x1 grid, nowhere to walk
                break
            pos = rng.choice(neighbors)
            grid.set(*pos, self.label)
            path.append(pos)

        return path
