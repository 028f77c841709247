"""Abstract base class for generation layers.

Each layer implements one generation algorithm. A layer transforms a Grid in
place using the random stream it is handed, and keeps no state between calls
beyond its own configuration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from procmap.grid import Grid
    from procmap.util.rng import RNG


class GenerationLayer(ABC):
    """Abstract base class for map generation layers.

    Layers are applied sequentially by the Generator (or PipelineGenerator).
    Each layer receives the shared Grid and modifies it in place.

    Subclasses must validate their configuration in __init__ so that a bad
    configuration fails before anything on the grid changes, and implement
    apply() to perform their specific generation logic.
    """

    @abstractmethod
    def apply(self, grid: Grid, rng: RNG) -> None:
        """Apply this layer's generation logic to the grid.

        Args:
            grid: The grid to modify.
            rng: Random stream to draw every random decision from.
        """
        raise NotImplementedError
