"""Pipeline generator that applies a fixed list of layers to a fresh grid.

This is the declarative counterpart of the fluent Generator API: the layers
are assembled up front and can be reused to generate any number of maps.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from procmap import config
from procmap.generator import Generator

if TYPE_CHECKING:
    from procmap.grid import Grid
    from procmap.types import Label, RandomSeed

    from .layer import GenerationLayer


class PipelineGenerator:
    """Map generator that runs layers sequentially on a shared grid.

    Example:
        generator = PipelineGenerator(
            layers=[
                NoiseFieldLayer(quantize=three_bands),
                ClusterScatterLayer(label=3, count=12),
            ],
            map_width=80,
            map_height=43,
            seed=12345,
        )
        grid = generator.generate()

    Attributes:
        layers: List of GenerationLayer instances to apply.
        seed: Optional random seed for reproducible generation.
    """

    def __init__(
        self,
        layers: list[GenerationLayer],
        map_width: int,
        map_height: int,
        seed: RandomSeed = None,
        background: Label = config.BACKGROUND_LABEL,
    ) -> None:
        """Initialize the pipeline generator.

        Args:
            layers: List of GenerationLayer instances to apply in order.
            map_width: Width of the map in cells.
            map_height: Height of the map in cells.
            seed: Optional random seed for deterministic generation.
            background: Label the grid starts filled with.

        Raises:
            ValueError: If either dimension is less than 1.
        """
        if map_width < 1 or map_height < 1:
            raise ValueError(
                f"Map dimensions must be positive, got {map_width}x{map_height}"
            )
        self.layers = layers
        self.map_width = map_width
        self.map_height = map_height
        self.seed = seed
        self.background = background

    def generate(self) -> Grid:
        """Generate a map by running all layers in sequence.

        Each layer draws from its own random stream. Two layers of the same
        class share a stream, consumed in pipeline order.

        Returns:
            The finished Grid.
        """
        generator = Generator(
            self.map_width,
            self.map_height,
            background=self.background,
            seed=self.seed,
        )
        for layer in self.layers:
            generator.apply(layer)
        return generator.grid
