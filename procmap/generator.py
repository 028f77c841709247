"""Fluent builder for composing generation operations on one grid.

Example usage:
    from procmap import Generator, SizeRange

    Generator(40, 10, seed=0).spawn_perlin(
        lambda value: 2 if value > 0.66 else 1 if value > 0.33 else 0
    ).show()

    size = SizeRange(width_range=(4, 10), height_range=(4, 10))
    generator = (
        Generator(30, 20, seed="burrito1")
        .spawn_rooms(2, 3, size)
        .spawn_repeated(label=2, count=5)
    )
    rows = generator.to_rows()

Operations run in call order against the same grid, so later operations see
(and, depending on the algorithm, respect or overwrite) everything earlier
ones wrote.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Self

from procmap import config, render
from procmap.generation.layers import (
    ClusterScatterLayer,
    NoiseFieldLayer,
    NoiseOptions,
    RoomPlacementLayer,
    SizeRange,
    TerrainGrowthLayer,
)
from procmap.grid import Grid
from procmap.util.rng import RNGProvider

if TYPE_CHECKING:
    from procmap.generation.layer import GenerationLayer
    from procmap.types import GridDimensions, Label, QuantizeFn, RandomSeed


class Generator:
    """Owns a label grid and applies generation operations to it.

    Every operation mutates the grid in place and returns the generator, so
    calls chain. Each built-in operation draws from its own random stream
    derived from the master seed, which makes the result reproducible for a
    fixed seed.

    Attributes:
        grid: The grid being generated.
        noise_options: Options used by spawn_perlin() when none are passed.
    """

    def __init__(
        self,
        width: int,
        height: int,
        background: Label = config.BACKGROUND_LABEL,
        seed: RandomSeed = config.RANDOM_SEED,
    ) -> None:
        """Allocate a width x height grid filled with the background label.

        Args:
            width: Grid width in cells.
            height: Grid height in cells.
            background: Label of untouched cells.
            seed: Master seed for every random stream. None uses system
                entropy.

        Raises:
            ValueError: If width or height is less than 1.
        """
        self.grid = Grid(width, height, background)
        self.noise_options = NoiseOptions()
        self._rng = RNGProvider(seed)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def seed(self) -> RandomSeed:
        return self._rng.master_seed

    def with_seed(self, seed: RandomSeed) -> Self:
        """Reseed all random streams. Existing grid content is kept."""
        self._rng.reset(seed)
        return self

    def with_options(self, options: NoiseOptions) -> Self:
        """Set the noise options used by later spawn_perlin() calls."""
        self.noise_options = options
        return self

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def apply(self, layer: GenerationLayer, domain: str | None = None) -> Self:
        """Apply any generation layer to the grid.

        Args:
            layer: The layer to run.
            domain: Name of the random stream to use. Defaults to
                "layer.<ClassName>".
        """
        if domain is None:
            domain = f"layer.{type(layer).__name__}"
        layer.apply(self.grid, self._rng.get(domain))
        return self

    def spawn_terrain(self, label: Label, iterations: int) -> Self:
        """Grow one connected region of label from a random seed cell.

        The region claims only background cells and has at most
        iterations + 1 cells. It stops early if it runs out of room.
        """
        return self.apply(TerrainGrowthLayer(label, iterations), "spawn.terrain")

    def spawn_rooms(
        self,
        min_count: int,
        max_count: int,
        size_range: SizeRange,
        label: Label = config.DEFAULT_ROOM_LABEL,
    ) -> Self:
        """Place between min_count and max_count non-overlapping rooms.

        Rooms only go where every covered cell is background. Rooms that
        cannot find space are skipped silently, so dense grids may end up with
        fewer rooms than requested.
        """
        layer = RoomPlacementLayer(min_count, max_count, size_range, label)
        return self.apply(layer, "spawn.rooms")

    def spawn_perlin(
        self, quantize: QuantizeFn, options: NoiseOptions | None = None
    ) -> Self:
        """Overwrite the whole grid with quantized Perlin noise.

        For every cell, quantize receives a noise value in [0, 1] and must
        return the label for that cell.

        Args:
            quantize: Pure function mapping a noise value to a label.
            options: Noise options for this call. Defaults to the generator's
                noise_options.
        """
        if options is None:
            options = self.noise_options
        return self.apply(NoiseFieldLayer(quantize, options), "spawn.noise")

    def spawn_repeated(self, label: Label, count: int) -> Self:
        """Scatter count small random-walk clusters of label.

        Clusters overwrite whatever they land on.
        """
        return self.apply(ClusterScatterLayer(label, count), "spawn.scatter")

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def dimensions(self) -> GridDimensions:
        return self.grid.dimensions()

    def get(self, x: int, y: int) -> Label:
        return self.grid.get(x, y)

    def to_rows(self) -> list[list[Label]]:
        return self.grid.to_rows()

    def to_flat(self) -> list[Label]:
        return self.grid.to_flat()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render_text(self, color: bool = False) -> str:
        """Render the grid as text, one row per line."""
        if color:
            return render.render_ansi(self.grid)
        return render.render_plain(self.grid)

    def show(self, color: bool | None = None) -> None:
        """Print the grid to stdout.

        Args:
            color: Use ANSI colours. Defaults to True when stdout is a
                terminal.
        """
        if color is None:
            color = sys.stdout.isatty()
        print(self.render_text(color=color))

    def __str__(self) -> str:
        return self.render_text(color=False)

    def __repr__(self) -> str:
        return (
            f"Generator(width={self.width}, height={self.height}, "
            f"background={self.grid.background}, seed={self.seed!r})"
        )
