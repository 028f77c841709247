"""Coherent noise biomes.

NoiseFieldLayer samples 2D Perlin noise at every cell and maps each value to a
label with a caller-supplied quantization function. Unlike the other layers it
overwrites the whole grid, ignoring whatever was there before.

Noise values are normalized before quantization: raw Perlin output in [-1, 1]
is mapped to [0, 1], clipped, and raised to the redistribution exponent. The
quantization function therefore always receives a float in [0, 1].

See https://www.redblobgames.com/maps/terrain-from-noise/ for what frequency,
redistribution and octaves do to the resulting map.
"""

from __future__ import annotations

import bisect
import itertools
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import tcod

from procmap import config
from procmap.generation.layer import GenerationLayer
from procmap.grid import Grid, check_label

if TYPE_CHECKING:
    from procmap.types import Label, QuantizeFn
    from procmap.util.rng import RNG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoiseOptions:
    """Options controlling how the noise field looks.

    Attributes:
        frequency: Zoom level. Noise is sampled at x * frequency / width and
            y * frequency / width, so higher values pack more features in.
        redistribution: Exponent applied to normalized values. Above 1 pushes
            values toward 0 (more lowland), below 1 toward 1.
        octaves: Number of fractal octaves. 1 gives plain Perlin noise, more
            adds finer detail.
    """

    frequency: float = config.NOISE_FREQUENCY
    redistribution: float = config.NOISE_REDISTRIBUTION
    octaves: int = config.NOISE_OCTAVES

    def __post_init__(self) -> None:
        if self.frequency <= 0:
            raise ValueError(f"frequency must be positive, got {self.frequency}")
        if self.redistribution <= 0:
            raise ValueError(
                f"redistribution must be positive, got {self.redistribution}"
            )
        if self.octaves < 1:
            raise ValueError(f"octaves must be >= 1, got {self.octaves}")


class NoiseField:
    """A seeded 2D Perlin noise function sampled over grid cells."""

    def __init__(self, seed: int, options: NoiseOptions | None = None) -> None:
        self.seed = seed
        self.options = options if options is not None else NoiseOptions()
        self.noise = tcod.noise.Noise(
            dimensions=2,
            algorithm=tcod.noise.Algorithm.PERLIN,
            implementation=(
                tcod.noise.Implementation.FBM
                if self.options.octaves > 1
                else tcod.noise.Implementation.SIMPLE
            ),
            hurst=config.NOISE_HURST,
            lacunarity=config.NOISE_LACUNARITY,
            octaves=self.options.octaves,
            seed=seed,
        )

    def sample(self, width: int, height: int) -> np.ndarray:
        """Return normalized noise values for every cell.

        Returns:
            Float array of shape (width, height) with values in [0, 1],
            indexed as values[x, y].
        """
        # Both axes are scaled by width so cells stay square in noise space
        scale = self.options.frequency / width
        noise_grid = tcod.noise.grid(
            shape=(width, height),
            scale=scale,
            origin=(0, 0),
            indexing="ij",
        )
        raw = self.noise[noise_grid].astype(np.float64)
        normalized = np.clip((raw + 1.0) / 2.0, 0.0, 1.0)
        return normalized**self.options.redistribution


class NoiseFieldLayer(GenerationLayer):
    """Fills the entire grid with quantized Perlin noise."""

    def __init__(
        self,
        quantize: QuantizeFn,
        options: NoiseOptions | None = None,
        seed: int | None = None,
    ) -> None:
        """Initialize the noise layer.

        Args:
            quantize: Pure function mapping a value in [0, 1] to a label.
            options: Noise shape options. Defaults to NoiseOptions().
            seed: Fixed noise seed. When None a seed is drawn from the rng
                passed to apply(), so the field follows the generator's seed.
        """
        self.quantize = quantize
        self.options = options if options is not None else NoiseOptions()
        self.seed = seed

    def apply(self, grid: Grid, rng: RNG) -> None:
        """Overwrite every cell with its quantized noise value.

        The new labels are computed in full before the grid is touched, so a
        quantize function that raises leaves the grid unchanged.

        Args:
            grid: The grid to modify.
            rng: Random stream used to seed the noise when no seed was given.
        """
        seed = self.seed if self.seed is not None else rng.getrandbits(31)
        values = NoiseField(seed, self.options).sample(grid.width, grid.height)

        labels = np.empty((grid.width, grid.height), dtype=np.int32, order="F")
        for x in range(grid.width):
            for y in range(grid.height):
                labels[x, y] = check_label(self.quantize(float(values[x, y])))

        grid.cells[:, :] = labels
        logger.debug(
            f"Quantized noise (seed {seed}) over {grid.width}x{grid.height} grid "
            f"into {len(np.unique(labels))} labels"
        )


def banded(thresholds: Sequence[float]) -> QuantizeFn:
    """Build a quantize function that counts the thresholds a value exceeds.

    banded([0.33, 0.66]) maps values <= 0.33 to 0, values in (0.33, 0.66] to
    1 and values above 0.66 to 2.

    Raises:
        ValueError: If thresholds is empty or not sorted ascending.
    """
    bounds = tuple(float(t) for t in thresholds)
    if not bounds:
        raise ValueError("at least one threshold is required")
    if any(a > b for a, b in itertools.pairwise(bounds)):
        raise ValueError(f"thresholds must be ascending, got {list(bounds)}")

    def quantize(value: float) -> Label:
        return bisect.bisect_left(bounds, value)

    return quantize
