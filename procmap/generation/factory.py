"""Factory functions for creating pre-configured pipelines.

Currently implemented:
- "biomes": Perlin noise quantized into water, grassland and hills, with
  scattered forest clusters
- "dungeon": Rooms on solid background, with rubble clusters inside them
- "islands": Several terrain blobs grown over open water
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .layers import (
    ClusterScatterLayer,
    NoiseFieldLayer,
    NoiseOptions,
    RoomPlacementLayer,
    SizeRange,
    TerrainGrowthLayer,
)
from .pipeline import PipelineGenerator

if TYPE_CHECKING:
    from procmap.types import Label, RandomSeed

    from .layer import GenerationLayer

# Labels used by the presets
WATER: Label = 0
GRASSLAND: Label = 1
HILLS: Label = 2
FOREST: Label = 3
ROOM_FLOOR: Label = 1
RUBBLE: Label = 4
LAND: Label = 1


def three_bands(value: float) -> Label:
    """Quantize a noise value into water, grassland or hills."""
    if value > 0.66:
        return HILLS
    if value > 0.33:
        return GRASSLAND
    return WATER


def create_pipeline(
    name: str,
    width: int,
    height: int,
    seed: RandomSeed = None,
) -> PipelineGenerator:
    """Create a pre-configured pipeline by name.

    Available pipelines: "biomes", "dungeon", "islands".

    Args:
        name: Name of the pipeline configuration to use.
        width: Map width in cells.
        height: Map height in cells.
        seed: Optional random seed for deterministic generation.

    Returns:
        A configured PipelineGenerator ready to generate maps.

    Raises:
        ValueError: If the pipeline name is not recognized.
    """
    if name == "biomes":
        return create_biome_pipeline(width, height, seed)
    if name == "dungeon":
        return create_dungeon_pipeline(width, height, seed)
    if name == "islands":
        return create_island_pipeline(width, height, seed)
    raise ValueError(f"Unknown pipeline name: {name!r}")


def create_biome_pipeline(
    width: int,
    height: int,
    seed: RandomSeed = None,
    options: NoiseOptions | None = None,
) -> PipelineGenerator:
    """Noise-quantized biomes with forest clusters scattered on top."""
    if options is None:
        options = NoiseOptions(octaves=3)
    layers: list[GenerationLayer] = [
        NoiseFieldLayer(quantize=three_bands, options=options),
        ClusterScatterLayer(label=FOREST, count=max(1, width * height // 60)),
    ]
    return PipelineGenerator(layers, width, height, seed)


def create_dungeon_pipeline(
    width: int,
    height: int,
    seed: RandomSeed = None,
) -> PipelineGenerator:
    """Rooms on an empty background, then a little rubble."""
    max_side = max(2, min(width, height) // 3)
    size = SizeRange(
        width_range=(min(3, max_side), max_side),
        height_range=(min(3, max_side), max_side),
    )
    room_count = max(1, (width * height) // (max_side * max_side * 2))
    layers: list[GenerationLayer] = [
        RoomPlacementLayer(
            min_count=max(1, room_count // 2),
            max_count=room_count,
            size_range=size,
            label=ROOM_FLOOR,
        ),
        ClusterScatterLayer(label=RUBBLE, count=max(1, room_count // 2)),
    ]
    return PipelineGenerator(layers, width, height, seed)


def create_island_pipeline(
    width: int,
    height: int,
    seed: RandomSeed = None,
    island_count: int = 4,
) -> PipelineGenerator:
    """A handful of land masses grown over water."""
    island_size = max(1, (width * height) // (island_count * 4))
    layers: list[GenerationLayer] = [
        TerrainGrowthLayer(label=LAND, iterations=island_size)
        for _ in range(island_count)
    ]
    return PipelineGenerator(layers, width, height, seed, background=WATER)
