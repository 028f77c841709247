"""Procedural generation of rectangular label maps.

Quick start:
    from procmap import Generator

    Generator(40, 10, seed=0).spawn_perlin(
        lambda value: 2 if value > 0.66 else 1 if value > 0.33 else 0
    ).show()
"""

from .generation import (
    ClusterScatterLayer,
    GenerationLayer,
    NoiseField,
    NoiseFieldLayer,
    NoiseOptions,
    PipelineGenerator,
    RoomPlacementLayer,
    SizeRange,
    TerrainGrowthLayer,
    banded,
    create_pipeline,
)
from .generator import Generator
from .grid import Grid, OutOfBoundsError

__all__ = [
    "ClusterScatterLayer",
    "GenerationLayer",
    "Generator",
    "Grid",
    "NoiseField",
    "NoiseFieldLayer",
    "NoiseOptions",
    "OutOfBoundsError",
    "PipelineGenerator",
    "RoomPlacementLayer",
    "SizeRange",
    "TerrainGrowthLayer",
    "banded",
    "create_pipeline",
]
