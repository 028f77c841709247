"""Map generation algorithms for procmap.

Each algorithm is a GenerationLayer that mutates a Grid in place:
- TerrainGrowthLayer: Randomized flood-fill growth from one seed cell
- RoomPlacementLayer: Non-overlapping rectangular rooms
- NoiseFieldLayer: Perlin noise quantized into labels
- ClusterScatterLayer: Many small random-walk blobs

Layers are normally driven through the fluent Generator API. The
PipelineGenerator runs a prepared list of layers instead, and create_pipeline
builds named presets.
"""

from .factory import create_pipeline
from .layer import GenerationLayer
from .layers import (
    ClusterScatterLayer,
    NoiseField,
    NoiseFieldLayer,
    NoiseOptions,
    RoomPlacementLayer,
    SizeRange,
    TerrainGrowthLayer,
    banded,
)
from .pipeline import PipelineGenerator

__all__ = [
    "ClusterScatterLayer",
    "GenerationLayer",
    "NoiseField",
    "NoiseFieldLayer",
    "NoiseOptions",
    "PipelineGenerator",
    "RoomPlacementLayer",
    "SizeRange",
    "TerrainGrowthLayer",
    "banded",
    "create_pipeline",
]
