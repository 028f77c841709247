"""Generation layers, one per algorithm."""

from .noise import NoiseField, NoiseFieldLayer, NoiseOptions, banded
from .rooms import RoomPlacementLayer, SizeRange
from .scatter import ClusterScatterLayer
from .terrain import TerrainGrowthLayer

__all__ = [
    "ClusterScatterLayer",
    "NoiseField",
    "NoiseFieldLayer",
    "NoiseOptions",
    "RoomPlacementLayer",
    "SizeRange",
    "TerrainGrowthLayer",
    "banded",
]
