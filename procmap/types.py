from __future__ import annotations

from collections.abc import Callable

# =============================================================================
# SPATIAL TYPES
# =============================================================================

TileCoord = int  # Always integer cell position

# Grid coordinates - absolute positions on the generated map
TilePos = tuple[TileCoord, TileCoord]  # Example: (5, 3) = column 5, row 3

# Dimensions of a grid or rectangle in cells
GridDimensions = tuple[int, int]  # Example: (40, 10) = 40 wide, 10 tall

# Inclusive integer range used for sampling sizes and counts
IntRange = tuple[int, int]  # Example: (4, 10) = anything from 4 to 10

# =============================================================================
# GENERATION TYPES
# =============================================================================

# Cell label. Arbitrary caller-chosen integer (terrain type, room marker, biome).
# The grid never interprets labels beyond comparing them to the background.
Label = int

# Maps a normalized noise value in [0.0, 1.0] to a label. Must be pure: the
# same value always yields the same label.
QuantizeFn = Callable[[float], Label]

# Random seed for deterministic generation.
# Can be an int for numeric seeds or a descriptive string like "burrito1".
RandomSeed = int | str | None
