"""
Configuration constants.

Centralizes the tunable numbers used by the generation layers, the renderers
and the command line harness. Organized by functional area.
"""

from procmap.types import Label, RandomSeed

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = "burrito1"
RANDOM_SEED: RandomSeed = None

# Label every cell holds before any operation touches it
BACKGROUND_LABEL: Label = 0

# =============================================================================
# ROOM PLACEMENT
# =============================================================================

# Label written by spawn_rooms() when the caller does not pass one
DEFAULT_ROOM_LABEL: Label = 1

# Random positions tried per room before that room is skipped
ROOM_PLACEMENT_ATTEMPTS = 30

# =============================================================================
# CLUSTER SCATTER
# =============================================================================

# Each cluster is its seed cell plus a random walk of this many extra steps
CLUSTER_MIN_WALK_STEPS = 1
CLUSTER_MAX_WALK_STEPS = 4

# =============================================================================
# NOISE
# =============================================================================

# Noise coordinates are x * frequency / width and y * frequency / width, so
# frequency is roughly the number of noise features across the map.
NOISE_FREQUENCY = 4.0
# Exponent applied to the normalized [0, 1] value (>1 pushes values down)
NOISE_REDISTRIBUTION = 1.0
# 1 = plain Perlin, more octaves layer finer detail on top
NOISE_OCTAVES = 1
# Fractal parameters used when NOISE_OCTAVES > 1
NOISE_LACUNARITY = 2.0
NOISE_HURST = 0.5

# =============================================================================
# RENDERING
# =============================================================================

# Colour per label is LABEL_COLOR_CYCLE[label % len(LABEL_COLOR_CYCLE)].
# Index 0 doubles as the colour of the background label.
LABEL_COLOR_CYCLE: tuple[str, ...] = (
    "blue",
    "red",
    "green",
    "cyan",
    "magenta",
    "white",
    "yellow",
)

# =============================================================================
# COMMAND LINE
# =============================================================================

CLI_DEFAULT_WIDTH = 40
CLI_DEFAULT_HEIGHT = 10
