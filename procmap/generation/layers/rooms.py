"""Rectangular room placement.

RoomPlacementLayer stamps axis-aligned rectangles of a label onto the grid.
A room is only committed where every cell it covers is still background, so
rooms never overlap each other or anything placed by earlier operations.
Placement is best-effort: a room that cannot find free space within
config.ROOM_PLACEMENT_ATTEMPTS random positions is skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from procmap import config
from procmap.generation.layer import GenerationLayer
from procmap.util.coordinates import Rect

if TYPE_CHECKING:
    from procmap.grid import Grid
    from procmap.types import IntRange, Label
    from procmap.util.rng import RNG

logger = logging.getLogger(__name__)


def _check_range(name: str, value: IntRange, minimum: int) -> None:
    low, high = value
    if low < minimum:
        raise ValueError(f"{name} minimum must be >= {minimum}, got {low}")
    if low > high:
        raise ValueError(f"{name} minimum {low} is greater than maximum {high}")


@dataclass(frozen=True)
class SizeRange:
    """Inclusive width and height ranges for sampling room dimensions.

    Attributes:
        width_range: (min, max) room width in cells.
        height_range: (min, max) room height in cells.
    """

    width_range: IntRange
    height_range: IntRange

    def __post_init__(self) -> None:
        _check_range("width_range", self.width_range, 0)
        _check_range("height_range", self.height_range, 0)

    @classmethod
    def from_bounds(cls, min_size: IntRange, max_size: IntRange) -> SizeRange:
        """Build from (min_width, min_height) and (max_width, max_height)."""
        return cls(
            width_range=(min_size[0], max_size[0]),
            height_range=(min_size[1], max_size[1]),
        )

    def sample(self, rng: RNG, max_width: int, max_height: int) -> tuple[int, int]:
        """Draw a (width, height) pair, clamped to fit a max_width x max_height grid.

        A sampled 0 is raised to 1 so every room covers at least one cell.
        """
        width = rng.randint(*self.width_range)
        height = rng.randint(*self.height_range)
        return (
            min(max(width, 1), max_width),
            min(max(height, 1), max_height),
        )


class RoomPlacementLayer(GenerationLayer):
    """Places non-overlapping rectangular rooms at random positions."""

    def __init__(
        self,
        min_count: int,
        max_count: int,
        size_range: SizeRange,
        label: Label = config.DEFAULT_ROOM_LABEL,
        max_attempts: int = config.ROOM_PLACEMENT_ATTEMPTS,
    ) -> None:
        """Initialize the room placement layer.

        Args:
            min_count: Fewest rooms to attempt.
            max_count: Most rooms to attempt. The actual number attempted is
                drawn uniformly from [min_count, max_count].
            size_range: Dimensions to sample each room from.
            label: Label written into every room cell.
            max_attempts: Random positions tried per room before giving up.

        Raises:
            ValueError: If the counts are negative or min_count > max_count,
                or max_attempts is not positive.
        """
        _check_range("room count", (min_count, max_count), 0)
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self.min_count = min_count
        self.max_count = max_count
        self.size_range = size_range
        self.label = label
        self.max_attempts = max_attempts
        # Rooms committed by the most recent apply(), for inspection
        self.placed_rooms: list[Rect] = []

    def apply(self, grid: Grid, rng: RNG) -> None:
        """Place rooms on the grid.

        Args:
            grid: The grid to modify.
            rng: Random stream for counts, sizes and positions.

        Raises:
            ValueError: If the label is the grid's background label.
        """
        grid.check_foreground(self.label)
        self.placed_rooms = []
        requested = rng.randint(self.min_count, self.max_count)

        for _ in range(requested):
            room = self._place_room(grid, rng)
            if room is not None:
                self.placed_rooms.append(room)

        if len(self.placed_rooms) < requested:
            logger.debug(
                f"Placed {len(self.placed_rooms)} of {requested} rooms "
                f"(label {self.label}); the rest found no free space"
            )
        else:
            logger.debug(f"Placed {requested} rooms (label {self.label})")

    def _place_room(self, grid: Grid, rng: RNG) -> Rect | None:
        """Try to commit a single room, returning its Rect or None if skipped."""
        width, height = self.size_range.sample(rng, grid.width, grid.height)

        for _ in range(self.max_attempts):
            x = rng.randint(0, grid.width - width)
            y = rng.randint(0, grid.height - height)
            candidate = Rect(x, y, width, height)

            if grid.is_region_background(candidate):
                grid.fill_rect(candidate, self.label)
                return candidate

        return None
