"""Rectangles and bounds checks in grid cell coordinates."""

from __future__ import annotations

from procmap.types import TileCoord, TilePos


class Rect:
    """Rectangle/bounding box in cell coordinates.

    x2 and y2 are exclusive: a Rect(0, 0, 3, 2) covers columns 0-2 and rows 0-1.
    """

    def __init__(self, x: TileCoord, y: TileCoord, w: TileCoord, h: TileCoord) -> None:
        self.x1: TileCoord = x
        self.y1: TileCoord = y
        self.x2: TileCoord = x + w
        self.y2: TileCoord = y + h

    @property
    def width(self) -> TileCoord:
        return self.x2 - self.x1

    @property
    def height(self) -> TileCoord:
        return self.y2 - self.y1

    @property
    def area(self) -> int:
        return self.width * self.height

    def overlaps(self, other: Rect) -> bool:
        """True if the two rectangles share at least one cell.

        Rectangles that merely touch along an edge do not overlap.
        """
        return (
            self.x1 < other.x2
            and self.x2 > other.x1
            and self.y1 < other.y2
            and self.y2 > other.y1
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return (self.x1, self.y1, self.x2, self.y2) == (
            other.x1,
            other.y1,
            other.x2,
            other.y2,
        )

    def __hash__(self) -> int:
        return hash((self.x1, self.y1, self.x2, self.y2))

    def __repr__(self) -> str:
        return f"Rect(x1={self.x1}, y1={self.y1}, x2={self.x2}, y2={self.y2})"


# =============================================================================
# BOUNDS CHECKING HELPERS
# =============================================================================


def is_valid_tile_pos(pos: TilePos, width: TileCoord, height: TileCoord) -> bool:
    """Check if a cell position is within grid bounds."""
    x, y = pos
    return 0 <= x < width and 0 <= y < height


def rect_fits(rect: Rect, width: TileCoord, height: TileCoord) -> bool:
    """Check if a rectangle lies entirely within grid bounds."""
    return (
        rect.width > 0
        and rect.height > 0
        and rect.x1 >= 0
        and rect.y1 >= 0
        and rect.x2 <= width
        and rect.y2 <= height
    )
