"""The label grid every generation operation mutates."""

from __future__ import annotations

import operator

import numpy as np

from procmap import config
from procmap.types import GridDimensions, Label, TileCoord, TilePos
from procmap.util.coordinates import Rect, is_valid_tile_pos, rect_fits

# Up, down, left, right. Order is fixed so neighbor lists are deterministic.
NEIGHBOR_OFFSETS_4: tuple[TilePos, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))

_LABEL_INFO = np.iinfo(np.int32)


class OutOfBoundsError(IndexError):
    """Raised when a cell coordinate falls outside the grid.

    Generation layers only ever produce in-bounds coordinates, so seeing this
    from inside a layer means the layer has a bug.
    """

    pass


def check_label(label: Label) -> Label:
    """Return label as a plain int, rejecting values the grid cannot store.

    Raises:
        TypeError: If label is not an integer (floats are not truncated).
        ValueError: If label does not fit in the int32 cell array.
    """
    value = operator.index(label)
    if not _LABEL_INFO.min <= value <= _LABEL_INFO.max:
        raise ValueError(f"label {value} does not fit in a 32-bit cell")
    return value


class Grid:
    """Fixed-size 2D array of integer labels.

    Cells are stored in a numpy array of shape (width, height) indexed as
    cells[x, y]. The array uses Fortran order, so the flattened view
    ``cells.ravel(order="F")`` is the row-major sequence where cell (x, y) sits
    at index ``x + y * width``.

    The grid is label-agnostic: any integer is a valid label, and only the
    background label has special meaning (it marks cells no operation has
    claimed yet).
    """

    def __init__(
        self,
        width: TileCoord,
        height: TileCoord,
        background: Label = config.BACKGROUND_LABEL,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError(
                f"Grid dimensions must be positive, got {width}x{height}"
            )
        self.width = width
        self.height = height
        self.background = check_label(background)
        self.cells = np.full(
            (width, height),
            fill_value=self.background,
            dtype=np.int32,
            order="F",
        )

    # -------------------------------------------------------------------------
    # Cell access
    # -------------------------------------------------------------------------

    def dimensions(self) -> GridDimensions:
        return (self.width, self.height)

    def in_bounds(self, x: TileCoord, y: TileCoord) -> bool:
        return is_valid_tile_pos((x, y), self.width, self.height)

    def _check_bounds(self, x: TileCoord, y: TileCoord) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(
                f"({x}, {y}) is outside the {self.width}x{self.height} grid"
            )

    def get(self, x: TileCoord, y: TileCoord) -> Label:
        """Return the label at (x, y)."""
        self._check_bounds(x, y)
        return int(self.cells[x, y])

    def set(self, x: TileCoord, y: TileCoord, label: Label) -> None:
        """Overwrite the label at (x, y), whatever it currently holds."""
        self._check_bounds(x, y)
        self.cells[x, y] = check_label(label)

    def is_background(self, x: TileCoord, y: TileCoord) -> bool:
        return self.get(x, y) == self.background

    def neighbors4(self, x: TileCoord, y: TileCoord) -> list[TilePos]:
        """Return the in-bounds up/down/left/right neighbors of (x, y).

        Neighbors that would fall off the grid are left out, so edge cells
        have three neighbors and corner cells two.
        """
        self._check_bounds(x, y)
        return [
            (x + dx, y + dy)
            for dx, dy in NEIGHBOR_OFFSETS_4
            if 0 <= x + dx < self.width and 0 <= y + dy < self.height
        ]

    # -------------------------------------------------------------------------
    # Bulk operations
    # -------------------------------------------------------------------------

    def fill(self, label: Label) -> None:
        self.cells[:, :] = check_label(label)

    def check_foreground(self, label: Label) -> None:
        """Raise ValueError if label is the background label.

        Layers that only claim background cells need the cells they write to
        stop counting as background.
        """
        if label == self.background:
            raise ValueError(
                f"label {label} is the background label and cannot be placed"
            )

    def is_region_background(self, rect: Rect) -> bool:
        """True if every cell inside rect still holds the background label."""
        if not rect_fits(rect, self.width, self.height):
            raise OutOfBoundsError(
                f"{rect!r} does not fit inside the {self.width}x{self.height} grid"
            )
        region = self.cells[rect.x1 : rect.x2, rect.y1 : rect.y2]
        return bool(np.all(region == self.background))

    def fill_rect(self, rect: Rect, label: Label) -> None:
        if not rect_fits(rect, self.width, self.height):
            raise OutOfBoundsError(
                f"{rect!r} does not fit inside the {self.width}x{self.height} grid"
            )
        self.cells[rect.x1 : rect.x2, rect.y1 : rect.y2] = check_label(label)

    def copy(self) -> Grid:
        clone = Grid(self.width, self.height, self.background)
        clone.cells[:, :] = self.cells
        return clone

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def to_rows(self) -> list[list[Label]]:
        """Return the grid as a list of rows, top row first."""
        return self.cells.T.tolist()

    def to_flat(self) -> list[Label]:
        """Return the grid as one row-major list of length width * height."""
        return self.cells.ravel(order="F").tolist()

    def label_counts(self) -> dict[Label, int]:
        """Number of cells holding each label present on the grid."""
        labels, counts = np.unique(self.cells, return_counts=True)
        return {
            int(label): int(count) for label, count in zip(labels, counts, strict=True)
        }

    def positions_of(self, label: Label) -> list[TilePos]:
        """All cells holding label, in row-major order."""
        xs, ys = np.nonzero(self.cells == label)
        return sorted(
            ((int(x), int(y)) for x, y in zip(xs, ys, strict=True)),
            key=lambda pos: (pos[1], pos[0]),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.dimensions() == other.dimensions() and bool(
            np.array_equal(self.cells, other.cells)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Grid(width={self.width}, height={self.height}, "
            f"background={self.background})"
        )
