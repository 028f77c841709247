"""Renderers that turn a finished grid into something a person can look at.

None of this is needed to generate a map; the generation code only produces
the label grid. Three views are provided:

- render_plain: rows of space-separated labels
- render_ansi: the same text with one terminal colour per label
- render_console: a tcod Console with one glyph and colour per cell
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import tcod
from colorama import Fore, Style

from procmap import colors, config

if TYPE_CHECKING:
    from procmap.grid import Grid
    from procmap.types import Label

# Glyphs used by render_console, indexed by label modulo their count
_CONSOLE_GLYPHS = "0123456789abcdefghijklmnopqrstuvwxyz"


def label_color_name(label: Label) -> str:
    """Name of the colour assigned to label from config.LABEL_COLOR_CYCLE."""
    return config.LABEL_COLOR_CYCLE[label % len(config.LABEL_COLOR_CYCLE)]


def render_plain(grid: Grid) -> str:
    """Render rows of space-separated labels, top row first."""
    return "\n".join(" ".join(str(label) for label in row) for row in grid.to_rows())


def render_ansi(grid: Grid) -> str:
    """Render like render_plain, wrapping each label in its ANSI colour."""
    lines = []
    for row in grid.to_rows():
        cells = [
            f"{getattr(Fore, label_color_name(label).upper())}{label}{Style.RESET_ALL}"
            for label in row
        ]
        lines.append(" ".join(cells))
    return "\n".join(lines)


def render_console(grid: Grid) -> tcod.console.Console:
    """Draw the grid onto a new tcod Console of the same size.

    Each cell gets a single glyph (labels 0-9 show as digits, larger labels
    wrap through letters) in its label's colour on a black background.
    """
    console = tcod.console.Console(grid.width, grid.height, order="F")
    for x in range(grid.width):
        for y in range(grid.height):
            label = int(grid.cells[x, y])
            console.ch[x, y] = ord(_CONSOLE_GLYPHS[label % len(_CONSOLE_GLYPHS)])
            console.fg[x, y] = colors.BY_NAME[label_color_name(label)]
            console.bg[x, y] = colors.BLACK
    return console
