from __future__ import annotations

from collections.abc import Iterable

from crucible_path.grid import CostGrid
from crucible_path.models import Position

PATH_GLYPH = "*"


def path_cells(path: Iterable[Position]) -> set[Position]:
    return set(path)


def render_path(grid: CostGrid, path: Iterable[Position] | None, glyph: str = PATH_GLYPH) -> str:
    """Draw the grid as digits, with every cell on ``path`` shown as ``glyph``."""

    marked = path_cells(path or [])
    lines = []
    for row_index, row in enumerate(grid.cells):
        lines.append(
            "".join(
                glyph if (row_index, col_index) in marked else str(value)
                for col_index, value in enumerate(row)
            )
        )
    return "\n".join(lines)
