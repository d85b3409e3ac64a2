from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from crucible_path.errors import MalformedGrid, OutOfBounds
from crucible_path.models import Direction, Position


@dataclass(frozen=True)
class CostGrid:
    """Immutable row-major matrix of non-negative traversal costs."""

    cells: tuple[tuple[int, ...], ...]

    def __post_init__(self) -> None:
        if not self.cells:
            raise MalformedGrid("Grid must have at least one row")
        expected = len(self.cells[0])
        if expected == 0:
            raise MalformedGrid("Grid rows must have at least one cell")
        for row_index, row in enumerate(self.cells):
            if len(row) != expected:
                raise MalformedGrid(
                    f"Row {row_index} has {len(row)} cells, expected {expected}"
                )
            for col_index, value in enumerate(row):
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise MalformedGrid(
                        f"Cell ({row_index}, {col_index}) must be a non-negative integer, got {value!r}"
                    )

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[int]]) -> "CostGrid":
        return cls(cells=tuple(tuple(row) for row in rows))

    @property
    def width(self) -> int:
        return len(self.cells[0])

    @property
    def height(self) -> int:
        return len(self.cells)

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.height and 0 <= col < self.width

    def cost_at(self, pos: Position) -> int:
        if not self.in_bounds(pos):
            raise OutOfBounds(f"Position {pos} is outside a {self.height}x{self.width} grid")
        row, col = pos
        return self.cells[row][col]

    def step(self, pos: Position, direction: Direction) -> Position | None:
        d_row, d_col = direction.delta
        nxt = (pos[0] + d_row, pos[1] + d_col)
        return nxt if self.in_bounds(nxt) else None

    def neighbors4(self, pos: Position) -> list[Position]:
        candidates = [self.step(pos, direction) for direction in Direction]
        return [cell for cell in candidates if cell is not None]

    def corner(self) -> Position:
        return (self.height - 1, self.width - 1)

    def rows(self) -> list[list[int]]:
        return [list(row) for row in self.cells]
