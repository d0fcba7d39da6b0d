from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .shapes import Cell


Coordinate = Tuple[int, int]  # (row, col)

WIDTH = 10
HEIGHT = 20


class Board:
    """Fixed 10x20 grid of settled cells.

    Row 0 is the top row. Cells hold `Cell` tag values; `Cell.EMPTY` (0)
    marks a free cell. The grid is only written by `lock` and by the row
    shifting in `clear_full_rows`.
    """

    def __init__(self) -> None:
        self.width = WIDTH
        self.height = HEIGHT
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(Cell.EMPTY)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def cell(self, row: int, col: int) -> Cell:
        if not self.is_inside(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside the board")
        return Cell(int(self.grid[row, col]))

    def is_empty(self, row: int, col: int) -> bool:
        return self.is_inside(row, col) and self.grid[row, col] == Cell.EMPTY

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for row, col in cells:
            if not self.is_empty(row, col):
                return False
        return True

    def lock(self, cells: Iterable[Coordinate], tag: Cell) -> None:
        """Write `tag` into every cell. Occupied cells are overwritten."""
        cells = list(cells)
        for row, col in cells:
            if not self.is_inside(row, col):
                raise IndexError(f"Cannot lock cell ({row}, {col}) outside the board")
        for row, col in cells:
            self.grid[row, col] = tag

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row, :] != Cell.EMPTY))

    def clear_full_rows(self) -> int:
        """Remove full rows bottom-up and return how many were cleared."""
        cleared = 0
        row = self.height - 1
        while row >= 0:
            if self.is_row_full(row):
                self._shift_rows_down(row)
                cleared += 1
                # The shifted row now at `row` may be full as well.
                continue
            row -= 1
        return cleared

    def _shift_rows_down(self, cleared_row: int) -> None:
        if cleared_row > 0:
            self.grid[1 : cleared_row + 1, :] = self.grid[0:cleared_row, :].copy()
        self.grid[0, :] = Cell.EMPTY

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
