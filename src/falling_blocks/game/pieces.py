from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .grid import Board, Coordinate
from .shapes import Cell, Shape


PIECE_START_ROW = 1
PIECE_START_COL = 5
DEBUG_ROW = 5
DEBUG_COL = 5


@dataclass(frozen=True)
class ActivePiece:
    """The falling piece: a shape anchored at (row, col).

    Every operation returns a piece; when the candidate position is illegal
    the original piece is returned unchanged.
    """

    shape: Shape
    row: int = PIECE_START_ROW
    col: int = PIECE_START_COL

    def cells(self) -> List[Coordinate]:
        return [(self.row + drow, self.col + dcol) for drow, dcol in self.shape.offsets()]

    def is_valid(self, board: Board) -> bool:
        return board.can_place(self.cells())

    def _commit(self, candidate: "ActivePiece", board: Board) -> "ActivePiece":
        return candidate if candidate.is_valid(board) else self

    def move(self, drow: int, dcol: int, board: Board) -> "ActivePiece":
        return self._commit(replace(self, row=self.row + drow, col=self.col + dcol), board)

    def move_left(self, board: Board) -> "ActivePiece":
        return self.move(0, -1, board)

    def move_right(self, board: Board) -> "ActivePiece":
        return self.move(0, 1, board)

    def move_down(self, board: Board) -> "ActivePiece":
        return self.move(1, 0, board)

    def move_up(self, board: Board) -> "ActivePiece":
        return self.move(-1, 0, board)

    def can_move_down(self, board: Board) -> bool:
        return replace(self, row=self.row + 1).is_valid(board)

    def rotate_cw(self, board: Board) -> "ActivePiece":
        return self._commit(replace(self, shape=self.shape.rotated_cw()), board)

    def rotate_ccw(self, board: Board) -> "ActivePiece":
        return self._commit(replace(self, shape=self.shape.rotated_ccw()), board)

    def cycle_shape(self) -> "ActivePiece":
        # Debugging aid: skips collision checks entirely.
        return ActivePiece(self.shape.next_in_cycle(), DEBUG_ROW, DEBUG_COL)

    def drop_position(self, board: Board) -> "ActivePiece":
        """Where the piece would come to rest if dropped straight down."""
        piece = self
        while piece.can_move_down(board):
            piece = piece.move_down(board)
        return piece

    def cell_type(self) -> Cell:
        return self.shape.cell_type()

    def ghost_cell_type(self) -> Cell:
        return self.shape.ghost_cell_type()

    @property
    def anchor(self) -> Tuple[int, int]:
        return self.row, self.col


def place(shape: Shape, board: Board) -> Optional[ActivePiece]:
    """Spawn `shape` at the start anchor pushed to its highest legal row.

    Returns None when even the normalized position collides, which is the
    game-over condition.
    """
    piece = ActivePiece(shape, PIECE_START_ROW, PIECE_START_COL)
    while True:
        raised = piece.move_up(board)
        if raised is piece:
            break
        piece = raised
    if not piece.is_valid(board):
        return None
    return piece
