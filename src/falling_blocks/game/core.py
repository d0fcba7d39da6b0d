from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

import numpy as np

from .grid import Board
from .pieces import ActivePiece, place
from .rules import ScoringRules
from .sequencer import PieceSequencer
from .shapes import PREVIEW_HEIGHT, PREVIEW_WIDTH, Cell, Shape


logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to Tetris!"
GAME_OVER_MESSAGE = "You lost!"


class Command(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    UP_NUDGE = 3
    ROTATE_CCW = 4
    ROTATE_CW = 5
    DEBUG_CYCLE_SHAPE = 6
    NO_OP = 7


@dataclass
class GameConfig:
    drop_interval: float = 0.75  # seconds between automatic drops
    speedup_factor: float = 0.8
    speedup_every: int = 1000  # points
    min_drop_interval: float = 0.05
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.drop_interval <= 0:
            raise ValueError(f"drop_interval must be positive, got {self.drop_interval}")
        if not 0 < self.speedup_factor <= 1:
            raise ValueError(f"speedup_factor must be in (0, 1], got {self.speedup_factor}")
        if self.speedup_every <= 0:
            raise ValueError(f"speedup_every must be positive, got {self.speedup_every}")
        if not 0 < self.min_drop_interval <= self.drop_interval:
            raise ValueError(
                f"min_drop_interval must be in (0, drop_interval], got {self.min_drop_interval}"
            )


class Game:
    """Falling-block game state machine.

    `tick` is called once per external loop interval with at most one
    command. A game is over when `active_piece` is None; ticks are ignored
    from then on until `reset`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        sequencer: Optional[PieceSequencer] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.sequencer = sequencer or PieceSequencer(random.Random(self.config.random_seed))
        self.clock = clock or time.monotonic
        self.board = Board()
        self.active_piece: Optional[ActivePiece] = None
        self.reset()

    def reset(self) -> None:
        self.board.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.drop_interval = self.config.drop_interval
        self.message = WELCOME_MESSAGE
        first = self.sequencer.next(None)
        self.active_piece = place(first, self.board)
        self.next_shape: Shape = self.sequencer.next(first)
        self.last_drop = self.clock()

    @property
    def game_over(self) -> bool:
        return self.active_piece is None

    def tick(self, command: Command = Command.NO_OP) -> None:
        if self.active_piece is None:
            return

        self._apply(command)

        interval = self.drop_interval
        if self.clock() - self.last_drop >= interval:
            if self.active_piece.can_move_down(self.board):
                self.active_piece = self.active_piece.move_down(self.board)
            else:
                self._lock_piece()
            self.last_drop += interval

    def _apply(self, command: Command) -> None:
        piece = self.active_piece
        assert piece is not None
        board = self.board
        if command == Command.LEFT:
            piece = piece.move_left(board)
        elif command == Command.RIGHT:
            piece = piece.move_right(board)
        elif command == Command.SOFT_DROP:
            piece = piece.move_down(board)
        elif command == Command.UP_NUDGE:
            piece = piece.move_up(board)
        elif command == Command.ROTATE_CCW:
            piece = piece.rotate_ccw(board)
        elif command == Command.ROTATE_CW:
            piece = piece.rotate_cw(board)
        elif command == Command.DEBUG_CYCLE_SHAPE:
            piece = piece.cycle_shape()
        self.active_piece = piece

    def _lock_piece(self) -> None:
        piece = self.active_piece
        assert piece is not None
        self.board.lock(piece.cells(), piece.cell_type())
        self.pieces_locked += 1
        logger.debug("Locked %s at %s", piece.shape.kind.name, piece.anchor)

        lines = self.board.clear_full_rows()
        self._score_lines(lines)

        self.active_piece = place(self.next_shape, self.board)
        self.next_shape = self.sequencer.next(self.next_shape)
        if self.active_piece is None:
            self.message = GAME_OVER_MESSAGE
            logger.info("Game over with score %d after %d pieces", self.score, self.pieces_locked)

    def _score_lines(self, lines: int) -> None:
        self.message = self.rules.message_for_lines(lines)
        if lines == 0:
            return
        self.lines_cleared_total += lines
        before = self.score
        self.score += self.rules.score_for_lines(lines)
        logger.debug("Cleared %d rows, score %d -> %d", lines, before, self.score)

        every = self.config.speedup_every
        for _ in range(self.score // every - before // every):
            self.drop_interval = max(
                self.drop_interval * self.config.speedup_factor,
                self.config.min_drop_interval,
            )
            logger.debug("Drop interval now %.3fs", self.drop_interval)

    def render_board(self) -> np.ndarray:
        grid = self.board.clone_state()
        piece = self.active_piece
        if piece is not None:
            ghost_tag = piece.ghost_cell_type()
            for row, col in piece.drop_position(self.board).cells():
                grid[row, col] = ghost_tag
            tag = piece.cell_type()
            for row, col in piece.cells():
                grid[row, col] = tag
        return grid

    def render_next_piece(self) -> np.ndarray:
        preview = np.zeros((PREVIEW_HEIGHT, PREVIEW_WIDTH), dtype=np.int8)
        tag = self.next_shape.cell_type()
        for row, col in self.next_shape.preview_offsets():
            preview[row, col] = tag
        return preview

    def render_message(self) -> str:
        return self.message

    def render_score(self) -> int:
        return self.score

    def render_text(self) -> str:
        lines = []
        for row in self.render_board():
            lines.append("".join(_cell_text(Cell(int(value))) for value in row))
        return "\n".join(lines) + "\n"

    def get_state(self) -> dict:
        return {
            "board": self.render_board(),
            "next_piece": int(self.next_shape.kind),
            "score": self.score,
            "lines_cleared_total": self.lines_cleared_total,
            "pieces_locked": self.pieces_locked,
            "drop_interval": self.drop_interval,
            "game_over": self.game_over,
            "message": self.message,
        }


def _cell_text(cell: Cell) -> str:
    if cell == Cell.EMPTY:
        return "  "
    if cell.is_ghost:
        return "[]"
    return "██"
