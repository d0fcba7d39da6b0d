from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from falling_blocks.game import Cell, Game
from .palette import EMPTY_COLOR, color_for_value


BACKGROUND = (10, 10, 14)
TEXT_COLOR = (230, 230, 230)


class Renderer:
    def __init__(self, cell_size: int = 28, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font = None

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def window_size(self, game: Game) -> Tuple[int, int]:
        h, w = game.board.height, game.board.width
        side_panel_w = 6 * self.cell_size
        width = self.margin * 3 + w * self.cell_size + side_panel_w
        height = self.margin * 3 + h * self.cell_size + 24
        return width, height

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                if v != Cell.EMPTY and Cell(v).is_ghost:
                    # Ghost cells are outlines in the shape color
                    pygame.draw.rect(surf, EMPTY_COLOR, rect)
                    pygame.draw.rect(surf, color_for_value(v), rect, 2)
                else:
                    pygame.draw.rect(surf, color_for_value(v), rect)
        return surf

    def draw(self, screen: pygame.Surface, game: Game) -> None:
        board = game.render_board()
        h, w = board.shape
        screen.fill(BACKGROUND)
        screen.blit(self._grid_surface(board), (self.margin, self.margin))

        x0 = self.margin * 2 + w * self.cell_size
        y0 = self.margin
        screen.blit(self.font.render("Next", True, TEXT_COLOR), (x0, y0))
        screen.blit(self._grid_surface(game.render_next_piece()), (x0, y0 + 24))
        score_y = y0 + 24 + 3 * self.cell_size
        screen.blit(self.font.render(f"Score: {game.render_score()}", True, TEXT_COLOR), (x0, score_y))

        msg = self.font.render(game.render_message(), True, TEXT_COLOR)
        rect = msg.get_rect(center=(self.margin + w * self.cell_size // 2, self.margin * 2 + h * self.cell_size))
        screen.blit(msg, rect)
