from __future__ import annotations

from typing import Dict, Tuple

import numpy as np

from falling_blocks.game import Cell, ShapeKind


Color = Tuple[int, int, int]

EMPTY_COLOR: Color = (20, 20, 26)

SHAPE_COLORS: Dict[ShapeKind, Color] = {
    ShapeKind.I: (49, 199, 239),
    ShapeKind.J: (90, 101, 173),
    ShapeKind.L: (239, 121, 33),
    ShapeKind.O: (247, 211, 8),
    ShapeKind.S: (72, 208, 72),
    ShapeKind.T: (173, 77, 156),
    ShapeKind.Z: (239, 32, 41),
}


def color_for_value(v: int) -> Color:
    kind = Cell(v).kind
    if kind is None:
        return EMPTY_COLOR
    return SHAPE_COLORS[kind]


def board_to_rgb(state: np.ndarray, cell: int = 12) -> np.ndarray:
    """Paint a grid of cell tags as an RGB image, `cell` pixels per cell.

    Ghost cells are drawn at half brightness.
    """
    h, w = state.shape
    img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
    for y in range(h):
        for x in range(w):
            v = int(state[y, x])
            color = np.array(color_for_value(v), dtype=np.uint8)
            if v != Cell.EMPTY and Cell(v).is_ghost:
                color = color // 2
            img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
    return img
