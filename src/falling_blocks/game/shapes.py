from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple


Offset = Tuple[int, int]  # (drow, dcol)


class ShapeTableError(LookupError):
    """Raised for a (shape, rotation) pair that has no entry in the table.

    Reaching this means a rotation index escaped its valid range somewhere;
    it is never handled by the engine.
    """


class ShapeKind(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


class Cell(IntEnum):
    """Occupancy tag of a single board cell."""

    EMPTY = 0
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7
    I_GHOST = 8
    J_GHOST = 9
    L_GHOST = 10
    O_GHOST = 11
    S_GHOST = 12
    T_GHOST = 13
    Z_GHOST = 14

    @property
    def is_ghost(self) -> bool:
        return self >= Cell.I_GHOST

    @property
    def kind(self) -> ShapeKind | None:
        if self == Cell.EMPTY:
            return None
        return ShapeKind((self - 1) % len(ShapeKind) + 1)


ROTATION_STATES: Dict[ShapeKind, int] = {
    ShapeKind.I: 2,
    ShapeKind.J: 4,
    ShapeKind.L: 4,
    ShapeKind.O: 1,
    ShapeKind.S: 2,
    ShapeKind.T: 4,
    ShapeKind.Z: 2,
}


OFFSETS: Dict[Tuple[ShapeKind, int], Tuple[Offset, ...]] = {
    (ShapeKind.I, 0): ((0, -1), (0, 0), (0, 1), (0, 2)),
    (ShapeKind.I, 1): ((-1, 0), (0, 0), (1, 0), (2, 0)),
    (ShapeKind.J, 0): ((-1, -1), (0, -1), (0, 0), (0, 1)),
    (ShapeKind.J, 1): ((-1, 1), (-1, 0), (0, 0), (1, 0)),
    (ShapeKind.J, 2): ((1, 1), (0, 1), (0, 0), (0, -1)),
    (ShapeKind.J, 3): ((1, -1), (1, 0), (0, 0), (-1, 0)),
    (ShapeKind.L, 0): ((0, -1), (0, 0), (0, 1), (-1, 1)),
    (ShapeKind.L, 1): ((-1, 0), (0, 0), (1, 0), (1, 1)),
    (ShapeKind.L, 2): ((0, 1), (0, 0), (0, -1), (1, -1)),
    (ShapeKind.L, 3): ((1, 0), (0, 0), (-1, 0), (-1, -1)),
    (ShapeKind.O, 0): ((0, 0), (1, 0), (0, 1), (1, 1)),
    (ShapeKind.S, 0): ((1, -1), (1, 0), (0, 0), (0, 1)),
    (ShapeKind.S, 1): ((-1, -1), (0, -1), (0, 0), (1, 0)),
    (ShapeKind.T, 0): ((-1, 0), (0, 0), (0, -1), (0, 1)),
    (ShapeKind.T, 1): ((-1, 0), (0, 0), (1, 0), (0, 1)),
    (ShapeKind.T, 2): ((1, 0), (0, 0), (0, -1), (0, 1)),
    (ShapeKind.T, 3): ((-1, 0), (0, 0), (1, 0), (0, -1)),
    (ShapeKind.Z, 0): ((0, -1), (0, 0), (1, 0), (1, 1)),
    (ShapeKind.Z, 1): ((-1, 0), (0, 0), (0, -1), (1, -1)),
}


# Unrotated pieces, shifted so they fit in a 2x4 box.
PREVIEW_OFFSETS: Dict[ShapeKind, Tuple[Offset, ...]] = {
    ShapeKind.I: ((0, 0), (0, 1), (0, 2), (0, 3)),
    ShapeKind.J: ((0, 0), (1, 0), (1, 1), (1, 2)),
    ShapeKind.L: ((1, 0), (1, 1), (1, 2), (0, 2)),
    ShapeKind.O: ((0, 1), (1, 1), (0, 2), (1, 2)),
    ShapeKind.S: ((1, 0), (1, 1), (0, 1), (0, 2)),
    ShapeKind.T: ((0, 1), (1, 1), (1, 0), (1, 2)),
    ShapeKind.Z: ((0, 0), (0, 1), (1, 1), (1, 2)),
}

PREVIEW_HEIGHT = 2
PREVIEW_WIDTH = 4

# Order used by the debug shape cycle.
CYCLE_ORDER: Tuple[ShapeKind, ...] = (
    ShapeKind.I,
    ShapeKind.J,
    ShapeKind.L,
    ShapeKind.O,
    ShapeKind.S,
    ShapeKind.T,
    ShapeKind.Z,
)


def lookup_offsets(kind: ShapeKind, rotation: int) -> Tuple[Offset, ...]:
    try:
        return OFFSETS[(kind, rotation)]
    except KeyError:
        raise ShapeTableError(f"Invalid shape {kind.name} rotation {rotation}") from None


@dataclass(frozen=True)
class Shape:
    """A shape identity together with its rotation state."""

    kind: ShapeKind
    rotation: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.rotation < ROTATION_STATES[self.kind]:
            raise ShapeTableError(f"Invalid shape {self.kind.name} rotation {self.rotation}")

    @property
    def states(self) -> int:
        return ROTATION_STATES[self.kind]

    def offsets(self) -> Tuple[Offset, ...]:
        return lookup_offsets(self.kind, self.rotation)

    def rotated_cw(self) -> "Shape":
        return Shape(self.kind, (self.rotation + 1) % self.states)

    def rotated_ccw(self) -> "Shape":
        return Shape(self.kind, (self.rotation + self.states - 1) % self.states)

    def base(self) -> "Shape":
        return Shape(self.kind, 0)

    def cell_type(self) -> Cell:
        return Cell(int(self.kind))

    def ghost_cell_type(self) -> Cell:
        return Cell(int(self.kind) + len(ShapeKind))

    def preview_offsets(self) -> Tuple[Offset, ...]:
        return PREVIEW_OFFSETS[self.kind]

    def next_in_cycle(self) -> "Shape":
        idx = CYCLE_ORDER.index(self.kind)
        return Shape(CYCLE_ORDER[(idx + 1) % len(CYCLE_ORDER)], 0)


def base_shapes() -> List[Shape]:
    return [Shape(kind, 0) for kind in ShapeKind]
