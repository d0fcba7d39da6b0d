from __future__ import annotations

import random
from typing import Iterable, List, Optional

from .shapes import Shape, base_shapes


class PieceSequencer:
    """Uniform random shapes that never repeat the previous one."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self.choices: List[Shape] = base_shapes()

    def next(self, previous: Optional[Shape] = None) -> Shape:
        choice = self.rng.choice(self.choices)
        if previous is None:
            return choice
        previous = previous.base()
        while choice == previous:
            choice = self.rng.choice(self.choices)
        return choice


class ScriptedSequencer(PieceSequencer):
    """Replays a fixed list of shapes, cycling when it runs out.

    No repeat avoidance is applied: the script is returned as given.
    """

    def __init__(self, shapes: Iterable[Shape]) -> None:
        super().__init__(random.Random(0))
        self.script: List[Shape] = [shape.base() for shape in shapes]
        if not self.script:
            raise ValueError("ScriptedSequencer needs at least one shape")
        self.position = 0

    def next(self, previous: Optional[Shape] = None) -> Shape:
        shape = self.script[self.position % len(self.script)]
        self.position += 1
        return shape
