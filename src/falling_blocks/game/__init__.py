"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- Board: 10x20 grid of settled cells and row clearing
- Shape / ShapeKind / Cell: shape table, rotation states and cell tags
- ActivePiece / place: the falling piece and its spawn rule
- PieceSequencer / ScriptedSequencer: next-piece generators
- ScoringRules: line-clear scores and status messages
- Game: tick-driven state machine
- ManualClock: deterministic clock for simulations and tests
"""

from .grid import Board, HEIGHT, WIDTH
from .shapes import Cell, Shape, ShapeKind, ShapeTableError
from .pieces import ActivePiece, place
from .sequencer import PieceSequencer, ScriptedSequencer
from .rules import ScoringRules
from .clock import ManualClock
from .core import Command, Game, GameConfig

__all__ = [
    "Board",
    "HEIGHT",
    "WIDTH",
    "Cell",
    "Shape",
    "ShapeKind",
    "ShapeTableError",
    "ActivePiece",
    "place",
    "PieceSequencer",
    "ScriptedSequencer",
    "ScoringRules",
    "ManualClock",
    "Command",
    "Game",
    "GameConfig",
]
