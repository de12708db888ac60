"""Game module for the falling-block engine.

Exports the core game engine and supporting classes:
- TetrominoType, Piece: piece catalog and the falling piece
- PieceGenerator: seeded 7-bag randomizer
- GameGrid, BoardSnapshot: grid rules and immutable board copies
- GameBoard: live board (spawn, move, rotate, drop, lock, clear)
- ScoringRules: line-clear points per level
- Intent: the five player intents
"""

from .pieces import Piece, TetrominoType, max_rotations
from .generator import PieceGenerator
from .grid import BoardSnapshot, GameGrid, PieceView
from .board import GameBoard
from .rules import ScoringRules
from .intents import Intent

__all__ = [
    "Piece",
    "TetrominoType",
    "max_rotations",
    "PieceGenerator",
    "BoardSnapshot",
    "GameGrid",
    "PieceView",
    "GameBoard",
    "ScoringRules",
    "Intent",
]
