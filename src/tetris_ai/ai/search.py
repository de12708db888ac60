from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from tetris_ai.game.grid import BoardSnapshot, can_move, clear_full_lines, count_full_lines, lock_piece
from tetris_ai.game.pieces import Piece, TetrominoType, max_rotations

from .evaluator import BoardEvaluator

logger = logging.getLogger(__name__)

# Trial pieces start here, above any spawn position.
SEARCH_START_Y = -4
# A piece that cannot get at least this low never entered the board.
MIN_LANDING_Y = -3
COLUMN_MARGIN_LEFT = 3
COLUMN_MARGIN_RIGHT = 2


@dataclass(frozen=True)
class AIMove:
    """Target column and rotation for one piece."""

    target_x: int
    target_rotation: int

    def __post_init__(self) -> None:
        if not 0 <= self.target_rotation <= 3:
            raise ValueError(f"target_rotation must be 0-3: {self.target_rotation}")

    def __str__(self) -> str:
        return f"AIMove(x={self.target_x}, rot={self.target_rotation * 90}deg)"


@dataclass(frozen=True)
class Simulation:
    grid: np.ndarray
    lines_cleared: int


def drop(grid: np.ndarray, piece: Piece) -> Piece:
    """Move `piece` straight down until the next step would collide."""
    while can_move(grid, piece, 0, 1, piece.rotation):
        piece.move_by(0, 1)
    return piece


def simulate(grid: np.ndarray, kind: TetrominoType, target_x: int, rotation: int) -> Optional[Simulation]:
    """Hard-drop `kind` at (target_x, rotation) onto a private copy of `grid`.

    Returns None when the placement is not reachable. The line count is taken
    before the full rows are removed.
    """
    trial = Piece(kind, target_x, SEARCH_START_Y, rotation)
    if not can_move(grid, trial, 0, 0, rotation):
        return None
    drop(grid, trial)
    if trial.y < MIN_LANDING_Y:
        return None
    cells = grid.copy()
    lock_piece(cells, trial)
    lines = count_full_lines(cells)
    clear_full_lines(cells)
    return Simulation(cells, lines)


def candidate_moves(kind: TetrominoType, width: int) -> Iterator[Tuple[int, int]]:
    """(rotation, column) pairs in search order: rotation first, then column."""
    for rotation in range(max_rotations(kind)):
        for x in range(-COLUMN_MARGIN_LEFT, width + COLUMN_MARGIN_RIGHT + 1):
            yield rotation, x


class TetrisAI:
    """Exhaustive one-piece search over every rotation and column.

    Each candidate is hard-dropped and locked on a copy of the snapshot grid using the
    same rule functions as the live board, then ranked by the evaluator. Ties keep
    the first candidate found.
    """

    def __init__(self, evaluator: BoardEvaluator | None = None) -> None:
        self.evaluator = evaluator or BoardEvaluator()

    def find_best_move(self, snapshot: BoardSnapshot, kind: TetrominoType | None = None) -> Optional[AIMove]:
        if kind is None:
            if snapshot.active is None:
                return None
            kind = snapshot.active.kind
        grid = snapshot.copy_cells()

        best: Optional[AIMove] = None
        best_score: Optional[int] = None
        for rotation, x in candidate_moves(kind, snapshot.width):
            try:
                result = simulate(grid, kind, x, rotation)
            except (IndexError, ValueError) as exc:
                logger.debug("discarding candidate x=%d rot=%d: %s", x, rotation, exc)
                continue
            if result is None:
                continue
            score = self.evaluator.evaluate(result.grid, result.lines_cleared)
            if best_score is None or score > best_score:
                best_score = score
                best = AIMove(x, rotation)
        logger.debug("best move for %s: %s (score=%s)", kind.name, best, best_score)
        return best
