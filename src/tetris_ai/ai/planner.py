from __future__ import annotations

import logging
from typing import Optional

from tetris_ai.game.board import GameBoard
from tetris_ai.game.intents import Intent

from .search import AIMove, TetrisAI

logger = logging.getLogger(__name__)


class StagedPlanner:
    """Turns one planned move into a sequence of intents.

    Planning is lazy: a move is computed once per piece and kept until
    `on_piece_placed()` or `reset()`. Execution then yields one intent per call:
    rotate until the rotation matches, then shift toward the column, then hard drop.
    """

    def __init__(self) -> None:
        self.planned_move: Optional[AIMove] = None
        self.need_new_move = True
        self.is_executing = False

    def _compute(self, board: GameBoard) -> Optional[AIMove]:
        raise NotImplementedError

    def plan(self, board: GameBoard) -> None:
        if not self.need_new_move or board.current is None:
            return
        move = self._compute(board)
        if move is None:
            return
        self.planned_move = move
        self.need_new_move = False
        self.is_executing = False

    def next_intent(self, board: GameBoard) -> Optional[Intent]:
        move = self.planned_move
        current = board.current
        if move is None or current is None:
            return None
        self.is_executing = True
        if current.rotation != move.target_rotation:
            return Intent.ROTATE_CW
        if current.x < move.target_x:
            return Intent.MOVE_RIGHT
        if current.x > move.target_x:
            return Intent.MOVE_LEFT
        return Intent.HARD_DROP

    def on_piece_placed(self) -> None:
        self.need_new_move = True
        self.planned_move = None
        self.is_executing = False

    def reset(self) -> None:
        self.on_piece_placed()


class MovePlanner(StagedPlanner):
    """Plans with the local exhaustive search."""

    def __init__(self, ai: TetrisAI | None = None) -> None:
        super().__init__()
        self.ai = ai or TetrisAI()

    def _compute(self, board: GameBoard) -> Optional[AIMove]:
        move = self.ai.find_best_move(board.snapshot())
        if move is None:
            # Nothing placeable; stop asking until the next piece.
            self.need_new_move = False
        return move
