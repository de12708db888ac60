from __future__ import annotations

import logging
from typing import Optional

from .generator import PieceGenerator
from .grid import BoardSnapshot, GameGrid, Grid, PieceView
from .pieces import Piece, TetrominoType

logger = logging.getLogger(__name__)

SPAWN_Y = -2


class GameBoard:
    """Live playfield: the locked grid plus at most one falling piece.

    Movement calls with no active piece, or that would collide, are silent no-ops.
    Locking and clearing are separate steps so the caller owns line accounting.
    """

    def __init__(self, width: int = 10, height: int = 20, generator: Optional[PieceGenerator] = None) -> None:
        self.grid = GameGrid(width, height)
        self.generator = generator or PieceGenerator()
        self.current: Optional[Piece] = None

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def cells(self) -> Grid:
        return self.grid.view()

    @property
    def next_type(self) -> TetrominoType:
        return self.generator.peek()

    def spawn(self) -> bool:
        kind = self.generator.next()
        piece = Piece(kind, self.width // 2 - 2, SPAWN_Y)
        if not self.can_move(piece, 0, 0, piece.rotation):
            logger.debug("spawn of %s blocked at x=%d", kind.name, piece.x)
            self.current = None
            return False
        self.current = piece
        return True

    def can_move(self, piece: Piece, dx: int, dy: int, rotation: int) -> bool:
        return self.grid.can_move(piece, dx, dy, rotation)

    def move_left(self) -> None:
        self._shift(-1)

    def move_right(self) -> None:
        self._shift(1)

    def _shift(self, dx: int) -> None:
        piece = self.current
        if piece is not None and self.can_move(piece, dx, 0, piece.rotation):
            piece.move_by(dx, 0)

    def rotate_cw(self) -> None:
        # No wall kicks: a blocked rotation is rejected outright.
        piece = self.current
        if piece is None:
            return
        rotation = (piece.rotation + 1) % 4
        if self.can_move(piece, 0, 0, rotation):
            piece.rotation = rotation

    def soft_drop_step(self) -> bool:
        piece = self.current
        if piece is None:
            return False
        if self.can_move(piece, 0, 1, piece.rotation):
            piece.move_by(0, 1)
            return True
        return False

    def hard_drop(self) -> None:
        while self.soft_drop_step():
            pass

    def lock_current(self) -> bool:
        """Lock the falling piece; False on overflow above the top edge."""
        if self.current is None:
            return False
        ok = self.grid.lock(self.current)
        self.current = None
        return ok

    def clear_full_lines(self) -> int:
        return self.grid.clear_full_lines()

    def reset(self) -> None:
        self.grid.reset()
        self.current = None

    def snapshot(self) -> BoardSnapshot:
        cells = self.grid.clone_state()
        cells.setflags(write=False)
        active = None
        if self.current is not None:
            p = self.current
            active = PieceView(p.kind, p.x, p.y, p.rotation)
        return BoardSnapshot(cells=cells, active=active, next_kind=self.next_type)
