from __future__ import annotations

from itertools import cycle
from typing import Iterable, List, Optional

import numpy as np
import pytest

from tetris_ai.game import GameBoard, TetrominoType


class FixedGenerator:
    """Yields a fixed, repeating sequence of piece types."""

    def __init__(self, kinds: Iterable[TetrominoType]) -> None:
        self._kinds = list(kinds)
        self._it = cycle(self._kinds)
        self._next: Optional[TetrominoType] = None

    def next(self) -> TetrominoType:
        kind = self.peek()
        self._next = None
        return kind

    def peek(self) -> TetrominoType:
        if self._next is None:
            self._next = next(self._it)
        return self._next


def make_board(kinds: List[TetrominoType], width: int = 10, height: int = 20) -> GameBoard:
    return GameBoard(width, height, FixedGenerator(kinds))


def fill_rows(board: GameBoard, rows: Iterable[int], gap: Optional[int] = None, tag: int = 3) -> None:
    """Fill whole rows of the live grid, optionally leaving one column empty."""
    for y in rows:
        board.grid.grid[y, :] = tag
        if gap is not None:
            board.grid.grid[y, gap] = 0


@pytest.fixture
def empty_grid() -> np.ndarray:
    return np.zeros((20, 10), dtype=np.int8)
