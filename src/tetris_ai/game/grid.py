from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .pieces import Piece, TetrominoType, cell_offsets, shape


Grid = np.ndarray


def empty_grid(width: int, height: int) -> Grid:
    return np.zeros((int(height), int(width)), dtype=np.int8)


def can_move(grid: Grid, piece: Piece, dx: int, dy: int, rotation: int) -> bool:
    """Whether `piece` shifted by (dx, dy) at `rotation` fits on `grid`.

    Cells above the top edge (y < 0) are the spawn buffer and never collide,
    but they still have to lie within the side walls.
    """
    height, width = grid.shape
    for r, c in cell_offsets(piece.kind, rotation):
        x = piece.x + c + dx
        y = piece.y + r + dy
        if x < 0 or x >= width or y >= height:
            return False
        if y < 0:
            continue
        if grid[y, x] != 0:
            return False
    return True


def lock_piece(grid: Grid, piece: Piece) -> bool:
    """Write the visible cells of `piece` into `grid`.

    Returns False when part of the piece is still above the top edge; the visible
    part is written regardless.
    """
    height, width = grid.shape
    overflow = False
    for x, y in piece.cells():
        if y < 0:
            overflow = True
            continue
        if y < height and 0 <= x < width:
            grid[y, x] = piece.color
    return not overflow


def full_rows(grid: Grid) -> np.ndarray:
    return np.all(grid != 0, axis=1)


def count_full_lines(grid: Grid) -> int:
    return int(np.count_nonzero(full_rows(grid)))


def clear_full_lines(grid: Grid) -> int:
    """Remove full rows in place and compact the rest toward the floor."""
    full = full_rows(grid)
    num = int(np.count_nonzero(full))
    if num == 0:
        return 0
    kept = grid[~full].copy()
    grid.fill(0)
    if kept.shape[0]:
        grid[grid.shape[0] - kept.shape[0]:] = kept
    return num


@dataclass(frozen=True)
class PieceView:
    kind: TetrominoType
    x: int
    y: int
    rotation: int

    @property
    def color(self) -> int:
        return int(self.kind)

    @property
    def shape(self) -> np.ndarray:
        return shape(self.kind, self.rotation)

    def to_piece(self) -> Piece:
        return Piece(self.kind, self.x, self.y, self.rotation)


@dataclass(frozen=True)
class BoardSnapshot:
    """Immutable copy of a board; the only board type the AI reads."""

    cells: Grid
    active: Optional[PieceView] = None
    next_kind: Optional[TetrominoType] = None

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    def copy_cells(self) -> Grid:
        """Writable private copy for simulation."""
        return self.cells.copy()

    def overlay(self) -> Grid:
        """Grid with the falling piece drawn in as negative tags."""
        state = self.cells.copy()
        if self.active is not None:
            for x, y in self.active.to_piece().cells():
                if 0 <= y < self.height and 0 <= x < self.width:
                    state[y, x] = -self.active.color
        return state


class GameGrid:
    """Discrete 2D grid of locked cells.

    0 marks an empty cell, 1..7 the color tag of the piece that filled it.
    Row 0 is the top.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = empty_grid(self.width, self.height)

    def reset(self) -> None:
        self.grid.fill(0)

    def can_move(self, piece: Piece, dx: int, dy: int, rotation: int) -> bool:
        return can_move(self.grid, piece, dx, dy, rotation)

    def lock(self, piece: Piece) -> bool:
        return lock_piece(self.grid, piece)

    def clear_full_lines(self) -> int:
        return clear_full_lines(self.grid)

    def count_full_lines(self) -> int:
        return count_full_lines(self.grid)

    def view(self) -> Grid:
        v = self.grid.view()
        v.setflags(write=False)
        return v

    def clone_state(self) -> Grid:
        return self.grid.copy()
