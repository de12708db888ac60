from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    """Piece types; the value doubles as the color tag written into the grid."""

    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray
Offset = Tuple[int, int]


BASE_SHAPES = {
    TetrominoType.I: [[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]],
    TetrominoType.O: [[0, 1, 1, 0], [0, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
    TetrominoType.T: [[0, 1, 0, 0], [1, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
    TetrominoType.S: [[0, 1, 1, 0], [1, 1, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
    TetrominoType.Z: [[1, 1, 0, 0], [0, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
    TetrominoType.J: [[1, 0, 0, 0], [1, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
    TetrominoType.L: [[0, 0, 1, 0], [1, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
}

# Distinct orientations per type; the search skips the symmetric duplicates.
_MAX_ROTATIONS = {
    TetrominoType.O: 1,
    TetrominoType.I: 2,
    TetrominoType.S: 2,
    TetrominoType.Z: 2,
}


def _rot_cw(shape: Shape) -> Shape:
    return np.rot90(shape, k=-1)


def _build_rotations() -> Tuple[Dict[TetrominoType, List[Shape]], Dict[TetrominoType, List[Tuple[Offset, ...]]]]:
    shapes: Dict[TetrominoType, List[Shape]] = {}
    offsets: Dict[TetrominoType, List[Tuple[Offset, ...]]] = {}
    for kind, base in BASE_SHAPES.items():
        current = np.array(base, dtype=np.int8)
        rotations: List[Shape] = []
        for _ in range(4):
            frozen = np.ascontiguousarray(current)
            frozen.setflags(write=False)
            rotations.append(frozen)
            current = _rot_cw(current)
        shapes[kind] = rotations
        offsets[kind] = [
            tuple((int(r), int(c)) for r, c in zip(*np.nonzero(s))) for s in rotations
        ]
    return shapes, offsets


# Computed once at import and never mutated.
SHAPES, CELL_OFFSETS = _build_rotations()


def shape(kind: TetrominoType, rotation: int = 0) -> Shape:
    """4x4 occupancy matrix of `kind` at `rotation` (read-only)."""
    return SHAPES[kind][rotation % 4]


def cell_offsets(kind: TetrominoType, rotation: int = 0) -> Tuple[Offset, ...]:
    """(row, col) offsets of the four occupied cells."""
    return CELL_OFFSETS[kind][rotation % 4]


def max_rotations(kind: TetrominoType) -> int:
    return _MAX_ROTATIONS.get(kind, 4)


@dataclass
class Piece:
    """The active (falling) piece: a type, a position and a rotation index."""

    kind: TetrominoType
    x: int
    y: int
    rotation: int = 0  # 0..3

    @property
    def color(self) -> int:
        return int(self.kind)

    def shape(self, rotation: int | None = None) -> Shape:
        return shape(self.kind, self.rotation if rotation is None else rotation)

    def cells(self) -> List[Tuple[int, int]]:
        """Absolute (x, y) cells occupied by the piece."""
        return [(self.x + c, self.y + r) for r, c in cell_offsets(self.kind, self.rotation)]

    def move_by(self, dx: int, dy: int) -> None:
        self.x += dx
        self.y += dy

    def copy(self) -> "Piece":
        return Piece(self.kind, self.x, self.y, self.rotation)
