from __future__ import annotations

import numpy as np
import pytest

from tetris_ai.game.pieces import Piece, TetrominoType, cell_offsets, max_rotations, shape


@pytest.mark.parametrize("kind", list(TetrominoType))
@pytest.mark.parametrize("rotation", range(4))
def test_every_rotation_has_four_cells(kind, rotation):
    s = shape(kind, rotation)
    assert s.shape == (4, 4)
    assert int(s.sum()) == 4
    assert len(cell_offsets(kind, rotation)) == 4


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_four_clockwise_turns_return_to_start(kind):
    assert np.array_equal(shape(kind, 4), shape(kind, 0))
    assert np.array_equal(np.rot90(shape(kind, 0), k=-1), shape(kind, 1))


def test_color_tags_are_one_to_seven():
    assert sorted(int(k) for k in TetrominoType) == list(range(1, 8))


def test_shapes_are_read_only():
    with pytest.raises(ValueError):
        shape(TetrominoType.T, 0)[0, 0] = 1


def test_max_rotations():
    assert max_rotations(TetrominoType.O) == 1
    for kind in (TetrominoType.I, TetrominoType.S, TetrominoType.Z):
        assert max_rotations(kind) == 2
    for kind in (TetrominoType.T, TetrominoType.J, TetrominoType.L):
        assert max_rotations(kind) == 4


def test_i_piece_vertical_rotation_occupies_column_two():
    assert sorted(cell_offsets(TetrominoType.I, 1)) == [(0, 2), (1, 2), (2, 2), (3, 2)]


def test_piece_cells_follow_position():
    piece = Piece(TetrominoType.O, x=3, y=-2)
    assert sorted(piece.cells()) == [(4, -2), (4, -1), (5, -2), (5, -1)]
    piece.move_by(1, 2)
    assert (piece.x, piece.y) == (4, 0)
    assert piece.color == 2
