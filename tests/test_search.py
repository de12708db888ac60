from __future__ import annotations

import numpy as np

from tetris_ai.ai import AIMove, TetrisAI, simulate
from tetris_ai.ai.evaluator import BoardEvaluator
from tetris_ai.game import TetrominoType

from conftest import fill_rows, make_board


def test_o_piece_on_empty_board_picks_lowest_optimal_column():
    board = make_board([TetrominoType.O])
    board.spawn()
    move = TetrisAI().find_best_move(board.snapshot())
    # Against the left wall leaves only one height step; ties go to the first column searched.
    assert move == AIMove(target_x=-1, target_rotation=0)


def test_search_is_deterministic():
    board = make_board([TetrominoType.T, TetrominoType.L])
    board.spawn()
    fill_rows(board, [19], gap=4)
    ai = TetrisAI()
    snap = board.snapshot()
    assert ai.find_best_move(snap) == ai.find_best_move(snap)


def test_four_line_clear_counted_before_clearing():
    board = make_board([TetrominoType.I])
    fill_rows(board, range(16, 20), gap=9)
    board.spawn()

    result = simulate(board.snapshot().copy_cells(), TetrominoType.I, 7, 1)
    assert result is not None
    assert result.lines_cleared == 4
    assert not result.grid.any()
    assert BoardEvaluator().evaluate(result.grid, result.lines_cleared) == 4 * 40 + 200

    assert TetrisAI().find_best_move(board.snapshot()) == AIMove(7, 1)


def test_search_never_touches_live_grid():
    board = make_board([TetrominoType.J])
    fill_rows(board, [18, 19], gap=0)
    before = board.grid.clone_state()
    board.spawn()
    TetrisAI().find_best_move(board.snapshot())
    assert np.array_equal(board.grid.grid, before)


def test_placement_that_never_enters_board_is_rejected():
    grid = np.ones((20, 10), dtype=np.int8)
    assert simulate(grid, TetrominoType.I, 3, 1) is None


def test_off_board_columns_are_rejected(empty_grid):
    assert simulate(empty_grid, TetrominoType.O, -3, 0) is None
    assert simulate(empty_grid, TetrominoType.O, 9, 0) is None
    assert simulate(empty_grid, TetrominoType.O, -1, 0) is not None


def test_no_active_piece_returns_none():
    board = make_board([TetrominoType.T])
    assert TetrisAI().find_best_move(board.snapshot()) is None


def test_explicit_kind_overrides_active_piece():
    board = make_board([TetrominoType.T])
    move = TetrisAI().find_best_move(board.snapshot(), TetrominoType.O)
    assert move == AIMove(-1, 0)
