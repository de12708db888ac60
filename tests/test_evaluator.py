from __future__ import annotations

import numpy as np

from tetris_ai.ai.evaluator import (
    BoardEvaluator,
    EvaluatorWeights,
    bumpiness,
    column_heights,
    max_height,
    weighted_holes,
    wells,
)


def test_empty_board_scores_zero(empty_grid):
    ev = BoardEvaluator()
    assert ev.features(empty_grid) == {"height": 0, "holes": 0, "bumpiness": 0, "wells": 0}
    assert ev.evaluate(empty_grid, 0) == 0


def test_heights_measured_from_floor(empty_grid):
    empty_grid[15, 2] = 1
    empty_grid[19, 3] = 1
    assert list(column_heights(empty_grid)[:5]) == [0, 0, 5, 1, 0]
    assert max_height(empty_grid) == 5


def test_holes_are_weighted_by_blocks_above(empty_grid):
    empty_grid[17, 0] = 1
    empty_grid[18, 0] = 1
    assert weighted_holes(empty_grid) == 2
    empty_grid[10, 5] = 4
    # nine empty cells under a single block, one each
    assert weighted_holes(empty_grid) == 2 + 9


def test_bumpiness_sums_adjacent_differences(empty_grid):
    empty_grid[18:, 0] = 1
    empty_grid[15:, 2] = 1
    # heights 2, 0, 5, 0, ...
    assert bumpiness(empty_grid) == 2 + 5 + 5


def test_interior_well_depth_squared():
    grid = np.zeros((20, 3), dtype=np.int8)
    grid[17:, 0] = 1
    grid[17:, 2] = 1
    assert wells(grid) == 9


def test_board_edge_counts_as_wall():
    grid = np.zeros((20, 4), dtype=np.int8)
    grid[18:, 1:] = 1
    assert wells(grid) == 4


def test_lines_term_is_monotonic_and_tetris_bonus_applies(empty_grid):
    empty_grid[19, :9] = 2
    ev = BoardEvaluator()
    scores = [ev.evaluate(empty_grid, n) for n in range(5)]
    assert scores[1] - scores[0] == 40
    assert scores[2] - scores[1] == 40
    assert scores[3] - scores[2] == 40
    assert scores[4] - scores[3] == 40 + 200


def test_weights_are_tunable(empty_grid):
    empty_grid[19, 0] = 1
    flat = BoardEvaluator(EvaluatorWeights(height=0, lines=0, holes=0, bumpiness=0, wells=0, tetris_bonus=0))
    assert flat.evaluate(empty_grid, 4) == 0
    only_height = BoardEvaluator(EvaluatorWeights(height=-1, lines=0, holes=0, bumpiness=0, wells=0))
    assert only_height.evaluate(empty_grid, 0) == -1
