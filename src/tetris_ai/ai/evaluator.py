from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import numpy as np


@dataclass(frozen=True)
class EvaluatorWeights:
    height: int = -10
    lines: int = 40
    holes: int = -20
    bumpiness: int = -3
    wells: int = -15
    tetris_bonus: int = 200


def column_heights(grid: np.ndarray) -> np.ndarray:
    """Distance from each column's topmost filled cell to the floor (0 if empty)."""
    height = grid.shape[0]
    filled = grid != 0
    has_block = filled.any(axis=0)
    top = filled.argmax(axis=0)
    return np.where(has_block, height - top, 0).astype(np.int64)


def max_height(grid: np.ndarray) -> int:
    heights = column_heights(grid)
    return int(heights.max()) if heights.size else 0


def weighted_holes(grid: np.ndarray) -> int:
    """Each empty cell under a block costs the number of blocks above it."""
    filled = grid != 0
    blocks_above = np.cumsum(filled, axis=0)
    holes = ~filled & (blocks_above > 0)
    return int(np.maximum(blocks_above, 1)[holes].sum())


def bumpiness(grid: np.ndarray) -> int:
    heights = column_heights(grid)
    return int(np.abs(np.diff(heights)).sum())


def wells(grid: np.ndarray) -> int:
    """Sum of depth**2 over vertical runs of empty cells walled on both sides.

    The board edge counts as a wall.
    """
    height, width = grid.shape

    def walled(x: int, y: int) -> bool:
        left = x == 0 or grid[y, x - 1] != 0
        right = x == width - 1 or grid[y, x + 1] != 0
        return left and right

    total = 0
    for x in range(width):
        y = 0
        while y < height:
            if grid[y, x] == 0 and walled(x, y):
                depth = 0
                while y + depth < height and grid[y + depth, x] == 0 and walled(x, y + depth):
                    depth += 1
                total += depth * depth
                y += depth
            else:
                y += 1
    return total


class BoardEvaluator:
    """Ranks simulated boards for the move search. Higher is better.

    The score only orders candidate placements; it is unrelated to the
    points a player earns.
    """

    def __init__(self, weights: EvaluatorWeights | None = None) -> None:
        self.weights = weights or EvaluatorWeights()

    def features(self, grid: np.ndarray) -> Dict[str, int]:
        return {
            "height": max_height(grid),
            "holes": weighted_holes(grid),
            "bumpiness": bumpiness(grid),
            "wells": wells(grid),
        }

    def evaluate(self, grid: np.ndarray, lines_cleared: int) -> int:
        w = self.weights
        f = self.features(grid)
        tetris_bonus = w.tetris_bonus if lines_cleared == 4 else 0
        return (
            w.height * f["height"]
            + w.lines * lines_cleared
            + w.holes * f["holes"]
            + w.bumpiness * f["bumpiness"]
            + w.wells * f["wells"]
            + tetris_bonus
        )
