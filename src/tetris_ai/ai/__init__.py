"""Move-selection AI.

- BoardEvaluator: heuristic board score (height, holes, bumpiness, wells, lines)
- TetrisAI: exhaustive rotation x column search over board snapshots
- MovePlanner: lazy per-piece planning and staged intent execution
"""

from .evaluator import BoardEvaluator, EvaluatorWeights
from .search import AIMove, TetrisAI, simulate
from .planner import MovePlanner, StagedPlanner

__all__ = [
    "BoardEvaluator",
    "EvaluatorWeights",
    "AIMove",
    "TetrisAI",
    "simulate",
    "MovePlanner",
    "StagedPlanner",
]
