from __future__ import annotations

from typing import Optional

from tetris_ai.ai.planner import StagedPlanner
from tetris_ai.ai.search import AIMove
from tetris_ai.game.board import GameBoard

from .client import AdvisorClient
from .protocol import AdvisorRequest


class AdvisorPlanner(StagedPlanner):
    """Staged planner whose moves come from the external advisor.

    A failed request leaves the plan empty so the next `plan()` call retries,
    subject to the client's reconnect spacing.
    """

    def __init__(self, client: AdvisorClient | None = None) -> None:
        super().__init__()
        self.client = client or AdvisorClient()

    @property
    def available(self) -> bool:
        return self.client.available

    def _compute(self, board: GameBoard) -> Optional[AIMove]:
        move = self.client.request_move(AdvisorRequest.from_snapshot(board.snapshot()))
        if move is None:
            self.planned_move = None
            return None
        return AIMove(move.op_x, move.op_rotate % 4)

    def next_intent(self, board: GameBoard):
        if not self.available:
            return None
        return super().next_intent(board)

    def reset(self) -> None:
        super().reset()
        self.client.reset()
