from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Optional, Tuple

from tetris_ai.game.board import GameBoard
from tetris_ai.game.generator import PieceGenerator
from tetris_ai.score.ledger import ScoreLedger

from .session import GameSession
from .settings import GameSettings, PlayerType

logger = logging.getLogger(__name__)


def create_session(settings: GameSettings, ledger: Optional[ScoreLedger] = None) -> GameSession:
    board = GameBoard(settings.width, settings.height, PieceGenerator(settings.seed))
    return GameSession(board, settings, ledger=ledger)


def create_versus_sessions(
    settings: GameSettings,
    player_one: PlayerType,
    player_two: PlayerType,
    ledger: Optional[ScoreLedger] = None,
    seed: Optional[int] = None,
) -> Tuple[GameSession, GameSession]:
    """Two independent sessions that receive the same piece order.

    Only the ledger is shared between them.
    """
    if seed is None:
        seed = settings.seed if settings.seed is not None else time.time_ns()
    logger.info("[2P] seed=%d", seed)
    one = create_session(replace(settings, player_type=player_one, seed=seed), ledger)
    two = create_session(replace(settings, player_type=player_two, seed=seed), ledger)
    return one, two
