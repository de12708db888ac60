"""Session states as a closed set of variants.

Each variant is a plain record; the transition logic for all of them lives in
`GameSession` dispatch tables keyed by variant type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from tetris_ai.ai.planner import MovePlanner, StagedPlanner
from tetris_ai.external.planner import AdvisorPlanner

# Ticks between staged intents.
AI_SPEED_NORMAL = 2
AI_SPEED_FAST = 1
EXTERNAL_SPEED_NORMAL = 3
EXTERNAL_SPEED_FAST = 2


class UiState(str, Enum):
    PLAY = "play"
    PAUSE = "pause"
    GAME_OVER = "game_over"


@dataclass
class Playing:
    pass


@dataclass
class AIPlaying:
    planner: MovePlanner
    speed: int = AI_SPEED_NORMAL
    tick_counter: int = 0


@dataclass
class ExternalPlaying:
    planner: AdvisorPlanner
    speed: int = EXTERNAL_SPEED_NORMAL
    tick_counter: int = 0


ActiveState = Union[Playing, AIPlaying, ExternalPlaying]


@dataclass
class Paused:
    resume: Optional[ActiveState] = None


@dataclass
class GameOver:
    pass


SessionState = Union[Playing, AIPlaying, ExternalPlaying, Paused, GameOver]

UI_STATES = {
    Playing: UiState.PLAY,
    AIPlaying: UiState.PLAY,
    ExternalPlaying: UiState.PLAY,
    Paused: UiState.PAUSE,
    GameOver: UiState.GAME_OVER,
}


def planner_of(state: SessionState) -> Optional[StagedPlanner]:
    if isinstance(state, (AIPlaying, ExternalPlaying)):
        return state.planner
    if isinstance(state, Paused) and state.resume is not None:
        return planner_of(state.resume)
    return None
