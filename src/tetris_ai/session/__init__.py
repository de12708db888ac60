"""Game sessions: settings, state machine, game loop and session factories."""

from .settings import GameSettings, PlayerType
from .states import AIPlaying, ExternalPlaying, GameOver, Paused, Playing, UiState
from .session import GameSession, SessionSnapshot
from .factory import create_session, create_versus_sessions
from .loop import GameLoop

__all__ = [
    "GameSettings",
    "PlayerType",
    "AIPlaying",
    "ExternalPlaying",
    "GameOver",
    "Paused",
    "Playing",
    "UiState",
    "GameSession",
    "SessionSnapshot",
    "create_session",
    "create_versus_sessions",
    "GameLoop",
]
