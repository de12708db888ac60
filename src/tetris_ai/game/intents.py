from __future__ import annotations

from enum import IntEnum


class Intent(IntEnum):
    """Closed set of player intents accepted by a session."""

    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE_CW = 2
    SOFT_DROP = 3
    HARD_DROP = 4
