from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping, Optional


class PlayerType(str, Enum):
    HUMAN = "human"
    AI = "ai"
    EXTERNAL = "external"


MIN_LEVEL = 1
MAX_LEVEL = 10
# AI and advisor-driven play speed up from this level on.
FAST_LEVEL = 8


@dataclass
class GameSettings:
    """Per-session configuration, supplied by the caller at construction."""

    width: int = 10
    height: int = 20
    level: int = 6
    player_type: PlayerType = PlayerType.HUMAN
    seed: Optional[int] = None
    player_name: str = "Player"
    advisor_host: str = "localhost"
    advisor_port: int = 3000
    ledger_timeout: float = 5.0

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError(f"board must be at least 4x4, got {self.width}x{self.height}")
        if not MIN_LEVEL <= self.level <= MAX_LEVEL:
            raise ValueError(f"level must be {MIN_LEVEL}-{MAX_LEVEL}, got {self.level}")
        self.player_type = PlayerType(self.player_type)

    def drop_interval_ms(self) -> int:
        level = max(MIN_LEVEL, min(self.level, MAX_LEVEL))
        return 700 - (level - 1) * 50

    @property
    def fast(self) -> bool:
        return self.level >= FAST_LEVEL

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "GameSettings":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in mapping.items() if k in known})
