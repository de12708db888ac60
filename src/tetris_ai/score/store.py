from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Iterable, List, Protocol


DEFAULT_NAME = "Player"


class ScoreStoreError(Exception):
    """Persisting the score list failed."""


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    score: int

    def __post_init__(self) -> None:
        name = (self.name or "").strip() or DEFAULT_NAME
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "score", max(0, int(self.score)))

    def to_dict(self) -> dict:
        return {"name": self.name, "score": self.score}

    def __str__(self) -> str:
        return f"{self.name}: {self.score}"


def ranked(entries: Iterable[ScoreEntry], limit: int) -> List[ScoreEntry]:
    """Highest first; equal scores keep their earlier position."""
    return sorted(entries, key=lambda e: e.score, reverse=True)[:limit]


class ScoreStore(Protocol):
    def load(self) -> List[ScoreEntry]: ...

    def save(self, entries: List[ScoreEntry]) -> None: ...


class JsonScoreStore:
    """High scores as an indented JSON list of {"name", "score"} objects."""

    def __init__(self, path: str = os.path.join("data", "highscores.json")) -> None:
        self.path = path

    def load(self) -> List[ScoreEntry]:
        """Stored entries; [] for a missing or empty file.

        An unreadable or malformed file raises ScoreStoreError so callers never
        mistake it for an empty list and overwrite it.
        """
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
            if not raw.strip():
                return []
            data = json.loads(raw)
            return [ScoreEntry(str(item["name"]), int(item["score"])) for item in data]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise ScoreStoreError(f"could not read {self.path}: {exc}") from exc

    def save(self, entries: List[ScoreEntry]) -> None:
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump([e.to_dict() for e in entries], f, ensure_ascii=False, indent=2)
        except OSError as exc:
            raise ScoreStoreError(f"could not write {self.path}: {exc}") from exc
