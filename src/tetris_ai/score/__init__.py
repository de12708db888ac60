"""High-score persistence shared across sessions."""

from .store import JsonScoreStore, ScoreEntry, ScoreStore, ScoreStoreError
from .ledger import ScoreLedger

__all__ = ["JsonScoreStore", "ScoreEntry", "ScoreStore", "ScoreStoreError", "ScoreLedger"]
