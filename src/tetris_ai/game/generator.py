from __future__ import annotations

import random
from collections import deque
from typing import Deque, Optional

from .pieces import TetrominoType


class PieceGenerator:
    """Seeded 7-bag randomizer.

    Every run of 7 draws starting at a bag boundary contains each type exactly once,
    and two generators built with the same seed yield the same sequence.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self.rng = random.Random(seed)
        self._bag: Deque[TetrominoType] = deque()

    def _refill(self) -> None:
        bag = list(TetrominoType)
        self.rng.shuffle(bag)
        self._bag.extend(bag)

    def next(self) -> TetrominoType:
        if not self._bag:
            self._refill()
        return self._bag.popleft()

    def peek(self) -> TetrominoType:
        """Upcoming type, without consuming it."""
        if not self._bag:
            self._refill()
        return self._bag[0]
