from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 600, 1000)

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        if 1 <= lines <= 4:
            return self.line_clear_scores[lines - 1] * level
        return 0
