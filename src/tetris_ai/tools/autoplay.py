from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List

import numpy as np

from tetris_ai.session import GameLoop, GameSettings, PlayerType, UiState, create_session


@dataclass
class GameResult:
    score: int
    lines: int
    pieces: int
    topped_out: bool


def play_one(settings: GameSettings, max_pieces: int = 500, max_ticks: int = 200_000) -> GameResult:
    """Run one AI game headlessly until game over or `max_pieces` locks."""
    session = create_session(settings)
    loop = GameLoop(session)
    session.start()
    pieces = 0
    last = session.board.current
    for _ in range(max_ticks):
        if session.ui_state is UiState.GAME_OVER or pieces >= max_pieces:
            break
        loop.step()
        if session.board.current is not last:
            pieces += 1
            last = session.board.current
    topped_out = session.ui_state is UiState.GAME_OVER
    score = session.final_score if topped_out else session.score
    return GameResult(score=score, lines=session.lines_total, pieces=pieces, topped_out=topped_out)


def _print_progress(idx: int, total: int, result: GameResult) -> None:
    width = 30
    filled = int(width * (idx + 1) / max(1, total))
    bar = "=" * filled + "." * (width - filled)
    msg = f"\r[{bar}] {idx + 1}/{total}  score={result.score}  lines={result.lines}"
    print(msg, end="", file=sys.stdout, flush=True)


def autoplay(games: int = 10, max_pieces: int = 500, seed: int = 0, level: int = 6,
             progress: bool = True) -> List[GameResult]:
    results: List[GameResult] = []
    for i in range(games):
        settings = GameSettings(level=level, player_type=PlayerType.AI, seed=seed + i)
        result = play_one(settings, max_pieces=max_pieces)
        results.append(result)
        if progress:
            _print_progress(i, games, result)
    if progress:
        print()
    return results


def main() -> None:
    p = argparse.ArgumentParser(description="Run the AI player headlessly and report scores.")
    p.add_argument("--games", type=int, default=10)
    p.add_argument("--max-pieces", type=int, default=500)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--level", type=int, default=6)
    p.add_argument("--no-progress", action="store_true")
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    results = autoplay(args.games, args.max_pieces, args.seed, args.level, progress=not args.no_progress)
    scores = np.array([r.score for r in results], dtype=np.float64)
    lines = np.array([r.lines for r in results], dtype=np.float64)
    print(f"games={len(results)}  mean score={scores.mean():.1f}  mean lines={lines.mean():.1f}  "
          f"topped out={sum(r.topped_out for r in results)}")


if __name__ == "__main__":  # pragma: no cover
    main()
