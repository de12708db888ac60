from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from tetris_ai.game.intents import Intent
from tetris_ai.score import JsonScoreStore, ScoreLedger
from tetris_ai.session import GameSession, GameSettings, PlayerType, create_session

from .renderer import Renderer


KEY_TO_INTENT: Dict[int, Intent] = {
    pygame.K_LEFT: Intent.MOVE_LEFT,
    pygame.K_RIGHT: Intent.MOVE_RIGHT,
    pygame.K_UP: Intent.ROTATE_CW,
    pygame.K_DOWN: Intent.SOFT_DROP,
    pygame.K_SPACE: Intent.HARD_DROP,
}


def _on_key(session: GameSession, key: int) -> bool:
    """Apply one key press; False means quit."""
    if key == pygame.K_ESCAPE:
        return False
    if key == pygame.K_p:
        session.toggle_pause()
    elif key == pygame.K_r:
        session.restart()
    elif key in KEY_TO_INTENT:
        session.handle(KEY_TO_INTENT[key])
    return True


def run(settings: GameSettings, ledger: Optional[ScoreLedger] = None) -> None:
    """Interactive window; gravity ticks at the level's drop interval, input is applied as it arrives."""
    session = create_session(settings, ledger)
    renderer = Renderer()

    pygame.init()
    try:
        screen = pygame.display.set_mode(renderer.window_size(settings.width, settings.height))
        pygame.display.set_caption(f"Falling Blocks - {settings.player_type.value}")
        frame_clock = pygame.time.Clock()
        gravity_ms = settings.drop_interval_ms()
        next_tick = pygame.time.get_ticks() + gravity_ms
        session.start()

        while True:
            events = pygame.event.get()
            if any(e.type == pygame.QUIT for e in events):
                break
            if not all(_on_key(session, e.key) for e in events if e.type == pygame.KEYDOWN):
                break

            now = pygame.time.get_ticks()
            if now >= next_tick:
                session.tick()
                next_tick = now + gravity_ms

            renderer.draw(screen, session.snapshot())
            frame_clock.tick(60)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--player", choices=[t.value for t in PlayerType], default=PlayerType.HUMAN.value)
    p.add_argument("--level", type=int, default=6)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--name", type=str, default="Player")
    p.add_argument("--scores", type=str, default="data/highscores.json")
    p.add_argument("--log-level", default="INFO")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = GameSettings(level=args.level, player_type=PlayerType(args.player), seed=args.seed,
                            player_name=args.name)
    with ScoreLedger(JsonScoreStore(args.scores)) as ledger:
        run(settings, ledger)


if __name__ == "__main__":  # pragma: no cover
    main()
