from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_ai.game.intents import Intent
from tetris_ai.game.pieces import TetrominoType
from tetris_ai.session import GameSettings, GameSession, PlayerType, UiState, create_session

# Index order of the discrete action space; the last entry is a no-op.
ACTIONS: Tuple[Optional[Intent], ...] = (*Intent, None)


class FallingBlockEnv(gym.Env):
    """One human-type session; each step applies an action, then one gravity tick."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, settings: Optional[GameSettings] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 terminal_penalty: float = -10.0) -> None:
        super().__init__()
        self.settings = replace(settings or GameSettings(), player_type=PlayerType.HUMAN)
        self.render_mode = render_mode
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "lines": 1.0,    # per line cleared
            "tetris": 4.0,   # extra for a 4-line clear
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        h, w = self.settings.height, self.settings.width
        n_types = len(TetrominoType)
        # Locked cells carry their tag, the falling piece its negated tag.
        self.observation_space = spaces.Box(low=-n_types, high=n_types, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(ACTIONS))

        self.session: GameSession = create_session(self.settings)

    def _get_obs(self) -> np.ndarray:
        return self.session.board.snapshot().overlay().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.session.score,
            "final_score": self.session.final_score,
            "lines_cleared_total": self.session.lines_total,
            "suggested_move": self.session.search.find_best_move(self.session.board.snapshot()),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.settings.seed = seed
        self.session = create_session(self.settings)
        self.session.start()
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        intent = ACTIONS[int(action)]
        if intent is not None:
            self.session.handle(intent)
        lines = self.session.take_cleared_lines()
        if self.session.ui_state is UiState.PLAY:
            self.session.tick()
            lines += self.session.take_cleared_lines()

        terminated = self.session.ui_state is UiState.GAME_OVER
        reward = self.reward_weights["lines"] * lines
        if lines == 4:
            reward += self.reward_weights["tetris"]
        if terminated:
            reward += self.terminal_penalty
        return self._get_obs(), float(reward), terminated, False, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self._get_obs()
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                color = (70, 200, 120) if grid[y, x] else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
