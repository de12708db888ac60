from __future__ import annotations

import gymnasium as gym
import numpy as np

from tetris_ai.env import ACTIONS, ENV_ID, FallingBlockEnv
from tetris_ai.game import Intent
from tetris_ai.session import GameSettings, PlayerType


def test_spaces_match_board():
    env = FallingBlockEnv(GameSettings(width=8, height=16))
    assert env.observation_space.shape == (16, 8)
    assert env.action_space.n == len(ACTIONS) == 6
    assert ACTIONS[-1] is None


def test_reset_returns_observation_with_falling_piece():
    env = FallingBlockEnv()
    obs, info = env.reset(seed=3)
    assert obs.shape == (20, 10) and obs.dtype == np.int8
    assert env.observation_space.contains(obs)
    assert info["score"] == 0 and info["lines_cleared_total"] == 0
    assert info["suggested_move"] is not None


def test_seeded_resets_are_reproducible():
    env = FallingBlockEnv()
    env.reset(seed=42)
    first = [env.session.board.generator.next() for _ in range(10)]
    env.reset(seed=42)
    second = [env.session.board.generator.next() for _ in range(10)]
    assert first == second


def test_env_always_drives_a_human_session():
    env = FallingBlockEnv(GameSettings(player_type=PlayerType.AI))
    env.reset(seed=0)
    assert env.session.player_type is PlayerType.HUMAN


def test_hard_drops_until_termination():
    env = FallingBlockEnv(terminal_penalty=-5.0)
    env.reset(seed=1)
    hard_drop = ACTIONS.index(Intent.HARD_DROP)
    terminated = False
    reward = 0.0
    for _ in range(200):
        obs, reward, terminated, truncated, info = env.step(hard_drop)
        assert not truncated
        if terminated:
            break
    assert terminated
    assert reward == -5.0


def test_noop_step_applies_gravity():
    env = FallingBlockEnv()
    env.reset(seed=5)
    y = env.session.board.current.y
    env.step(len(ACTIONS) - 1)
    assert env.session.board.current.y == y + 1


def test_rgb_render():
    env = FallingBlockEnv(render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (20 * 12, 10 * 12, 3)


def test_registered_id():
    env = gym.make(ENV_ID)
    obs, _ = env.reset(seed=0)
    assert obs.shape == (20, 10)
    env.close()
