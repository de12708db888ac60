"""Gymnasium environments over a game session."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .falling_block_env import ACTIONS, FallingBlockEnv

ENV_ID = "FallingBlock-10x20-v0"

register(
    id=ENV_ID,
    entry_point="tetris_ai.env.falling_block_env:FallingBlockEnv",
)

__all__ = ["ACTIONS", "ENV_ID", "FallingBlockEnv"]
