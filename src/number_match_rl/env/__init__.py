"""Gymnasium environments for Number Match RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Classic mode: a new row after every match
register(
    id="NumberMatch-Classic-v0",
    entry_point="number_match_rl.env.number_match_env:NumberMatchEnv",
    kwargs={"mode": "classic"},
)

# Time mode: each step advances the row countdown
register(
    id="NumberMatch-Time-v0",
    entry_point="number_match_rl.env.number_match_env:NumberMatchEnv",
    kwargs={"mode": "time"},
)

__all__ = ["NumberMatch-Classic-v0", "NumberMatch-Time-v0"]
