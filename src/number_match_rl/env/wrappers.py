from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .number_match_env import _compute_action_mask


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If a sampled slot is empty, resample uniformly among occupied ones.

    Useful when training without action masking.
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.Discrete)

    def step(self, action):  # type: ignore[override]
        mask = self.get_action_mask()
        idx = int(action)
        if not (0 <= idx < mask.shape[0]) or not bool(mask[idx]):
            valid_idxs = np.flatnonzero(mask)
            if valid_idxs.size > 0:
                action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.env.unwrapped.game)
