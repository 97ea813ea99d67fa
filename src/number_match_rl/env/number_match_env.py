from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from number_match_rl.game import GameConfig, GameMode, NumberMatchGame, ScoringRules


logger = logging.getLogger(__name__)


def _compute_action_mask(game: NumberMatchGame) -> np.ndarray:
    # One action per grid slot; only occupied slots can be toggled
    mask = np.zeros((game.grid.capacity,), dtype=np.bool_)
    if game.is_playing and not game.paused:
        mask[: min(len(game.grid), game.grid.capacity)] = True
    return mask


class NumberMatchEnv(gym.Env):
    """Select grid slots until their values sum to the target.

    Actions index grid slots (row-major, row 0 at the bottom); a step toggles
    the block in that slot. The reward is the engine's score delta plus the
    shaping penalties below. In time mode every step also advances the
    countdown by `seconds_per_step` seconds.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 4}

    def __init__(self, mode: str = "classic", config: Optional[GameConfig] = None,
                 rules: Optional[ScoringRules] = None,
                 render_mode: Optional[str] = None,
                 seconds_per_step: int = 1,
                 invalid_action_penalty: float = -1.0,
                 over_target_penalty: float = -1.0,
                 terminal_penalty: float = -10.0,
                 max_episode_steps: int = 2000) -> None:
        super().__init__()
        self.mode = GameMode(mode)
        self.game = NumberMatchGame(config, rules)
        self.render_mode = render_mode

        if seconds_per_step < 0:
            raise ValueError("seconds_per_step must be non-negative")
        self.seconds_per_step = int(seconds_per_step)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.over_target_penalty = float(over_target_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        cfg = self.game.config
        shape = (cfg.rows, cfg.columns)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=cfg.max_number, shape=shape, dtype=np.int8),
                "selected": spaces.Box(low=0, high=1, shape=shape, dtype=np.int8),
                "target": spaces.Discrete(cfg.max_target + 1),
                "current_sum": spaces.Discrete(cfg.max_target + 1),
                # 0 in classic mode
                "time_left": spaces.Discrete(self.game.rules.time_mode_duration + 1),
            }
        )
        self.action_space = spaces.Discrete(self.game.grid.capacity)

        self._last_obs: Optional[Dict[str, Any]] = None
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        time_left = self.game.time_left
        obs: Dict[str, Any] = {
            "grid": self.game.grid.values_array(),
            "selected": self.game.grid.selected_array(),
            "target": int(self.game.target),
            "current_sum": int(self.game.current_sum),
            "time_left": int(time_left) if time_left is not None else 0,
        }
        return obs

    def _get_info(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "level": self.game.level,
            "combo": self.game.combo,
            "matches": self.game.match_count,
            "steps": self._steps,
        }
        return info

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.start_game(self.mode, seed=seed)
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int | np.integer):
        slot = int(action)
        score_before = self.game.score
        reward_components: Dict[str, float] = {}

        block = self.game.grid.block_at(slot) if slot < self.game.grid.capacity else None
        if block is None or not self.game.is_playing:
            reward_components["invalid"] = self.invalid_action_penalty
            result = None
        else:
            result = self.game.toggle_block(block.id)
            if result.over_target:
                reward_components["over_target"] = self.over_target_penalty

        if self.mode is GameMode.TIME:
            for _ in range(self.seconds_per_step):
                if not self.game.is_playing:
                    break
                self.game.tick()

        reward_components["score"] = float(self.game.score - score_before)
        terminated = bool(self.game.game_over)
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
            logger.debug("Episode finished after %d steps with score %d", self._steps + 1, self.game.score)
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps and not terminated

        reward = float(sum(reward_components.values()))
        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["matched"] = bool(result.matched) if result is not None else False
        info["leveled_up"] = bool(result.leveled_up) if result is not None else False
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        obs = self._last_obs if self._last_obs is not None else self._get_obs()
        grid = obs["grid"]
        selected = obs["selected"]
        cell = 16
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        top = max(1, self.game.config.max_number)
        for y in range(h):
            # Row 0 is the bottom row on screen
            py = h - 1 - y
            for x in range(w):
                value = int(grid[y, x])
                if value == 0:
                    color = (30, 30, 36)
                elif selected[y, x]:
                    color = (240, 200, 60)
                else:
                    shade = 90 + int(140 * value / top)
                    color = (40, shade, 120)
                img[py * cell : (py + 1) * cell - 1, x * cell : (x + 1) * cell - 1, :] = color
        return img

    def close(self) -> None:
        pass
