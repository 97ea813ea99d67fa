from __future__ import annotations

import argparse
import logging
import random
from typing import List

import gymnasium as gym
import numpy as np

import number_match_rl.env  # noqa: F401


logger = logging.getLogger(__name__)

ENV_IDS = {"classic": "NumberMatch-Classic-v0", "time": "NumberMatch-Time-v0"}


def run_random(episodes: int = 5, mode: str = "classic", seed: int = 0, max_steps: int = 500) -> List[int]:
    rng = random.Random(seed)
    env = gym.make(ENV_IDS[mode], max_episode_steps=max_steps)
    scores: List[int] = []
    for ep in range(episodes):
        obs, info = env.reset(seed=seed + ep)
        total_reward = 0.0
        done = False
        while not done:
            # Prefer occupied slots if any
            valid = np.flatnonzero(info["action_mask"])
            if valid.size:
                action = int(rng.choice(list(valid)))
            else:
                action = int(env.action_space.sample())
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += float(reward)
            done = terminated or truncated
        scores.append(int(info["score"]))
        logger.info("Episode %d: score=%d level=%d reward=%.1f", ep + 1, info["score"], info["level"], total_reward)
    env.close()
    return scores


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--mode", choices=sorted(ENV_IDS), default="classic")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--max_steps", type=int, default=500)
    args = p.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    scores = run_random(args.episodes, args.mode, args.seed, args.max_steps)
    print(f"Random agent mean score: {sum(scores) / max(1, len(scores)):.1f}")


if __name__ == "__main__":  # pragma: no cover
    main()
