from __future__ import annotations

import argparse
import logging
from typing import List

from number_match_rl.game import GameConfig, GameMode, NumberMatchGame


logger = logging.getLogger(__name__)


def play_greedy(game: NumberMatchGame, mode: GameMode | str = GameMode.CLASSIC,
                seed: int | None = None, max_moves: int = 10_000) -> int:
    """Play one game by always clearing the longest subset that hits the target.

    Classic mode only grows on matches, so the game stops early when the
    target is unreachable. In time mode the countdown is ticked whenever no
    match exists, letting new rows arrive.
    """
    game.start_game(mode, seed=seed)
    moves = 0
    while game.is_playing and moves < max_moves:
        match = game.find_match()
        if match is None:
            if game.mode is GameMode.TIME:
                game.tick()
                moves += 1
                continue
            logger.info("Target %d unreachable with %d blocks, stopping", game.target, len(game.grid))
            break
        for block in match:
            game.toggle_block(block.id)
            moves += 1
    return game.score


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--mode", choices=[m.value for m in GameMode], default=GameMode.CLASSIC.value)
    p.add_argument("--seed", type=int, default=0)
    args = p.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    game = NumberMatchGame(GameConfig(random_seed=args.seed))
    scores: List[int] = []
    for ep in range(args.episodes):
        score = play_greedy(game, args.mode, seed=args.seed + ep)
        scores.append(score)
        logger.info("Episode %d: score=%d level=%d matches=%d", ep + 1, score, game.level, game.match_count)
    print(f"Greedy agent mean score: {sum(scores) / max(1, len(scores)):.1f}")


if __name__ == "__main__":  # pragma: no cover
    main()
