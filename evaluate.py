# -*- coding: utf-8 -*-
"""
Play games with a random player and report the statistics of the engine.
"""
import logging
from collections import Counter

import numpy as np
from tqdm import trange

from mergegrid.envs import GameConfig, GameSession

logger = logging.getLogger(__name__)


def evaluate(length: int = 100, size: int = 4, seed: int | None = None) -> dict[str, dict[int, int]]:
    """
    Play random games until they are over.

    Parameters
    ----------
    length : int, optional
        The number of games to play (default is 100).
    size : int, optional
        The size of the grid (default is 4).
    seed : int, optional
        Seed of both the game and the player.

    Returns
    -------
    dict[str, dict[int, int]]
        Frequency of the max tile reached, and frequency of the values of the spawned tiles.
    """
    game = GameSession(GameConfig(size=size, seed=seed))
    rng = np.random.default_rng(seed)
    max_tiles, scores = [], []
    spawned = Counter()

    with trange(length) as period:
        for num in period:
            game.reset()
            spawned.update(int(value) for value in game.observation[game.observation != 0])

            # ##: Play a game.
            while not game.is_finished:
                actions = game.legal_actions
                game.step(actions[int(rng.integers(len(actions)))])

                if game.last_spawn is not None:
                    spawned[game.last_spawn.tile.value] += 1

                # ##: Log.
                period.set_description(f"Evaluation: {num + 1}")
                period.set_postfix(score=game.score, max=game.grid.max_tile())

            # ##: Save max cells.
            max_tiles.append(int(np.max(game.observation)))
            scores.append(game.score)

    logger.info("Mean score over %d games: %.1f", length, float(np.mean(scores)))
    return {"max_tile": dict(Counter(max_tiles)), "spawned": dict(spawned)}


if __name__ == "__main__":
    from argparse import ArgumentParser

    parser = ArgumentParser()
    parser.add_argument("--games", type=int, default=100)
    parser.add_argument("--size", type=int, default=4)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    result = evaluate(length=args.games, size=args.size, seed=args.seed)
    total = sum(result["spawned"].values())
    print(f"Max tiles: {dict(sorted(result['max_tile'].items()))}")
    print(f"Spawned 4: {result['spawned'].get(4, 0) / total:.1%} of {total} tiles")
