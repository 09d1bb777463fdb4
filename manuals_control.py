# -*- coding: utf-8 -*-
"""
Play 2048 Game
"""
import logging
from typing import Any

from mergegrid.core import Cell, Tile
from mergegrid.envs import GameConfig, GameSession
from mergegrid.utils.windows import WindowBoard

logger = logging.getLogger(__name__)


def redraw(window: WindowBoard, game: GameSession):
    """
    Redraw the game board.

    Parameters
    ----------
    window: WindowBoard
        Class to draw the game board

    game: GameSession
        Game to draw
    """
    window.show_image(game.observation, score=game.score, finished=game.is_finished)


def reset(game: GameSession, window: WindowBoard):
    """
    Reset and redraw the game board.

    Parameters
    ----------
    game: GameSession
        The game session

    window: WindowBoard
        Class to draw the game board
    """
    # ##: Reset the game.
    game.reset()

    # ##: Redraw the game board.
    redraw(window, game)


def key_handler(game: GameSession, window: WindowBoard, event: Any):
    """
    Handle the keyboard.

    Parameters
    ----------
    game: GameSession
        The game session

    window: WindowBoard
        Class to draw the game board

    event: Any
        event to handle
    """
    logger.debug("pressed %s", event.key)

    if event.key == "escape":
        window.close()
        return None

    if event.key == "backspace":
        reset(game, window)
        return None

    if game.handle_input(event.key):
        logger.info("reward=%d score=%d", game.reward, game.score)
        redraw(window, game)
    return None


def swipe_handler(game: GameSession, window: WindowBoard, start: tuple, end: tuple):
    """
    Handle a drag on the board as a swipe.

    Parameters
    ----------
    game: GameSession
        The game session

    window: WindowBoard
        Class to draw the game board

    start: tuple
        Position where the drag started

    end: tuple
        Position where the drag ended
    """
    if game.handle_swipe(start, end):
        redraw(window, game)


def tile_removed(tile: Tile, cell: Cell):
    """Log the tiles leaving the board."""
    logger.debug("tile #%d (%d) removed from (%d, %d)", tile.uid, tile.value, cell.x, cell.y)


if __name__ == "__main__":
    from argparse import ArgumentParser

    parser = ArgumentParser()
    parser.add_argument("--size", type=int, default=4)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    env = GameSession(GameConfig(size=args.size, seed=args.seed))
    env.add_removal_listener(tile_removed)

    window_board = WindowBoard(title="2048 Game", size=env.size)
    window_board.register_key_handler(lambda event: key_handler(env, window_board, event))
    window_board.register_swipe_handler(lambda start, end: swipe_handler(env, window_board, start, end))

    redraw(window_board, env)

    # Blocking event loop
    window_board.show(block=True)
