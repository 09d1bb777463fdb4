"""Game session controller: one grid, its score and the game-over signal."""

import logging

from numpy import ndarray

from mergegrid.core.directions import Direction, parse_direction
from mergegrid.core.errors import InvalidDirectionError
from mergegrid.core.gamemove import has_any_move, legal_directions, move
from mergegrid.core.grid import Grid, RemovalListener
from mergegrid.core.tiles import Cell
from mergegrid.envs.config import GameConfig
from mergegrid.utils.gestures import detect_swipe

logger = logging.getLogger(__name__)


class GameSession:
    """
    2048 game session.

    This class owns the grid and runs, for each input, the whole sequence of a turn: legality check,
    move, merge resolution, spawn of a new tile and game-over detection.
    """

    def __init__(self, config: GameConfig | None = None):
        """
        Initialize the session and start a first game.

        Parameters
        ----------
        config : GameConfig, optional
            Parameters of the session (default is a 4x4 grid).
        """
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(size=self.config.size, spawn_probs=self.config.spawn_probs, seed=self.config.seed)
        self.size = self.config.size

        self._score = 0
        self._reward = 0
        self._finished = False
        self._busy = False
        self._last_spawn: Cell | None = None

        self.reset()

    @property
    def score(self) -> int:
        """Total of the doubled values produced since the start of the game."""
        return self._score

    @property
    def reward(self) -> int:
        """Score obtained by the last move."""
        return self._reward

    @property
    def is_finished(self) -> bool:
        """True once no move is possible; input is ignored until ``reset``."""
        return self._finished

    @property
    def observation(self) -> ndarray:
        """The grid as a 2D array indexed ``[y, x]``."""
        return self.grid.to_array()

    @property
    def last_spawn(self) -> Cell | None:
        """Cell of the tile spawned by the last move, None if the last move was illegal."""
        return self._last_spawn

    @property
    def legal_actions(self) -> list[Direction]:
        """Directions that would change the grid."""
        return legal_directions(self.grid)

    def add_removal_listener(self, listener: RemovalListener) -> None:
        """Be notified of every tile consumed by a merge or removed by a restart."""
        self.grid.add_removal_listener(listener)

    def reset(self, seed: int | None = None) -> ndarray:
        """
        Clear the grid, reset the score and spawn the starting tiles.

        Parameters
        ----------
        seed : int, optional
            Reseed the random generator for a reproducible game.

        Returns
        -------
        ndarray
            The new grid.
        """
        if seed is not None:
            self.grid.seed(seed)

        self.grid.clear()
        self._score = 0
        self._reward = 0
        self._last_spawn = None
        for _ in range(self.config.start_tiles):
            self.grid.spawn_tile()
        self._finished = not has_any_move(self.grid)
        return self.observation

    def step(self, direction: Direction | int) -> tuple[ndarray, int, bool]:
        """
        Play one turn in the given direction.

        Parameters
        ----------
        direction : Direction | int
            The direction of the move, or its action number (0: left, 1: up, 2: right, 3: down).

        Returns
        -------
        tuple[ndarray, int, bool]
            A tuple containing:
            - The grid after the turn (ndarray)
            - The score obtained from this move (int)
            - Whether the game is over (bool)

        Notes
        -----
        - An illegal move leaves the grid untouched, spawns nothing and gives no score.
        - Input received while a turn is running, or after the game is over, is ignored.
        """
        if self._play(Direction(direction)):
            return self.observation, self._reward, self._finished
        return self.observation, 0, self._finished

    def _play(self, direction: Direction) -> bool:
        """Run the turn sequence under the input lock and tell if the grid changed."""
        if self._finished or self._busy:
            logger.debug('Input %s ignored', direction.name.lower())
            return False

        self._busy = True
        try:
            with self.grid.batch_removals():
                moved, gained = move(self.grid, direction)
                self._last_spawn = None
                self._reward = gained
                if moved:
                    self._score += gained
                    self._last_spawn = self.grid.spawn_tile()
                    if not has_any_move(self.grid):
                        self._finished = True
                        logger.info('Game over with score %d (max tile %d)', self._score, self.grid.max_tile())
        finally:
            self._busy = False
        return moved

    def handle_input(self, key: object) -> bool:
        """
        Play a turn from a raw input, ignoring anything that is not a direction.

        Parameters
        ----------
        key : object
            Key name, action number, ``Direction`` or None.

        Returns
        -------
        bool
            True if the input was a legal move and the grid changed.
        """
        try:
            direction = parse_direction(key)
        except InvalidDirectionError:
            logger.debug('Ignoring input %r', key)
            return False

        if direction is None:
            return False
        return self._play(direction)

    def handle_swipe(self, start: tuple[float, float], end: tuple[float, float]) -> bool:
        """
        Play a turn from a touch gesture.

        Parameters
        ----------
        start : tuple[float, float]
            Screen position where the touch started.
        end : tuple[float, float]
            Screen position where the touch ended.

        Returns
        -------
        bool
            True if the gesture was a swipe in a legal direction.
        """
        return self.handle_input(detect_swipe(start, end, sensitivity=self.config.swipe_sensitivity))

    def render(self) -> None:
        """
        Render the game board. This method prints the current state of the game board to the console.
        """
        print(f'Score: {self._score}')
        for row in self.observation.tolist():
            print(' \t'.join(map(str, row)))
        if self._finished:
            print('Game over!')
