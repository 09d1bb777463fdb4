"""
The N×N grid of cells: lookup, grouping by rows and columns, empty cells and tile spawning.
"""

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager

from numpy import int64, ndarray, zeros
from numpy.random import PCG64DXSM, Generator, default_rng

from mergegrid.core.errors import NoEmptyCellError, OutOfBoundsError
from mergegrid.core.tiles import Cell, Tile

logger = logging.getLogger(__name__)

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Module-level generator, used when the grid gets neither a generator nor a seed.
_GENERATOR = default_rng(PCG64DXSM())

RemovalListener = Callable[[Tile, Cell], None]


class Grid:
    """
    Fixed square collection of cells.

    Cells are created once, here, and are never created or destroyed afterwards: only the tile
    occupancy changes. Groups (rows or columns) are rebuilt as fresh lists on every request.

    Parameters
    ----------
    size : int
        Number of cells on each side of the grid.
    spawn_probs : dict[int, float], optional
        Probability of each value for a spawned tile.
    rng : Generator, optional
        Random generator used for spawning. Takes precedence over ``seed``.
    seed : int, optional
        Seed for a dedicated random generator.
    """

    def __init__(
        self,
        size: int = 4,
        spawn_probs: dict[int, float] | None = None,
        rng: Generator | None = None,
        seed: int | None = None,
    ):
        if size < 1:
            raise ValueError(f'size must be > 0, got {size}')

        self.size = size
        probs = spawn_probs if spawn_probs is not None else TILE_SPAWN_PROBS
        self._tile_values = list(probs.keys())
        self._tile_probs = list(probs.values())
        self._rng = rng if rng is not None else (default_rng(seed) if seed is not None else _GENERATOR)
        self._listeners: list[RemovalListener] = []
        self._pending: list[tuple[Tile, Cell]] | None = None

        # ##: Same order as the cell list of the browser game: x-major, then y.
        self._cells = [Cell(x, y) for x in range(size) for y in range(size)]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def seed(self, seed: int | None) -> None:
        """Replace the random generator by a freshly seeded one."""
        self._rng = default_rng(seed) if seed is not None else _GENERATOR

    def cell_at(self, x: int, y: int) -> Cell:
        """
        Return the cell at the given coordinates.

        Raises
        ------
        OutOfBoundsError
            If a coordinate falls outside the grid.
        """
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise OutOfBoundsError(f'({x}, {y}) is outside a {self.size}x{self.size} grid')
        return self._cells[x * self.size + y]

    def empty_cells(self) -> list[Cell]:
        """All the cells without tile, in a stable order."""
        return [cell for cell in self._cells if cell.tile is None]

    def occupied_cells(self) -> list[Cell]:
        """All the cells holding a tile, in a stable order."""
        return [cell for cell in self._cells if cell.tile is not None]

    def pick_random_empty_cell(self) -> Cell:
        """
        Uniformly sample one empty cell.

        Returns
        -------
        Cell
            A cell without tile.

        Raises
        ------
        NoEmptyCellError
            If every cell holds a tile.
        """
        empty = self.empty_cells()
        if not empty:
            raise NoEmptyCellError('Cannot pick an empty cell on a full grid')
        return empty[int(self._rng.integers(len(empty)))]

    def random_tile_value(self) -> int:
        """Draw the value of a new tile from the spawn probabilities."""
        return int(self._rng.choice(self._tile_values, p=self._tile_probs))

    def spawn_tile(self, value: int | None = None) -> Cell:
        """
        Place a new tile into a random empty cell.

        Parameters
        ----------
        value : int, optional
            Value of the new tile. Drawn from the spawn probabilities when omitted.

        Returns
        -------
        Cell
            The cell now holding the new tile.
        """
        cell = self.pick_random_empty_cell()
        cell.tile = Tile(value if value is not None else self.random_tile_value())
        logger.debug('Spawned %d at (%d, %d)', cell.tile.value, cell.x, cell.y)
        return cell

    def groups_by_row(self, reversed: bool = False) -> list[list[Cell]]:
        """
        Group the cells by row.

        Parameters
        ----------
        reversed : bool, optional
            Produce each row from right to left instead of left to right.

        Returns
        -------
        list[list[Cell]]
            ``size`` fresh lists, row ``y`` at index ``y``.
        """
        groups = [[self.cell_at(x, y) for x in range(self.size)] for y in range(self.size)]
        if reversed:
            return [group[::-1] for group in groups]
        return groups

    def groups_by_column(self, reversed: bool = False) -> list[list[Cell]]:
        """
        Group the cells by column.

        Parameters
        ----------
        reversed : bool, optional
            Produce each column from bottom to top instead of top to bottom.

        Returns
        -------
        list[list[Cell]]
            ``size`` fresh lists, column ``x`` at index ``x``.
        """
        groups = [[self.cell_at(x, y) for y in range(self.size)] for x in range(self.size)]
        if reversed:
            return [group[::-1] for group in groups]
        return groups

    def add_removal_listener(self, listener: RemovalListener) -> None:
        """Register a callback notified with ``(tile, cell)`` whenever a tile leaves the grid."""
        self._listeners.append(listener)

    def remove_tile(self, cell: Cell) -> Tile | None:
        """
        Take the tile out of a cell for good and reset the merge flag of the cell.

        Returns
        -------
        Tile | None
            The removed tile, None if the cell was already empty.
        """
        tile = cell.tile
        if tile is None:
            return None
        cell.tile = None
        cell.merged = False
        self.notify_removed(tile, cell)
        return tile

    def notify_removed(self, tile: Tile, cell: Cell) -> None:
        """Tell the removal listeners that a tile left the given cell, or queue it inside ``batch_removals``."""
        if self._pending is not None:
            self._pending.append((tile, cell))
            return
        for listener in self._listeners:
            listener(tile, cell)

    @contextmanager
    def batch_removals(self) -> Iterator[None]:
        """
        Hold back removal notifications until the block completes.

        Listeners then run on a grid whose update is finished. Notifications queued by a block
        that raises are dropped.
        """
        if self._pending is not None:
            yield
            return

        self._pending = []
        try:
            yield
        finally:
            pending, self._pending = self._pending, None
        for tile, cell in pending:
            self.notify_removed(tile, cell)

    def clear(self) -> None:
        """Remove every tile and reset every merge flag."""
        for cell in self._cells:
            self.remove_tile(cell)
            cell.merged = False

    def tile_sum(self) -> int:
        """Sum of the values of all the tiles on the grid."""
        return sum(cell.tile.value for cell in self._cells if cell.tile is not None)

    def max_tile(self) -> int:
        """Highest tile value on the grid, 0 when empty."""
        return max((cell.tile.value for cell in self._cells if cell.tile is not None), default=0)

    def to_array(self) -> ndarray:
        """
        Export the grid as a 2D array.

        Returns
        -------
        ndarray
            Array of shape ``(size, size)`` indexed ``[y, x]``, 0 for an empty cell.
        """
        board = zeros((self.size, self.size), dtype=int64)
        for cell in self.occupied_cells():
            board[cell.y, cell.x] = cell.tile.value
        return board

    def from_array(self, values: Sequence[Sequence[int]] | ndarray) -> None:
        """
        Replace the content of the grid by the given board.

        Parameters
        ----------
        values : array-like
            Rows of tile values indexed ``[y][x]``, 0 for an empty cell.
        """
        if len(values) != self.size or any(len(row) != self.size for row in values):
            raise ValueError(f'Expected a {self.size}x{self.size} board')
        invalid = [int(value) for row in values for value in row if value and (value < 0 or value & (value - 1))]
        if invalid:
            raise ValueError(f'Tile values must be powers of two, got {invalid}')

        self.clear()
        for y, row in enumerate(values):
            for x, value in enumerate(row):
                if value:
                    self.cell_at(x, y).tile = Tile(int(value))

    def __repr__(self) -> str:
        return f'Grid(size={self.size}, tiles={len(self.occupied_cells())})'
